"""
Structured Logging Configuration

Every module logs through the root logger: one line per event on stdout,
optionally mirrored to a plain-text file. Callers attach assessment
context (rejected field, risk category, ...) with
``extra={"context": {...}}`` and it is rendered as trailing key=value pairs.
"""
import logging
import sys
from typing import Any, Dict, Iterable, Optional
from datetime import datetime, timezone

# Marks handlers installed by setup_logging so re-configuration only
# replaces its own handlers.
_HANDLER_TAG = "_propr_handler"

# Library loggers that are too chatty at INFO for a request-per-click service
DEFAULT_QUIET_LOGGERS = ("uvicorn.access", "httpx")


def _render_context(context: Optional[Dict[str, Any]]) -> str:
    if not context:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in context.items())


class StructuredFormatter(logging.Formatter):
    """``[timestamp] LEVEL [logger] message key=value ...``"""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'
    }

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        context = _render_context(getattr(record, "context", None))

        if self.use_color:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            reset = self.COLORS['RESET']
        else:
            color = reset = ""

        line = (
            f"{color}[{timestamp}] {record.levelname:8} [{record.name}] "
            f"{record.getMessage()}{context}{reset}"
        )
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


class PlainFormatter(logging.Formatter):
    """File output: ``asctime | LEVEL | logger | message key=value ...``"""

    def __init__(self):
        super().__init__('%(asctime)s | %(levelname)s | %(name)s | %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _render_context(getattr(record, "context", None))
        if not context:
            return line
        # keep any traceback after the context
        head, sep, tail = line.partition("\n")
        return f"{head}{context}{sep}{tail}"


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    quiet_loggers: Iterable[str] = DEFAULT_QUIET_LOGGERS,
) -> None:
    """
    Configure application-wide logging.

    Safe to call repeatedly: handlers from an earlier call are swapped out,
    handlers installed by anything else (test capture, uvicorn) are kept.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        quiet_loggers: Logger names held at WARNING regardless of ``level``

    Raises:
        ValueError: ``level`` is not a logging level name.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))

    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(use_color=sys.stdout.isatty()))
    handlers = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(PlainFormatter())
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _HANDLER_TAG, True)
        root_logger.addHandler(handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
