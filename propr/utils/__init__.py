"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    ProprError,
    InvalidInputError,
    InvalidParameterError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "ProprError",
    "InvalidInputError",
    "InvalidParameterError",
]
