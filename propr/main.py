"""
PROPR Recurrence Risk - FastAPI Application

API consumed by the calculator front end:
- Health checks
- Model information (coefficients, thresholds, notes, form defaults)
- Recurrence risk assessment
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from propr.config import settings
from propr.models import (
    AssessmentRequest,
    AssessmentResponse,
    HealthResponse,
    ModelInfoResponse,
)
from propr.services import AssessmentService
from propr.utils import (
    get_logger,
    setup_logging,
    ProprError,
    InvalidInputError,
)

# Load environment variables
load_dotenv()
setup_logging(level=settings.log_level, log_file=settings.log_file)

logger = get_logger(__name__)

_assessment_service = AssessmentService()


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.assessment_service = _assessment_service
    logger.info(f"{settings.app_name} v{settings.app_version} ready to accept requests")
    yield
    logger.info(f"{settings.app_name} shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title=settings.app_name,
    description="Rectal prolapse recurrence risk calculator (PROPR logistic model)",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProprError)
async def propr_error_handler(request: Request, exc: ProprError):
    status_code = 422 if isinstance(exc, InvalidInputError) else 500
    if status_code == 500:
        logger.error(f"{request.url.path}: {exc.code} {exc.message}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def _validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    # rejected values can be NaN/inf, which JSON cannot carry
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "type": error.get("type", "value_error"),
            "msg": error.get("msg", ""),
        }
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = _validation_errors(exc)
    loc = errors[0]["loc"] if errors else []
    field = loc[-1] if loc else "unknown"
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.warning(f"{request.url.path}: rejected {field}: {message}")
    error = InvalidInputError(
        f"{field}: {message}",
        field=field,
        details={"errors": errors},
    )
    return JSONResponse(status_code=422, content=error.to_dict())


# ---- Health ----

def _health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now().isoformat(),
    )


@app.get("/", response_model=HealthResponse)
def root():
    return _health()


@app.get("/health", response_model=HealthResponse)
def health():
    return _health()


# ---- Model & Assessment ----

@app.get(f"{settings.api_prefix}/model", response_model=ModelInfoResponse)
def model_info():
    """Coefficients, standardization statistics, thresholds and display notes."""
    return _assessment_service.model_info()


@app.post(f"{settings.api_prefix}/assess", response_model=AssessmentResponse)
def assess(request: AssessmentRequest):
    """
    Score one patient.

    Out-of-range, non-finite or non-numeric values are rejected with 422;
    they are never coerced to zero.
    """
    return _assessment_service.assess(request.to_features())


@app.post(f"{settings.api_prefix}/assess/form", response_model=AssessmentResponse)
def assess_form(data: Dict[str, Any]):
    """
    Score raw form values as typed by the user (camelCase keys, numbers as
    text, yes/no flags). Unparsable text is rejected with 422.
    """
    return _assessment_service.assess_raw(data)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("propr.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
