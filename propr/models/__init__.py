from .assessment import (
    AssessmentRequest,
    AssessmentResponse,
    HealthResponse,
    ModelInfoResponse,
)

__all__ = [
    "AssessmentRequest",
    "AssessmentResponse",
    "HealthResponse",
    "ModelInfoResponse",
]
