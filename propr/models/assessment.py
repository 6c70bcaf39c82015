"""
Assessment API Models
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List

from propr.core.scoring import PatientFeatures


class AssessmentRequest(BaseModel):
    """The six values collected by the calculator form."""
    model_config = ConfigDict(
        json_schema_extra={"example": {
            "age": 50, "bmi": 25, "erp_length": 5.0, "smis_score": 5,
            "prior_surgery": False, "rectal_fixation": False
        }}
    )

    age: float = Field(..., gt=0, allow_inf_nan=False, description="Age in years")
    bmi: float = Field(..., gt=0, allow_inf_nan=False, description="Body mass index, kg/m²")
    erp_length: float = Field(..., ge=0, allow_inf_nan=False, description="External rectal prolapse length, cm")
    smis_score: float = Field(..., ge=0, le=24, allow_inf_nan=False, description="St. Mark's Incontinence Score")
    prior_surgery: bool = Field(default=False, description="History of rectal prolapse surgery")
    rectal_fixation: bool = Field(default=False, description="Rectal fixation performed")

    def to_features(self) -> PatientFeatures:
        return PatientFeatures(**self.model_dump())


class AssessmentResponse(BaseModel):
    """Scored result as rendered by the results screen."""
    probability: float
    probability_percent: str
    risk_category: str
    linear_predictor: float
    recommendations: List[str]
    contributions: Dict[str, float]
    features: Dict[str, Any]


class ModelInfoResponse(BaseModel):
    """Model constants, thresholds and display metadata."""
    intercept: float
    coefficients: Dict[str, float]
    feature_stats: Dict[str, Dict[str, float]]
    binary_features: List[str]
    odds_ratios: Dict[str, float]
    thresholds: Dict[str, float]
    performance: Dict[str, Any]
    feature_notes: Dict[str, List[str]]
    defaults: Dict[str, Any]
    disclaimer: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
