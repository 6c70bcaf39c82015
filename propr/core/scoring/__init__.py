"""
Recurrence Risk Scoring

Turns six patient measurements into a recurrence probability and risk tier.

Usage:
    from propr.core.scoring import PatientFeatures, score

    result = score(PatientFeatures(age=62, bmi=21.5, erp_length=6.0,
                                   smis_score=12, prior_surgery=True))
    result.probability, result.risk_category
"""
from .base import (
    PatientFeatures,
    RiskCategory,
    ScoreResult,
    LOW_RISK_THRESHOLD,
    HIGH_RISK_THRESHOLD,
)
from .parameters import DEFAULT_PARAMETERS, FeatureStats, ModelParameters
from .scorer import RiskScorer, classify_probability, score, sigmoid
from .recommendations import format_probability, get_recommendations

__all__ = [
    "PatientFeatures",
    "RiskCategory",
    "ScoreResult",
    "LOW_RISK_THRESHOLD",
    "HIGH_RISK_THRESHOLD",
    "DEFAULT_PARAMETERS",
    "FeatureStats",
    "ModelParameters",
    "RiskScorer",
    "classify_probability",
    "score",
    "sigmoid",
    "format_probability",
    "get_recommendations",
]
