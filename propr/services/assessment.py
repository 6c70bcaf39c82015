"""
Assessment Service - Recurrence Risk Assessment Logic

Sits between the API endpoints and the scorer: parses raw form values,
scores them and assembles what the results screen displays.
"""
from typing import Any, Dict, Mapping, Optional

from propr.core.scoring import (
    HIGH_RISK_THRESHOLD,
    LOW_RISK_THRESHOLD,
    PatientFeatures,
    RiskScorer,
    format_probability,
    get_recommendations,
)
from propr.core.scoring.recommendations import DISCLAIMER, FEATURE_NOTES, MODEL_PERFORMANCE
from propr.utils import get_logger, InvalidInputError

logger = get_logger(__name__)


class AssessmentService:
    """
    Service class to handle the recurrence-risk business logic.
    Decouples the scoring from FastAPI endpoints.
    """

    def __init__(self, scorer: Optional[RiskScorer] = None):
        self.scorer = scorer or RiskScorer()

    def assess(self, features: PatientFeatures) -> Dict[str, Any]:
        """
        Score one patient and build the results payload.

        Args:
            features: Completed form values.

        Returns:
            Probability (raw and formatted), risk category, recommendations,
            per-feature contributions and an echo of the inputs.

        Raises:
            InvalidInputError: a feature value cannot be scored.
        """
        try:
            result = self.scorer.score(features)
        except InvalidInputError as exc:
            logger.warning(
                f"Assessment rejected: {exc.message}",
                extra={"context": {"field": exc.field}},
            )
            raise

        logger.info(
            f"Assessment complete: {format_probability(result.probability)}",
            extra={"context": {"category": result.risk_category.name}},
        )
        payload = result.to_dict()
        payload.update({
            "probability_percent": format_probability(result.probability),
            "recommendations": get_recommendations(result.risk_category),
            "features": features.to_dict(),
        })
        return payload

    def assess_raw(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Parse raw form values strictly, then assess."""
        try:
            features = PatientFeatures.from_mapping(data)
        except InvalidInputError as exc:
            logger.warning(
                f"Assessment rejected: {exc.message}",
                extra={"context": {"field": exc.field}},
            )
            raise
        return self.assess(features)

    def model_info(self) -> Dict[str, Any]:
        """Model description for the calculator's information panel."""
        info = self.scorer.parameters.to_dict()
        info.update({
            "thresholds": {"low_below": LOW_RISK_THRESHOLD, "high_from": HIGH_RISK_THRESHOLD},
            "performance": dict(MODEL_PERFORMANCE),
            "feature_notes": {name: list(notes) for name, notes in FEATURE_NOTES.items()},
            "defaults": PatientFeatures.defaults().to_dict(),
            "disclaimer": DISCLAIMER,
        })
        return info
