"""
Recurrence Risk Scorer

standardize → linear predictor → logistic transform → risk tier.

Usage:
    from propr.core.scoring import RiskScorer, PatientFeatures

    scorer = RiskScorer()
    result = scorer.score(PatientFeatures.defaults())
    print(result.probability, result.risk_category.value)
"""
from __future__ import annotations

import math
from numbers import Real
from typing import Any, Optional

import numpy as np

from propr.utils import get_logger
from propr.utils.exceptions import InvalidInputError
from .base import (
    BINARY_FEATURES,
    CONTINUOUS_FEATURES,
    FEATURE_ORDER,
    HIGH_RISK_THRESHOLD,
    LOW_RISK_THRESHOLD,
    PatientFeatures,
    RiskCategory,
    ScoreResult,
)
from .parameters import DEFAULT_PARAMETERS, ModelParameters

logger = get_logger(__name__)


# Doubles adjacent to 0 and 1; a finite predictor never maps onto either bound.
_MIN_PROBABILITY = math.nextafter(0.0, 1.0)
_MAX_PROBABILITY = math.nextafter(1.0, 0.0)


def sigmoid(z: float) -> float:
    """
    Logistic transform 1 / (1 + e^-z), kept strictly inside (0, 1).

    Split on the sign of z so math.exp never overflows for large |z|.
    Beyond |z| of about 37 the exact value rounds to 0 or 1 in double
    precision, so the result is clamped to the nearest representable
    interior value.
    """
    if z >= 0:
        p = 1.0 / (1.0 + math.exp(-z))
    else:
        ez = math.exp(z)
        p = ez / (1.0 + ez)
    return min(max(p, _MIN_PROBABILITY), _MAX_PROBABILITY)


def classify_probability(probability: float) -> RiskCategory:
    """
    Map a probability onto its risk tier.

    Tiers are closed-open, so exactly 0.15 is MODERATE and exactly 0.40 is HIGH.
    """
    if not isinstance(probability, Real) or not (0.0 <= probability <= 1.0):
        raise InvalidInputError(
            f"probability must be within [0, 1], got {probability!r}",
            field="probability",
        )
    if probability < LOW_RISK_THRESHOLD:
        return RiskCategory.LOW
    if probability < HIGH_RISK_THRESHOLD:
        return RiskCategory.MODERATE
    return RiskCategory.HIGH


def _require_finite(name: str, value: Any) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, Real):
        raise InvalidInputError(
            f"{name} must be a number, got {type(value).__name__}", field=name
        )
    try:
        value = float(value)
    except OverflowError:
        raise InvalidInputError(
            f"{name} is too large to be a finite number", field=name
        ) from None
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value}", field=name)
    return value


def _require_flag(name: str, value: Any) -> float:
    if not isinstance(value, (bool, np.bool_)):
        raise InvalidInputError(
            f"{name} must be a boolean, got {type(value).__name__}", field=name
        )
    return 1.0 if value else 0.0


class RiskScorer:
    """
    Logistic-regression recurrence risk model.

    Holds only read-only parameters, so one instance can be shared by
    concurrent requests.
    """

    def __init__(self, parameters: Optional[ModelParameters] = None):
        # ModelParameters validates itself (zero std raises InvalidParameterError)
        self.parameters = parameters or DEFAULT_PARAMETERS

    def model_inputs(self, features: PatientFeatures) -> np.ndarray:
        """
        Design vector in FEATURE_ORDER: standardized continuous values
        followed by the 0/1 indicators.

        Raises:
            InvalidInputError: a numeric value is not a finite number or a
                flag is not a boolean.
        """
        raw = np.array(
            [_require_finite(name, getattr(features, name)) for name in CONTINUOUS_FEATURES],
            dtype=np.float64,
        )
        standardized = (raw - self.parameters.means) / self.parameters.stds
        indicators = np.array(
            [_require_flag(name, getattr(features, name)) for name in BINARY_FEATURES],
            dtype=np.float64,
        )
        return np.concatenate([standardized, indicators])

    def _terms(self, features: PatientFeatures) -> np.ndarray:
        return self.parameters.coefficient_vector * self.model_inputs(features)

    def linear_predictor(self, features: PatientFeatures) -> float:
        return float(self.parameters.intercept + self._terms(features).sum())

    def score(self, features: PatientFeatures) -> ScoreResult:
        """
        Compute recurrence probability and risk tier for one patient.

        Args:
            features: The six patient measurements.

        Returns:
            ScoreResult with probability in (0, 1), the risk category, the
            linear predictor and each feature's contribution to it.

        Raises:
            InvalidInputError: a feature is NaN, infinite or non-numeric.
        """
        terms = self._terms(features)
        linear_predictor = float(self.parameters.intercept + terms.sum())
        probability = sigmoid(linear_predictor)
        category = classify_probability(probability)

        logger.debug(
            f"RiskScorer: lp={linear_predictor:.4f} p={probability:.4f} "
            f"category={category.value}"
        )
        return ScoreResult(
            probability=probability,
            risk_category=category,
            linear_predictor=linear_predictor,
            contributions={name: float(t) for name, t in zip(FEATURE_ORDER, terms)},
        )


_default_scorer = RiskScorer()


def score(features: PatientFeatures) -> ScoreResult:
    """Score with the shipped model parameters."""
    return _default_scorer.score(features)
