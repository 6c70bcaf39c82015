"""
Risk Scoring — Base Types

Data contracts shared by the scorer, the assessment service and the API
layer. Feature names are the snake_case keys used everywhere else.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Mapping

from propr.utils.exceptions import InvalidInputError

# ── Feature layout ────────────────────────────────────────────────────────────
CONTINUOUS_FEATURES = ("age", "bmi", "erp_length", "smis_score")
BINARY_FEATURES = ("prior_surgery", "rectal_fixation")
FEATURE_ORDER = CONTINUOUS_FEATURES + BINARY_FEATURES

# Keys the browser form posts
FEATURE_ALIASES = {
    "erpLength": "erp_length",
    "smisScore": "smis_score",
    "priorSurgery": "prior_surgery",
    "rectalFixation": "rectal_fixation",
}

_TRUE_STRINGS = {"true", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "no", "n", "0"}

# ── Tier thresholds (closed-open; boundary values go to the higher tier) ─────
LOW_RISK_THRESHOLD = 0.15
HIGH_RISK_THRESHOLD = 0.40


class RiskCategory(str, Enum):
    """
    Recurrence risk tier.

    LOW       – p < 0.15
    MODERATE  – 0.15 <= p < 0.40
    HIGH      – p >= 0.40
    """
    LOW      = "Low Risk"
    MODERATE = "Moderate Risk"
    HIGH     = "High Risk"


def parse_numeric(name: str, value: Any) -> float:
    """
    Strictly convert a raw form value to a finite float.

    Numbers and numeric strings are accepted. Empty or unparsable text,
    booleans, NaN and infinities raise InvalidInputError instead of being
    coerced to zero.
    """
    if value is None:
        raise InvalidInputError(f"{name} is required", field=name)
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number, got a boolean", field=name)
    if isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            raise InvalidInputError(
                f"{name} must be a number, got {value!r}",
                field=name,
                details={"value": value},
            ) from None
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"{name} must be a number, got {type(value).__name__}",
                field=name,
            ) from None
        except OverflowError:
            raise InvalidInputError(
                f"{name} is too large to be a finite number", field=name
            ) from None
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {number}", field=name)
    return number


def parse_flag(name: str, value: Any) -> bool:
    """Convert a yes/no form value to bool; anything unrecognised is rejected."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise InvalidInputError(
        f"{name} must be yes/no, got {value!r}",
        field=name,
        details={"value": repr(value)},
    )


@dataclass(frozen=True)
class PatientFeatures:
    """
    The six measurements for one assessment.

    Built fresh for every calculation and never modified afterwards.
    """
    age: float               # years
    bmi: float               # kg/m²
    erp_length: float        # external rectal prolapse length, cm
    smis_score: float        # St. Mark's Incontinence Score, 0-24
    prior_surgery: bool = False
    rectal_fixation: bool = False

    @classmethod
    def defaults(cls) -> "PatientFeatures":
        """Starting values of a blank calculator form."""
        return cls(
            age=50.0,
            bmi=25.0,
            erp_length=5.0,
            smis_score=5.0,
            prior_surgery=False,
            rectal_fixation=False,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PatientFeatures":
        """
        Build features from raw form values (snake_case or camelCase keys).

        Raises:
            InvalidInputError: a field is missing or cannot be parsed.
        """
        normalised = {FEATURE_ALIASES.get(key, key): value for key, value in data.items()}
        missing = [name for name in FEATURE_ORDER if name not in normalised]
        if missing:
            raise InvalidInputError(
                f"Missing patient feature(s): {', '.join(missing)}",
                field=missing[0],
                details={"missing": missing},
            )
        values: Dict[str, Any] = {
            name: parse_numeric(name, normalised[name]) for name in CONTINUOUS_FEATURES
        }
        values.update(
            {name: parse_flag(name, normalised[name]) for name in BINARY_FEATURES}
        )
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of one scoring call."""
    probability: float
    risk_category: RiskCategory
    linear_predictor: float
    # coefficient × model input for every feature, keyed by feature name
    contributions: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "probability": self.probability,
            "risk_category": self.risk_category.value,
            "linear_predictor": self.linear_predictor,
            "contributions": dict(self.contributions),
        }
