"""
Model Parameters

Fitted logistic-regression constants for the PROPR model. Continuous
features are standardized against the development cohort before the
coefficients are applied; the two yes/no features enter as 0/1.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping

import numpy as np

from propr.utils.exceptions import InvalidParameterError
from .base import BINARY_FEATURES, CONTINUOUS_FEATURES, FEATURE_ORDER


@dataclass(frozen=True)
class FeatureStats:
    """Reference-population mean and standard deviation of one feature."""
    mean: float
    std: float


@dataclass(frozen=True)
class ModelParameters:
    """
    Intercept, per-feature coefficients and standardization statistics.

    Validated on construction: every feature in FEATURE_ORDER needs a finite
    coefficient and every continuous feature needs a finite, nonzero std.
    The mappings are stored read-only.
    """
    intercept: float
    coefficients: Mapping[str, float]
    feature_stats: Mapping[str, FeatureStats]
    _coefficient_vector: np.ndarray = field(init=False, repr=False, compare=False)
    _means: np.ndarray = field(init=False, repr=False, compare=False)
    _stds: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not math.isfinite(self.intercept):
            raise InvalidParameterError(
                f"intercept must be finite, got {self.intercept}", parameter="intercept"
            )

        missing = [name for name in FEATURE_ORDER if name not in self.coefficients]
        if missing:
            raise InvalidParameterError(
                f"Missing coefficient(s): {', '.join(missing)}",
                parameter="coefficients",
                details={"missing": missing},
            )
        for name in FEATURE_ORDER:
            if not math.isfinite(self.coefficients[name]):
                raise InvalidParameterError(
                    f"Coefficient for {name} must be finite", parameter=name
                )

        for name in CONTINUOUS_FEATURES:
            stats = self.feature_stats.get(name)
            if stats is None:
                raise InvalidParameterError(
                    f"Missing standardization statistics for {name}", parameter=name
                )
            if not math.isfinite(stats.mean):
                raise InvalidParameterError(
                    f"Mean for {name} must be finite", parameter=name
                )
            if stats.std == 0 or not math.isfinite(stats.std):
                raise InvalidParameterError(
                    f"Standard deviation for {name} must be finite and nonzero, got {stats.std}",
                    parameter=name,
                    details={"std": stats.std},
                )

        object.__setattr__(self, "coefficients", MappingProxyType(dict(self.coefficients)))
        object.__setattr__(self, "feature_stats", MappingProxyType(dict(self.feature_stats)))

        coefficient_vector = np.array([self.coefficients[n] for n in FEATURE_ORDER], dtype=np.float64)
        means = np.array([self.feature_stats[n].mean for n in CONTINUOUS_FEATURES], dtype=np.float64)
        stds = np.array([self.feature_stats[n].std for n in CONTINUOUS_FEATURES], dtype=np.float64)
        for array in (coefficient_vector, means, stds):
            array.setflags(write=False)
        object.__setattr__(self, "_coefficient_vector", coefficient_vector)
        object.__setattr__(self, "_means", means)
        object.__setattr__(self, "_stds", stds)

    @property
    def coefficient_vector(self) -> np.ndarray:
        """Coefficients in FEATURE_ORDER (read-only)."""
        return self._coefficient_vector

    @property
    def means(self) -> np.ndarray:
        return self._means

    @property
    def stds(self) -> np.ndarray:
        return self._stds

    def odds_ratios(self) -> Dict[str, float]:
        """Odds multiplier per unit of model input (per std for continuous features)."""
        return {name: math.exp(self.coefficients[name]) for name in FEATURE_ORDER}

    def to_dict(self) -> Dict:
        return {
            "intercept": self.intercept,
            "coefficients": {name: self.coefficients[name] for name in FEATURE_ORDER},
            "feature_stats": {
                name: {"mean": self.feature_stats[name].mean, "std": self.feature_stats[name].std}
                for name in CONTINUOUS_FEATURES
            },
            "binary_features": list(BINARY_FEATURES),
            "odds_ratios": self.odds_ratios(),
        }


# Fitted on 132 surgically treated patients, bootstrap validated.
DEFAULT_PARAMETERS = ModelParameters(
    intercept=-4.1062,
    coefficients={
        "age":             0.156223,
        "bmi":            -0.481154,
        "erp_length":      2.064089,
        "smis_score":      0.554364,
        "prior_surgery":   1.697194,
        "rectal_fixation": -0.553348,
    },
    feature_stats={
        "age":        FeatureStats(mean=40.13, std=16.12),
        "bmi":        FeatureStats(mean=23.12, std=4.56),
        "erp_length": FeatureStats(mean=5.05, std=1.12),
        "smis_score": FeatureStats(mean=5.21, std=3.98),
    },
)
