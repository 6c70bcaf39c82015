"""
Clinical Recommendations and Display Text

Fixed per-tier recommendations shown beneath a result, plus the notes and
model metadata the calculator displays alongside the form.
"""
from __future__ import annotations

from typing import Dict, List, Tuple

from .base import RiskCategory

RECOMMENDATIONS: Dict[RiskCategory, Tuple[str, ...]] = {
    RiskCategory.LOW: (
        "Standard postoperative follow-up protocol",
        "Routine pelvic floor physiotherapy",
        "Any surgical approach may be appropriate",
        "Regular monitoring at standard intervals",
    ),
    RiskCategory.MODERATE: (
        "Enhanced follow-up protocol (more frequent in first year)",
        "Consider abdominal approach over perineal approach",
        "Intensive pelvic floor physiotherapy",
        "Early investigation of symptoms suggesting recurrence",
    ),
    RiskCategory.HIGH: (
        "Strongly prefer abdominal approach with mesh reinforcement",
        "Perineal approach has 59.1% recurrence rate vs 5.6% for abdominal",
        "Intensive follow-up protocol with early imaging",
        "Pre-emptive referral to specialized colorectal center for recurrence",
        "Clear patient counseling regarding high recurrence risk",
    ),
}

FEATURE_NOTES: Dict[str, Tuple[str, ...]] = {
    "age": ("Older age is associated with increased recurrence risk",),
    "bmi": ("Lower BMI is associated with increased recurrence risk",),
    "erp_length": ("Longer prolapse is a strong predictor of recurrence",),
    "smis_score": (
        "SMIS (St. Mark's Incontinence Score) measures fecal incontinence severity",
        "Higher SMIS scores indicate worse incontinence and higher recurrence risk",
    ),
    "prior_surgery": (
        "Previous rectal prolapse surgery is the strongest predictor (OR 3.64, p<0.001)",
        "Patients with prior surgery have 11.6x higher recurrence risk",
    ),
    "rectal_fixation": ("Rectal fixation provides a protective effect against recurrence",),
}

MODEL_PERFORMANCE = {
    "auc": 0.962,
    "auc_ci_95": [0.935, 0.987],
    "sensitivity": 0.900,
    "specificity": 0.955,
    "cohort_size": 132,
    "validation": "bootstrap",
}

DISCLAIMER = (
    "This calculator is intended as a clinical decision support tool. "
    "Clinical judgment should always supersede calculator recommendations."
)


def get_recommendations(category: RiskCategory) -> List[str]:
    """Recommendation lines for a risk tier, in display order."""
    return list(RECOMMENDATIONS[RiskCategory(category)])


def format_probability(probability: float) -> str:
    """Probability as a percentage with one decimal place, e.g. ``"1.3%"``."""
    return f"{probability * 100:.1f}%"
