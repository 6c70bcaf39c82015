"""
Pytest Configuration and Fixtures

Shared fixtures for the recurrence risk calculator tests.
"""
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from propr.core.scoring import PatientFeatures, RiskScorer
from propr.services import AssessmentService


@pytest.fixture
def default_features() -> PatientFeatures:
    """Calculator defaults: age 50, BMI 25, ERP 5 cm, SMIS 5, no flags."""
    return PatientFeatures.defaults()


@pytest.fixture
def high_risk_features() -> PatientFeatures:
    """Long prolapse, poor continence and a previous repair."""
    return PatientFeatures(
        age=78,
        bmi=19.5,
        erp_length=8.0,
        smis_score=18,
        prior_surgery=True,
        rectal_fixation=False,
    )


@pytest.fixture
def scorer() -> RiskScorer:
    return RiskScorer()


@pytest.fixture
def service() -> AssessmentService:
    return AssessmentService()


@pytest.fixture
def raw_form() -> dict:
    """Values as the browser form posts them."""
    return {
        "age": "50",
        "bmi": "25",
        "erpLength": "5.0",
        "smisScore": "5",
        "priorSurgery": "no",
        "rectalFixation": "no",
    }
