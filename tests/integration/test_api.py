"""
Integration Tests for the FastAPI Backend

Tests for API endpoints: health checks, model information, assessment.
Uses async httpx for ASGI app testing.
"""
import pytest
import httpx

from propr.config import settings
import propr.main
from propr.main import app
from propr.utils.exceptions import InvalidParameterError

PREFIX = settings.api_prefix


@pytest.fixture
async def async_client():
    """Create async test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def default_payload() -> dict:
    return {
        "age": 50,
        "bmi": 25,
        "erp_length": 5.0,
        "smis_score": 5,
        "prior_surgery": False,
        "rectal_fixation": False,
    }


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_root_endpoint(self, async_client):
        response = await async_client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == settings.app_version

    async def test_health_endpoint(self, async_client):
        response = await async_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
class TestModelEndpoint:

    async def test_model_info(self, async_client):
        response = await async_client.get(f"{PREFIX}/model")
        assert response.status_code == 200

        data = response.json()
        assert data["intercept"] == -4.1062
        assert data["coefficients"]["prior_surgery"] == 1.697194
        assert data["feature_stats"]["age"] == {"mean": 40.13, "std": 16.12}
        assert data["thresholds"] == {"low_below": 0.15, "high_from": 0.4}
        assert data["defaults"]["age"] == 50.0
        assert set(data["feature_notes"]) >= {"erp_length", "prior_surgery"}


@pytest.mark.asyncio
class TestAssessEndpoint:

    async def test_assess_defaults(self, async_client, default_payload):
        response = await async_client.post(f"{PREFIX}/assess", json=default_payload)
        assert response.status_code == 200

        data = response.json()
        assert data["probability_percent"] == "1.3%"
        assert data["risk_category"] == "Low Risk"
        assert 0.0 < data["probability"] < 1.0
        assert len(data["recommendations"]) == 4

    async def test_assess_high_risk(self, async_client, default_payload):
        payload = {**default_payload, "age": 78, "bmi": 19.5, "erp_length": 8.0,
                   "smis_score": 18, "prior_surgery": True}
        response = await async_client.post(f"{PREFIX}/assess", json=payload)
        assert response.status_code == 200
        assert response.json()["risk_category"] == "High Risk"

    async def test_assess_is_deterministic(self, async_client, default_payload):
        first = await async_client.post(f"{PREFIX}/assess", json=default_payload)
        second = await async_client.post(f"{PREFIX}/assess", json=default_payload)
        assert first.json()["probability"] == second.json()["probability"]

    @pytest.mark.parametrize("field_name,value", [
        ("smis_score", 25),
        ("smis_score", -1),
        ("age", 0),
        ("bmi", -3),
        ("erp_length", -0.5),
        ("age", "abc"),
    ])
    async def test_assess_rejects_out_of_range(self, async_client, default_payload, field_name, value):
        payload = {**default_payload, field_name: value}
        response = await async_client.post(f"{PREFIX}/assess", json=payload)
        assert response.status_code == 422

    async def test_assess_rejects_nan(self, async_client):
        body = (
            '{"age": 50, "bmi": 25, "erp_length": 5.0, "smis_score": NaN, '
            '"prior_surgery": false, "rectal_fixation": false}'
        )
        response = await async_client.post(
            f"{PREFIX}/assess",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422

        data = response.json()
        assert data["error"] == "INVALID_INPUT"
        assert data["details"]["field"] == "smis_score"
        assert data["details"]["errors"][0]["loc"] == ["body", "smis_score"]
        assert "input" not in data["details"]["errors"][0]

    async def test_assess_rejects_infinity(self, async_client):
        body = (
            '{"age": Infinity, "bmi": 25, "erp_length": 5.0, "smis_score": 5, '
            '"prior_surgery": false, "rectal_fixation": false}'
        )
        response = await async_client.post(
            f"{PREFIX}/assess",
            content=body,
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert response.json()["details"]["field"] == "age"

    async def test_assess_extreme_prolapse_below_certainty(self, async_client, default_payload):
        payload = {**default_payload, "erp_length": 30}
        response = await async_client.post(f"{PREFIX}/assess", json=payload)
        assert response.status_code == 200

        data = response.json()
        assert 0.0 < data["probability"] < 1.0
        assert data["risk_category"] == "High Risk"

    async def test_assess_missing_field(self, async_client, default_payload):
        del default_payload["erp_length"]
        response = await async_client.post(f"{PREFIX}/assess", json=default_payload)
        assert response.status_code == 422


@pytest.mark.asyncio
class TestAssessFormEndpoint:

    async def test_raw_form_values(self, async_client, raw_form):
        response = await async_client.post(f"{PREFIX}/assess/form", json=raw_form)
        assert response.status_code == 200

        data = response.json()
        assert data["probability_percent"] == "1.3%"
        assert data["features"]["erp_length"] == 5.0

    async def test_unparsable_text_rejected(self, async_client, raw_form):
        raw_form["smisScore"] = "abc"
        response = await async_client.post(f"{PREFIX}/assess/form", json=raw_form)
        assert response.status_code == 422

        data = response.json()
        assert data["error"] == "INVALID_INPUT"
        assert data["details"]["field"] == "smis_score"

    async def test_blank_text_rejected(self, async_client, raw_form):
        raw_form["age"] = ""
        response = await async_client.post(f"{PREFIX}/assess/form", json=raw_form)
        assert response.status_code == 422
        assert response.json()["details"]["field"] == "age"

    async def test_integer_too_large_for_float_rejected(self, async_client, raw_form):
        raw_form["age"] = 10 ** 400
        response = await async_client.post(f"{PREFIX}/assess/form", json=raw_form)
        assert response.status_code == 422

        data = response.json()
        assert data["error"] == "INVALID_INPUT"
        assert data["details"]["field"] == "age"


@pytest.mark.asyncio
class TestConfigurationErrors:
    """A broken model configuration surfaces as 500 with a structured body."""

    @pytest.fixture
    def broken_service(self, monkeypatch):
        def raise_invalid_parameter(*args, **kwargs):
            raise InvalidParameterError(
                "Standard deviation for bmi must be finite and nonzero, got 0.0",
                parameter="bmi",
                details={"std": 0.0},
            )

        service = propr.main._assessment_service
        monkeypatch.setattr(service, "model_info", raise_invalid_parameter)
        monkeypatch.setattr(service, "assess", raise_invalid_parameter)
        return service

    async def test_model_info_invalid_parameter(self, async_client, broken_service):
        response = await async_client.get(f"{PREFIX}/model")
        assert response.status_code == 500

        data = response.json()
        assert data["error"] == "INVALID_PARAMETER"
        assert data["details"] == {"parameter": "bmi", "std": 0.0}
        assert "bmi" in data["message"]

    async def test_assess_invalid_parameter(self, async_client, broken_service, default_payload):
        response = await async_client.post(f"{PREFIX}/assess", json=default_payload)
        assert response.status_code == 500
        assert response.json()["error"] == "INVALID_PARAMETER"
