"""
Tests for the HTTP API
"""

import pytest
from fastapi.testclient import TestClient

from ventcalc.app.config import Settings
from ventcalc.app.main import create_app

ORIGIN = "http://localhost:3000"


@pytest.fixture
def client():
    app = create_app(Settings(debug=False, allowed_origins=[ORIGIN]))
    return TestClient(app)


@pytest.fixture
def area_request():
    return {
        "project": {"project_name": "Meter Station", "performed_by": "A. Engineer"},
        "length": 40,
        "width": 30,
        "height": 12,
        "inside_temp_f": 90,
        "outside_temp_f": 40,
        "wind_velocity": 0,
        "vent_type": "sharp_edged",
        "inlet_obstruction": "none",
        "outlet_obstruction": "none",
    }


class TestCalculateEndpoint:

    def test_area_method(self, client, area_request):
        response = client.post("/api/v1/ventilation/calculate", json=area_request)
        assert response.status_code == 200

        data = response.json()
        result = data["result"]
        assert data["version"] == 1
        assert data["project"]["project_name"] == "Meter Station"
        assert result["achievable"] is True
        assert result["required_ventilation_rate"] == pytest.approx(2880.0)
        assert result["gross_inlet_area"] == pytest.approx(result["free_vent_area"])
        assert result["recommendations"]

    def test_presets_resolve_to_factors(self, client, area_request):
        area_request.update({
            "terrain": "urban",
            "wind_orientation": "parallel",
            "vent_type": "louvered",
            "inlet_obstruction": "standard_louver",
            "outlet_obstruction": "acoustic_louver",
            "wind_velocity": 10,
        })
        data = client.post("/api/v1/ventilation/calculate", json=area_request).json()

        inputs = data["inputs"]
        assert inputs["terrain_factor"] == 0.67
        assert inputs["wind_orientation_factor"] == 0.15
        assert inputs["discharge_coefficient"] == 0.60
        assert inputs["inlet_obstruction_factor"] == 0.55
        assert inputs["outlet_obstruction_factor"] == 0.35
        assert data["result"]["outlet_obstruction_name"] == "Acoustic Louver (35% Free Area)"

    def test_explicit_factor_wins_over_preset(self, client, area_request):
        area_request.update({"inlet_obstruction": "bird_screen", "inlet_obstruction_factor": 0.5})
        data = client.post("/api/v1/ventilation/calculate", json=area_request).json()
        assert data["inputs"]["inlet_obstruction_factor"] == 0.5
        assert data["result"]["inlet_obstruction_name"] == "Custom Factor: 0.5"

    def test_unachievable_returns_nulls(self, client, area_request):
        area_request["inside_temp_f"] = 40
        response = client.post("/api/v1/ventilation/calculate", json=area_request)
        assert response.status_code == 200

        result = response.json()["result"]
        assert result["achievable"] is False
        assert result["free_vent_area"] is None
        assert result["gross_inlet_area"] is None
        assert result["gross_outlet_area"] is None

    def test_fugitive_method(self, client, area_request):
        area_request.update({
            "method": "fugitive_emission_method",
            "leak_sources": [{"component_type": "flange", "quantity": 10}],
            "lfl": 5,
            "safety_factor": 0.25,
        })
        result = client.post("/api/v1/ventilation/calculate", json=area_request).json()["result"]
        assert result["total_leak_rate"] == pytest.approx(0.2)
        assert result["required_ventilation_rate"] == pytest.approx(16.0)

    def test_domain_validation_error(self, client, area_request):
        area_request.update({"height": -3, "method": "fugitive_emission_method"})
        response = client.post("/api/v1/ventilation/calculate", json=area_request)
        assert response.status_code == 422

        error = response.json()["error"]
        assert error["type"] == "ValidationError"
        assert error["fields"] == ["height", "leak_rate", "lfl", "safety_factor"]

    def test_request_parsing_error(self, client, area_request):
        area_request["length"] = "forty"
        response = client.post("/api/v1/ventilation/calculate", json=area_request)
        assert response.status_code == 422

        data = response.json()
        assert "detail" not in data
        assert data["error"]["type"] == "ValidationError"
        assert data["error"]["fields"] == ["length"]


class TestRecalculateEndpoint:

    def test_saved_calculation_reproduces_result(self, client, area_request):
        first = client.post("/api/v1/ventilation/calculate", json=area_request).json()
        second = client.post("/api/v1/ventilation/recalculate", json=first).json()
        assert second == first

    def test_bad_version(self, client, area_request):
        saved = client.post("/api/v1/ventilation/calculate", json=area_request).json()
        saved["version"] = 7
        response = client.post("/api/v1/ventilation/recalculate", json=saved)
        assert response.status_code == 400
        assert response.json()["error"]["type"] == "SavedCalculationError"


class TestMiscEndpoints:

    def test_tables(self, client):
        data = client.get("/api/v1/ventilation/tables").json()
        assert data["component_leak_rates_cfm"]["compressor_seal"] == 2.15
        assert data["obstruction_factors"]["none"] == 1.0
        assert data["wind_orientation_factors"]["parallel"] == 0.15

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/healthz").json()["status"] == "ok"

    def test_cors_headers(self, client):
        response = client.get("/health", headers={"Origin": ORIGIN})
        assert response.headers["access-control-allow-origin"] == ORIGIN


class TestOversizedNumbers:

    def test_recalculate_rejects_integer_beyond_float_range(self, client, area_request):
        saved = client.post("/api/v1/ventilation/calculate", json=area_request).json()
        saved["inputs"]["length"] = 10 ** 400
        response = client.post("/api/v1/ventilation/recalculate", json=saved)
        assert response.status_code == 422

        error = response.json()["error"]
        assert error["type"] == "ValidationError"
        assert error["fields"] == ["length"]
