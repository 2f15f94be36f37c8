"""
API tests for the Shipment Risk Alerting System
"""
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_alert_service
from api.main import app
from conftest import NOW, days_ago, make_event, make_shipment


@pytest.fixture
def client(alert_service):
    app.dependency_overrides[get_alert_service] = lambda: alert_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoints:
    """Test health check endpoints"""

    def test_root_endpoint(self, client):
        """Test root endpoint"""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert "version" in data

    def test_health_check(self, client):
        """Test health check endpoint"""
        response = client.get("/health/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["shipments_loaded"] == 10
        assert "keyword_table_version" in data

    def test_liveness_probe(self, client):
        """Test liveness probe"""
        response = client.get("/health/liveness")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"


class TestAlertEndpoints:
    """Test alert list, detail and summary endpoints"""

    def test_get_alerts(self, client):
        """Default list holds Medium and High alerts only"""
        response = client.get("/alerts/")
        assert response.status_code == 200
        data = response.json()
        assert data["meta"]["count"] == 2
        assert [a["shipment_id"] for a in data["data"]] == ["SHP-1006", "SHP-1007"]
        assert data["data"][0]["severity"] == "High"

    def test_get_alerts_filters(self, client):
        response = client.get("/alerts/", params={"status": "in_progress", "severity": "low"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 5
        assert all(a["status"] == "in_progress" for a in data)

    def test_include_low(self, client):
        response = client.get("/alerts/", params={"include_low": "true"})
        assert response.json()["meta"]["count"] == 10

    def test_invalid_status(self, client):
        response = client.get("/alerts/", params={"status": "shipped"})
        assert response.status_code == 422
        assert response.json()["error"] == "Validation error"

    def test_invalid_severity(self, client):
        response = client.get("/alerts/", params={"severity": "critical"})
        assert response.status_code == 422

    def test_get_alert(self, client):
        response = client.get("/alerts/SHP-1005")
        assert response.status_code == 200
        data = response.json()
        assert data["risk_score"] == 30
        assert data["risk_reasons"] == ["StaleStatus", "PortCongestion"]
        assert data["current_stage"] == "Port Arrival"
        assert data["risk_factor_points"][0]["points"] == 20

    def test_get_alert_not_found(self, client):
        response = client.get("/alerts/SHP-0000")
        assert response.status_code == 404
        assert "SHP-0000" in response.json()["detail"]

    def test_summary(self, client):
        response = client.get("/alerts/summary")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["high_risk_count"] == 1
        assert data["by_severity"]["Medium"] == 1


class TestAssessEndpoint:
    """Test ad-hoc assessment"""

    def test_assess(self, client):
        payload = {
            "shipment": make_shipment(mode="Air", current_status="Ordered", order_date=days_ago(10).isoformat()),
            "events": [],
            "now": NOW.isoformat(),
        }
        response = client.post("/alerts/assess", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["risk_reasons"] == ["NoPickup"]
        assert data["risk_score"] == 15
        assert data["severity"] == "Low"

    def test_assess_with_events(self, client):
        payload = {
            "shipment": make_shipment(mode="Sea", order_date=days_ago(30).isoformat()),
            "events": [
                make_event(29, "Picked up"),
                make_event(27, "Departed"),
                make_event(17, "Port Arrival"),
                make_event(12, "Port Arrival"),
                {"event_time": "bad", "event_stage": "Customs Hold"},
            ],
        }
        response = client.post("/alerts/assess", json=payload)
        assert response.status_code == 200
        assert response.json()["risk_score"] == 30

    def test_assess_invalid_shipment(self, client):
        shipment = make_shipment()
        del shipment["expected_delivery"]
        response = client.post("/alerts/assess", json={"shipment": shipment})
        assert response.status_code == 422
        data = response.json()
        assert data["errors"][0]["loc"] == ["expected_delivery"]


class TestAcknowledgementEndpoints:
    """Test acknowledgement endpoints"""

    def test_acknowledge(self, client):
        response = client.post("/alerts/acknowledge", json={"shipment_id": "SHP-1007", "user_id": "alice"})
        assert response.status_code == 200
        assert "acknowledged_at" in response.json()

        alert = client.get("/alerts/SHP-1007").json()
        assert alert["acknowledged"] is True
        assert alert["acknowledged_by"] == "alice"

    def test_acknowledge_unknown(self, client):
        response = client.post("/alerts/acknowledge", json={"shipment_id": "SHP-0000", "user_id": "alice"})
        assert response.status_code == 404

    def test_acknowledge_missing_user(self, client):
        response = client.post("/alerts/acknowledge", json={"shipment_id": "SHP-1007"})
        assert response.status_code == 422

    def test_clear(self, client):
        client.post("/alerts/acknowledge", json={"shipment_id": "SHP-1007", "user_id": "alice"})
        response = client.delete("/alerts/acknowledgements")
        assert response.status_code == 200
        assert response.json() == {"cleared": 1}


class TestShipmentEndpoints:
    """Test shipment list endpoint"""

    def test_get_shipments(self, client):
        response = client.get("/shipments/")
        assert response.status_code == 200
        assert len(response.json()) == 10

    def test_future_shipments(self, client):
        response = client.get("/shipments/", params={"status": "future"})
        data = response.json()
        assert [s["shipment_id"] for s in data] == ["SHP-1003"]
        assert data[0]["current_stage"] == "Not yet shipped"

    def test_cancelled_spelling(self, client):
        response = client.get("/shipments/", params={"status": "cancelled"})
        assert [s["status"] for s in response.json()] == ["canceled"]
