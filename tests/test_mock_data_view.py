from fastapi.testclient import TestClient

from client_appointments.main import app
from client_appointments.services.mock_store import get_mock_store


def test_mock_data_view_renders_seed_data() -> None:
    client = TestClient(app)

    response = client.get("/mock-data")
    assert response.status_code == 200
    body = response.text

    assert "Mock Data Overview" in body
    assert "Signature Haircut" in body
    assert "APT-00001" in body


def test_mock_data_view_shows_empty_sections() -> None:
    get_mock_store().bookings.clear()
    client = TestClient(app)

    response = client.get("/mock-data")

    assert "No records found." in response.text


def test_bookings_endpoint_uses_wire_envelope() -> None:
    client = TestClient(app)

    response = client.get("/bookings", params={"page": 1})
    assert response.status_code == 200
    payload = response.json()

    assert payload["status"] == "success"
    assert payload["data"]["total"] == 4
    first = payload["data"]["appointments"][0]
    assert set(first) >= {
        "appointment_id",
        "service_id",
        "service_name",
        "appointment_date",
        "appointment_time",
        "status",
    }


def test_bookings_endpoint_rejects_page_zero() -> None:
    client = TestClient(app)

    assert client.get("/bookings", params={"page": 0}).status_code == 422


def test_edit_endpoint_reports_unknown_appointment() -> None:
    client = TestClient(app)

    response = client.post(
        "/bookings/edit",
        json={
            "appointment_id": "APT-99999",
            "appointment_date": "2025-09-20",
            "appointment_time": "08:30",
            "service_id": 101,
        },
    )

    assert response.status_code == 200
    assert response.json()["status"] == "error"
