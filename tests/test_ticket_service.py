import pytest
from fastapi.testclient import TestClient

from ticketera.engine import TicketEngine
from ticketera.services.ticket_service import app as app_module


@pytest.fixture
def client(make_workbook, settings_for, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    settings = settings_for(make_workbook(), base_url="https://files.example.com/tickets")
    monkeypatch.setattr(app_module, "engine", TicketEngine(settings))
    return TestClient(app_module.app)


def test_healthz(client: TestClient) -> None:
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_ticket_returns_file_reference(client: TestClient, tmp_path) -> None:
    response = client.post(
        "/tickets",
        json={
            "id_orden": "1002",
            "fecha": "19/10/2026",
            "hora": "10:15",
            "direccion": "Av. Arequipa 123",
            "observacion": "",
            "empleado": "Carla",
            "tipo_movimiento": "VENTA",
            "pago": "YAPE",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["fileName"] == "TICKET_1002_19-10-2026.pdf"
    assert body["fileUrl"] == "https://files.example.com/tickets/TICKET_1002_19-10-2026.pdf"
    assert (tmp_path / "tickets" / body["fileName"]).exists()


def test_create_ticket_rejects_non_json_body(client: TestClient) -> None:
    response = client.post("/tickets", content=b"id_orden=1002", headers={"Content-Type": "text/plain"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "error"
    assert "fileName" not in body
    assert "fileUrl" not in body


def test_create_ticket_unknown_order(client: TestClient, tmp_path) -> None:
    response = client.post("/tickets", json={"id_orden": "9999", "fecha": "19/10/2026"})

    body = response.json()
    assert body["status"] == "error"
    assert "9999" in body["message"]
    assert not (tmp_path / "tickets").exists()
