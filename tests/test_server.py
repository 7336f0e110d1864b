"""Tests for the HTTP endpoint contract."""
import json

import pytest
from fastapi.testclient import TestClient

from dispute_portal.server.app import PortalBackend, create_app

from conftest import FIXED_NOW

NEW_DISPUTE = {
    "orderItemId": "ORD500",
    "trackingId": "TRK500",
    "supplierName": "Demo Supplier",
    "supplierEmail": "supplier@demo",
    "supplierId": "SUP001",
}


@pytest.fixture
def client(store, settings):
    backend = PortalBackend(store, settings, clock=lambda: FIXED_NOW)
    return TestClient(create_app(backend))


def _post(client, payload):
    # Browsers post text/plain to skip the CORS preflight.
    response = client.post(
        "/", content=json.dumps(payload), headers={"Content-Type": "text/plain;charset=utf-8"}
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    return response.json()


def test_get_returns_primary_table_with_cors_headers(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    body = response.json()
    assert body["success"] is True
    assert len(body["data"]) == 7
    assert body["data"][0]["ID"] == "1"


def test_get_named_tab(client):
    body = client.get("/", params={"tab": "Supplierview"}).json()
    assert body["success"] is True
    assert body["data"][0]["SupplierID"] == "SUP001"


def test_get_missing_tab_reports_not_found(client):
    body = client.get("/", params={"tab": "Missing"}).json()
    assert body == {"success": False, "message": "Sheet 'Missing' not found", "code": "NOT_FOUND"}


def test_options_preflight(client):
    response = client.options("/")
    assert response.status_code == 200
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
    assert response.content == b""


def test_login_action(client):
    body = _post(client, {"action": "loginSupplier", "email": "supplier@demo", "password": "Passw0rd!"})
    assert body["success"] is True
    assert body["user"] == {
        "supplierId": "SUP001",
        "supplierName": "Demo Supplier",
        "email": "supplier@demo",
        "role": "supplier",
    }


def test_login_failure(client):
    body = _post(client, {"action": "loginSupplier", "email": "supplier@demo", "password": "nope"})
    assert body == {"success": False, "message": "Invalid email or password", "code": "UNAUTHORIZED"}


def test_create_dispute_without_action(client):
    body = _post(client, NEW_DISPUTE)

    assert body["success"] is True
    assert body["dispute"]["id"].startswith("DISP-")
    assert body["dispute"]["status"] == "Pending"
    assert body["dispute"]["submissionDate"] == "2024-01-20T12:00:00Z"
    assert len(client.get("/").json()["data"]) == 8


def test_create_dispute_missing_field(client):
    payload = {key: value for key, value in NEW_DISPUTE.items() if key != "trackingId"}
    body = _post(client, {"action": "createDispute", **payload})

    assert body == {
        "success": False,
        "message": "Missing required field: trackingId",
        "code": "VALIDATION_ERROR",
        "field": "trackingId",
    }
    assert len(client.get("/").json()["data"]) == 7


def test_update_status_action(client):
    body = _post(client, {"action": "updateStatus", "id": "3", "status": "Paid"})
    assert body["success"] is True
    assert body["dispute"]["status"] == "Paid"

    rows = client.get("/").json()["data"]
    assert next(row for row in rows if row["ID"] == "3")["Status"] == "Paid"


def test_update_status_unknown_id(client):
    body = _post(client, {"action": "updateStatus", "id": "404", "status": "Paid"})
    assert body["success"] is False
    assert body["code"] == "NOT_FOUND"


def test_invalid_json_body(client):
    response = client.post("/", content=b"{broken", headers={"Content-Type": "text/plain"})
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"


def test_unexpected_store_failure_is_reported(store, settings):
    backend = PortalBackend(store, settings)

    def explode(table):
        raise RuntimeError("quota exceeded")

    store.read_rows = explode
    body = TestClient(create_app(backend)).get("/").json()
    assert body == {"success": False, "message": "quota exceeded", "code": "STORE_ERROR"}
