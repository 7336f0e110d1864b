"""Tests for the HTTP client used when the portal runs against a remote endpoint."""
import json

import pytest
import requests

from dispute_portal.core.errors import AuthenticationError, TransportError, ValidationError
from dispute_portal.store.client import CONNECTION_ERROR, PortalClient


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = text

    def json(self):
        if self.text is not None:
            raise ValueError("not json")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _respond(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._respond("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._respond("POST", url, **kwargs)


def _client(session):
    return PortalClient("https://portal.example/exec", timeout=5, session=session)


def test_get_table_passes_tab_and_returns_rows():
    session = FakeSession(FakeResponse({"success": True, "data": [{"ID": "1"}, "junk"]}))

    rows = _client(session).get_table("Supplierview")

    assert rows == [{"ID": "1"}]
    method, url, kwargs = session.calls[0]
    assert method == "GET"
    assert kwargs["params"] == {"tab": "Supplierview"}
    assert kwargs["timeout"] == 5


def test_post_sends_json_as_plain_text():
    session = FakeSession(FakeResponse({"success": True, "message": "ok"}))

    _client(session).post({"action": "updateStatus", "id": "1", "status": "Paid"})

    _, _, kwargs = session.calls[0]
    assert kwargs["headers"]["Content-Type"] == "text/plain;charset=utf-8"
    assert json.loads(kwargs["data"]) == {"action": "updateStatus", "id": "1", "status": "Paid"}


def test_failure_payload_is_raised_as_matching_error():
    payload = {"success": False, "message": "Missing required field: trackingId", "code": "VALIDATION_ERROR",
               "field": "trackingId"}
    session = FakeSession(FakeResponse(payload))

    with pytest.raises(ValidationError) as excinfo:
        _client(session).post({"orderItemId": "1"})
    assert excinfo.value.field == "trackingId"


def test_network_errors_become_transport_errors():
    session = FakeSession(error=requests.ConnectionError("refused"))

    with pytest.raises(TransportError) as excinfo:
        _client(session).get_table()
    assert excinfo.value.message == CONNECTION_ERROR


@pytest.mark.parametrize(
    "response",
    [FakeResponse({"success": True}, status_code=502), FakeResponse(text="<html>"), FakeResponse(["not", "a", "dict"])],
)
def test_bad_responses_become_transport_errors(response):
    with pytest.raises(TransportError):
        _client(FakeSession(response)).post({"action": "createDispute"})


def test_login_returns_identity():
    user = {"supplierId": "SUP001", "supplierName": "Demo Supplier", "email": "supplier@demo", "role": "supplier"}
    session = FakeSession(FakeResponse({"success": True, "message": "Login successful", "user": user}))

    identity = _client(session).login("supplier@demo", "Passw0rd!")

    assert identity.supplier_id == "SUP001"
    assert json.loads(session.calls[0][2]["data"])["action"] == "loginSupplier"


def test_login_failure_is_authentication_error():
    session = FakeSession(FakeResponse({"success": False, "message": "Invalid email or password", "code": "UNAUTHORIZED"}))
    with pytest.raises(AuthenticationError):
        _client(session).login("supplier@demo", "bad")


def test_base_url_is_required():
    with pytest.raises(ValueError):
        PortalClient("")
