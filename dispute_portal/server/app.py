"""HTTP endpoint in front of the dispute sheets.

Every application outcome is an HTTP 200 JSON body with ``success`` and,
on failure, a ``message`` and ``code``. Non-2xx statuses are left to the
infrastructure.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response

from dispute_portal.auth.credentials import CredentialVerifier
from dispute_portal.core.config import PortalSettings, load_settings
from dispute_portal.core.errors import PortalError, ValidationError
from dispute_portal.core.logging import configure_logging
from dispute_portal.core.utils import utc_now
from dispute_portal.repository import DisputeRepository, build_store
from dispute_portal.store.base import RowStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _failure(exc: PortalError) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"success": False, "message": exc.message, "code": exc.code}
    if isinstance(exc, ValidationError) and exc.field:
        payload["field"] = exc.field
    return payload


class PortalBackend:
    """Action handlers over one row store; each returns a response payload."""

    def __init__(self, store: RowStore, settings: Optional[PortalSettings] = None, clock=utc_now) -> None:
        self.settings = settings or PortalSettings()
        self.store = store
        self.repository = DisputeRepository(store, self.settings, clock=clock)
        self.verifier = CredentialVerifier(store, self.settings, clock=clock)

    def _guarded(self, label: str, handler, *args) -> Dict[str, Any]:
        try:
            return handler(*args)
        except PortalError as exc:
            logger.info("%s failed: %s", label, exc.message)
            return _failure(exc)
        except Exception as exc:
            logger.exception("%s failed", label)
            return {"success": False, "message": str(exc) or type(exc).__name__, "code": "STORE_ERROR"}

    def get_table(self, tab: Optional[str]) -> Dict[str, Any]:
        table = (tab or "").strip() or self.settings.primary_table
        return self._guarded("GET", lambda: {"success": True, "data": self.store.read_rows(table)})

    def dispatch(self, body: Any) -> Dict[str, Any]:
        if not isinstance(body, dict):
            return _failure(ValidationError(None, "Request body must be a JSON object"))
        action = str(body.get("action") or "")
        if action == "loginSupplier":
            return self._guarded(action, self._login, body)
        if action == "updateStatus":
            return self._guarded(action, self._update_status, body)
        # createDispute, and any body without a recognised action.
        return self._guarded("createDispute", self._create, body)

    def _login(self, body: Dict[str, Any]) -> Dict[str, Any]:
        identity = self.verifier.login(str(body.get("email") or ""), str(body.get("password") or ""))
        return {"success": True, "message": "Login successful", "user": identity.to_dict()}

    def _create(self, body: Dict[str, Any]) -> Dict[str, Any]:
        fields = {key: value for key, value in body.items() if key not in ("action", "tab")}
        dispute = self.repository.create(fields)
        return {
            "success": True,
            "message": f"Dispute {dispute.id} submitted successfully",
            "dispute": dispute.to_wire(),
        }

    def _update_status(self, body: Dict[str, Any]) -> Dict[str, Any]:
        dispute = self.repository.update_status(str(body.get("id") or ""), str(body.get("status") or ""))
        return {
            "success": True,
            "message": f"Dispute {dispute.id} updated to {dispute.status}",
            "dispute": dispute.to_wire(),
        }


def _json(payload: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=payload, headers=CORS_HEADERS)


def create_app(backend: Optional[PortalBackend] = None) -> FastAPI:
    if backend is None:
        configure_logging()
        settings = load_settings()
        backend = PortalBackend(build_store(settings), settings)

    app = FastAPI(title="Dispute Portal Endpoint", version="0.1.0")
    app.state.backend = backend

    @app.get("/")
    def read_table(tab: Optional[str] = Query(default=None)):
        return _json(backend.get_table(tab))

    @app.post("/")
    async def post_action(request: Request):
        raw = await request.body()
        try:
            body = json.loads(raw.decode("utf-8") or "{}")
        except (UnicodeDecodeError, ValueError):
            return _json(_failure(ValidationError(None, "Request body is not valid JSON")))
        return _json(backend.dispatch(body))

    @app.options("/")
    def preflight():
        return Response(content=b"", headers=CORS_HEADERS)

    return app
