"""HTTP client for the portal endpoint."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

import requests

from dispute_portal.core.errors import TransportError, error_from_payload
from dispute_portal.core.models import Identity

logger = logging.getLogger(__name__)

CONNECTION_ERROR = "Connection error, check your network"


class PortalClient:
    """Talks to the endpoint with one outstanding request per call, no retries."""

    def __init__(self, base_url: str, timeout: float = 30.0, session: requests.Session | None = None) -> None:
        if not base_url:
            raise ValueError("base_url is required for the portal client")
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _decode(self, response: requests.Response) -> Dict[str, Any]:
        if not response.ok:
            logger.warning("Endpoint returned HTTP %s", response.status_code)
            raise TransportError(f"{CONNECTION_ERROR} (HTTP {response.status_code})")
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(f"{CONNECTION_ERROR} (invalid JSON response)") from exc
        if not isinstance(payload, dict):
            raise TransportError(f"{CONNECTION_ERROR} (unexpected response shape)")
        if not payload.get("success"):
            raise error_from_payload(payload)
        return payload

    def get_table(self, tab: str | None = None) -> List[Dict[str, Any]]:
        """Return the header-keyed rows of one table."""

        params = {"tab": tab} if tab else None
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("GET %s failed: %s", tab or "<default>", exc)
            raise TransportError(CONNECTION_ERROR) from exc
        data = self._decode(response).get("data") or []
        return [row for row in data if isinstance(row, dict)]

    def post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        # text/plain keeps browsers from sending a CORS preflight to the endpoint.
        try:
            response = self.session.post(
                self.base_url,
                data=json.dumps(payload),
                headers={"Content-Type": "text/plain;charset=utf-8"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("POST %s failed: %s", payload.get("action", "createDispute"), exc)
            raise TransportError(CONNECTION_ERROR) from exc
        return self._decode(response)

    def login(self, email: str, password: str) -> Identity:
        payload = self.post({"action": "loginSupplier", "email": email, "password": password})
        identity = Identity.from_dict(payload.get("user") or {})
        if identity is None:
            raise TransportError(f"{CONNECTION_ERROR} (login response had no user)")
        return identity
