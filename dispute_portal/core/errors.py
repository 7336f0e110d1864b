"""Error taxonomy for the portal.

Each error carries a human-readable ``message`` and a class-level ``code``.
The endpoint copies both into ``{"success": false, ...}`` payloads so the
HTTP client can raise the same type again on the other side.
"""
from __future__ import annotations


class PortalError(Exception):
    """Base class for every error the portal reports to a caller."""

    code: str = "PORTAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PortalError):
    """A required field is missing or a value has the wrong shape."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str | None, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Missing required field: {field}")


class NotFoundError(PortalError):
    code = "NOT_FOUND"


class TransportError(PortalError):
    """Network failure or a non-OK HTTP status from the remote endpoint."""

    code = "TRANSPORT_ERROR"


class AuthenticationError(PortalError):
    code = "UNAUTHORIZED"


class AuthorizationError(PortalError):
    code = "FORBIDDEN"


class StoreError(PortalError):
    """The row store failed for a reason outside the other categories."""

    code = "STORE_ERROR"


ERRORS_BY_CODE: dict[str, type[PortalError]] = {
    cls.code: cls
    for cls in (NotFoundError, TransportError, AuthenticationError, AuthorizationError, StoreError)
}


def error_from_payload(payload: dict) -> PortalError:
    """Rebuild an exception from a ``success: false`` response payload."""

    message = str(payload.get("message") or "Request failed")
    code = str(payload.get("code") or "")
    if code == ValidationError.code:
        return ValidationError(payload.get("field"), message)
    return ERRORS_BY_CODE.get(code, PortalError)(message)
