"""Core building blocks for the dispute portal."""
from dispute_portal.core.config import PortalSettings, load_settings
from dispute_portal.core.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PortalError,
    StoreError,
    TransportError,
    ValidationError,
)
from dispute_portal.core.logging import configure_logging
from dispute_portal.core.models import PRIORITIES, STATUSES, Dispute, Identity

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "Dispute",
    "Identity",
    "NotFoundError",
    "PRIORITIES",
    "PortalError",
    "PortalSettings",
    "STATUSES",
    "StoreError",
    "TransportError",
    "ValidationError",
    "configure_logging",
    "load_settings",
]
