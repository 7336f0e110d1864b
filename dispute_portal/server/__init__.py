"""HTTP endpoint for the dispute sheets."""
from dispute_portal.server.app import PortalBackend, create_app

__all__ = ["PortalBackend", "create_app"]
