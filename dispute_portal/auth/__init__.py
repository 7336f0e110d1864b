"""Login, role checks and persisted sessions."""
from dispute_portal.auth.credentials import CredentialVerifier, match_credentials, require_admin
from dispute_portal.auth.session import SessionStore

__all__ = ["CredentialVerifier", "SessionStore", "match_credentials", "require_admin"]
