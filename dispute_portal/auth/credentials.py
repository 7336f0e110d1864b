"""Credential checks for the login action, with a best-effort activity log.

Matching policy, applied everywhere: the email is trimmed and compared
case-insensitively; the password is trimmed and compared exactly.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dispute_portal.core.config import PortalSettings
from dispute_portal.core.errors import AuthenticationError, AuthorizationError, PortalError, ValidationError
from dispute_portal.core.models import ROLE_ADMIN, ROLE_SUPPLIER, Identity
from dispute_portal.core.utils import format_timestamp, utc_now
from dispute_portal.ingestion.normalizer import get_first
from dispute_portal.store.base import RowStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
MISSING_CREDENTIALS = "Please enter both email and password"

ACTIVITY_HEADERS = ["Timestamp", "Email", "Supplier ID", "Supplier Name", "Status", "Error Message"]

EMAIL_KEYS = ("Email", "email", "Supplier Email", "supplierEmail")
PASSWORD_KEYS = ("Password", "password")
SUPPLIER_ID_KEYS = ("Supplier ID", "SupplierID", "supplierId")
SUPPLIER_NAME_KEYS = ("Supplier Name", "supplierName", "Name")
ROLE_KEYS = ("Role", "role")


def _identity_from_row(row: Mapping[str, Any]) -> Identity:
    role = str(get_first(row, *ROLE_KEYS) or ROLE_SUPPLIER).strip().lower()
    return Identity(
        email=str(get_first(row, *EMAIL_KEYS)).strip(),
        role=role if role in (ROLE_ADMIN, ROLE_SUPPLIER) else ROLE_SUPPLIER,
        supplier_name=str(get_first(row, *SUPPLIER_NAME_KEYS)).strip(),
        supplier_id=str(get_first(row, *SUPPLIER_ID_KEYS)).strip(),
    )


def match_credentials(rows: Iterable[Mapping[str, Any]], email: str, password: str) -> Optional[Identity]:
    """Return the identity of the first row matching both credentials."""

    wanted_email = (email or "").strip().lower()
    wanted_password = (password or "").strip()
    for row in rows:
        row_email = str(get_first(row, *EMAIL_KEYS)).strip().lower()
        row_password = str(get_first(row, *PASSWORD_KEYS)).strip()
        if row_email and row_email == wanted_email and row_password == wanted_password:
            return _identity_from_row(row)
    return None


def require_admin(identity: Optional[Identity]) -> Identity:
    if identity is None or not identity.is_admin:
        raise AuthorizationError("Only administrators can change dispute status")
    return identity


class CredentialVerifier:
    """Validates logins against the credentials sheet and records each attempt."""

    def __init__(self, store: RowStore, settings: Optional[PortalSettings] = None, clock=utc_now) -> None:
        self.store = store
        self.settings = settings or PortalSettings()
        self.clock = clock

    def _credential_rows(self) -> List[Dict[str, Any]]:
        return self.store.read_rows(self.settings.credentials_table)

    def login(self, email: str, password: str) -> Identity:
        if not (email or "").strip() or not (password or "").strip():
            raise ValidationError("email", MISSING_CREDENTIALS)

        try:
            rows = self._credential_rows()
        except PortalError as exc:
            self.record_attempt(email, None, "Failed", exc.message)
            raise

        identity = match_credentials(rows, email, password)
        if identity is None:
            self.record_attempt(email, None, "Failed", INVALID_CREDENTIALS)
            logger.info("Rejected login for %s", email.strip())
            raise AuthenticationError(INVALID_CREDENTIALS)

        self.record_attempt(email, identity, "Success")
        logger.info("Login succeeded for %s (%s)", identity.email, identity.role)
        return identity

    def record_attempt(self, email: str, identity: Optional[Identity], status: str, error: str = "") -> None:
        """Append one row to the activity sheet; failures never block the login result."""

        row = {
            "Timestamp": format_timestamp(self.clock()),
            "Email": (email or "").strip(),
            "Supplier ID": identity.supplier_id if identity else "",
            "Supplier Name": identity.supplier_name if identity else "",
            "Status": status,
            "Error Message": error,
        }
        table = self.settings.activity_table
        try:
            self.store.ensure_table(table, ACTIVITY_HEADERS)
            headers = self.store.headers(table) or ACTIVITY_HEADERS
            self.store.append_row(table, [row.get(header, "") for header in headers])
        except Exception:
            logger.exception("Failed to record login activity for %s", row["Email"])
