"""Runtime settings resolved from Streamlit secrets, env vars and a local env file."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dispute_portal.core.utils import get_config_value, load_env_file

DEFAULT_ENV_FILE = Path("secrets/portal.env")
DEFAULT_SERVICE_ACCOUNT_PATHS = [
    Path("secrets/service_account.json"),
    Path("credentials/service_account.json"),
]
DEFAULT_SESSION_FILE = Path("~/.dispute_portal/session.json")

PRIMARY_TABLE = "Adminportal"
DESTINATION_TABLES = ("Newform", "Adminportal", "Supplierview")
CREDENTIALS_TABLE = "Profiles"
ACTIVITY_TABLE = "LoginActivity"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortalSettings:
    api_url: str = ""
    demo_mode: bool = True
    spreadsheet_id: str = ""
    service_account_path: Optional[Path] = None
    primary_table: str = PRIMARY_TABLE
    destination_tables: Tuple[str, ...] = field(default=DESTINATION_TABLES)
    credentials_table: str = CREDENTIALS_TABLE
    activity_table: str = ACTIVITY_TABLE
    session_file: Path = DEFAULT_SESSION_FILE
    request_timeout: float = 30.0

    @property
    def uses_remote_api(self) -> bool:
        return bool(self.api_url) and not self.demo_mode

    @property
    def uses_sheets(self) -> bool:
        return bool(self.spreadsheet_id) and not self.demo_mode


def _default_service_account_path() -> Optional[Path]:
    for candidate in DEFAULT_SERVICE_ACCOUNT_PATHS:
        if candidate.exists():
            return candidate
    return None


def _table_list(raw: str) -> Tuple[str, ...]:
    tables = tuple(name.strip() for name in raw.split(",") if name.strip())
    return tables or DESTINATION_TABLES


def _timeout(raw: str) -> float:
    try:
        return max(1.0, float(raw))
    except ValueError:
        logger.warning("Ignoring invalid PORTAL_REQUEST_TIMEOUT=%r", raw)
        return 30.0


def load_settings() -> PortalSettings:
    """Resolve settings once per call; the env file never overrides real env vars."""

    load_env_file(Path(os.getenv("PORTAL_ENV_FILE", DEFAULT_ENV_FILE)))

    account_value = get_config_value("GOOGLE_SHEETS_SERVICE_ACCOUNT")
    account_path = Path(account_value) if account_value else _default_service_account_path()

    return PortalSettings(
        api_url=get_config_value("PORTAL_API_URL").strip(),
        demo_mode=get_config_value("PORTAL_DEMO_MODE", "1").strip() == "1",
        spreadsheet_id=get_config_value("GOOGLE_SHEETS_SPREADSHEET_ID").strip(),
        service_account_path=account_path,
        primary_table=get_config_value("PORTAL_PRIMARY_TABLE", PRIMARY_TABLE).strip() or PRIMARY_TABLE,
        destination_tables=_table_list(get_config_value("PORTAL_DESTINATION_TABLES")),
        credentials_table=get_config_value("PORTAL_CREDENTIALS_TABLE", CREDENTIALS_TABLE).strip()
        or CREDENTIALS_TABLE,
        activity_table=get_config_value("PORTAL_ACTIVITY_TABLE", ACTIVITY_TABLE).strip() or ACTIVITY_TABLE,
        session_file=Path(get_config_value("PORTAL_SESSION_FILE", str(DEFAULT_SESSION_FILE))).expanduser(),
        request_timeout=_timeout(get_config_value("PORTAL_REQUEST_TIMEOUT", "30")),
    )
