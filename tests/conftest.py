"""Pytest configuration to make the local package importable without installation."""
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dispute_portal.cli import main as cli_main
from dispute_portal.core.config import PortalSettings
from dispute_portal.core.models import ROLE_ADMIN, ROLE_SUPPLIER, Identity
from dispute_portal.repository import DisputeRepository
from dispute_portal.store.seed import demo_store

FIXED_NOW = datetime(2024, 1, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def demo_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep every test on the in-memory demo store, away from real sheets and endpoints."""

    monkeypatch.setenv("PORTAL_DEMO_MODE", "1")
    monkeypatch.setenv("PORTAL_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("PORTAL_SESSION_FILE", str(tmp_path / "session.json"))
    for key in (
        "PORTAL_API_URL",
        "PORTAL_PRIMARY_TABLE",
        "PORTAL_DESTINATION_TABLES",
        "PORTAL_REQUEST_TIMEOUT",
        "GOOGLE_SHEETS_SPREADSHEET_ID",
        "GOOGLE_SHEETS_SERVICE_ACCOUNT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def settings() -> PortalSettings:
    return PortalSettings()


@pytest.fixture
def store(settings: PortalSettings):
    """A fresh demo store per test."""

    return demo_store(settings)


@pytest.fixture
def repository(store, settings: PortalSettings) -> DisputeRepository:
    """Repository with a frozen clock and predictable ids."""

    return DisputeRepository(store, settings, clock=lambda: FIXED_NOW, id_factory=lambda: "DISP-TEST0001")


@pytest.fixture
def admin() -> Identity:
    return Identity(email="admin@demo", role=ROLE_ADMIN, supplier_name="Admin User")


@pytest.fixture
def supplier() -> Identity:
    return Identity(email="supplier@demo", role=ROLE_SUPPLIER, supplier_name="Demo Supplier", supplier_id="SUP001")


@pytest.fixture
def run_cli(monkeypatch: pytest.MonkeyPatch):
    """Helper to invoke the CLI with custom arguments inside tests."""

    def _run(args: list[str]) -> None:
        monkeypatch.setattr(sys, "argv", ["dispute-portal", *args])
        cli_main()

    return _run
