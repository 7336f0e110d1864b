"""Tests for settings resolution and store selection."""
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

from dispute_portal.core.config import DESTINATION_TABLES, load_settings
from dispute_portal.core.utils import get_config_value
from dispute_portal.repository import DisputeRepository, RemoteDisputeRepository, build_repository
from dispute_portal.store.memory import MemoryRowStore


def test_defaults_run_in_demo_mode():
    settings = load_settings()

    assert settings.demo_mode is True
    assert settings.primary_table == "Adminportal"
    assert settings.destination_tables == DESTINATION_TABLES
    assert not settings.uses_sheets
    assert not settings.uses_remote_api


def test_env_values_override_defaults(monkeypatch):
    monkeypatch.setenv("PORTAL_DEMO_MODE", "0")
    monkeypatch.setenv("PORTAL_API_URL", "https://portal.example/exec")
    monkeypatch.setenv("PORTAL_DESTINATION_TABLES", " Adminportal , Archive,")
    monkeypatch.setenv("PORTAL_REQUEST_TIMEOUT", "12")

    settings = load_settings()

    assert settings.uses_remote_api
    assert settings.destination_tables == ("Adminportal", "Archive")
    assert settings.request_timeout == 12.0


def test_invalid_timeout_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("PORTAL_REQUEST_TIMEOUT", "soon")
    caplog.set_level("WARNING")

    assert load_settings().request_timeout == 30.0
    assert "PORTAL_REQUEST_TIMEOUT" in caplog.text


def test_env_file_fills_missing_values(monkeypatch, tmp_path: Path):
    env_file = tmp_path / "portal.env"
    env_file.write_text("# local overrides\nPORTAL_PRIMARY_TABLE='Archive'\n", encoding="utf-8")
    monkeypatch.setenv("PORTAL_ENV_FILE", str(env_file))
    # Registers the variable with monkeypatch so the value loaded from the file is undone.
    monkeypatch.setenv("PORTAL_PRIMARY_TABLE", "")
    monkeypatch.delenv("PORTAL_PRIMARY_TABLE")

    assert load_settings().primary_table == "Archive"


def test_build_repository_picks_backend(monkeypatch):
    assert isinstance(build_repository(load_settings()), DisputeRepository)

    monkeypatch.setenv("PORTAL_DEMO_MODE", "0")
    monkeypatch.setenv("PORTAL_API_URL", "https://portal.example/exec")
    assert isinstance(build_repository(load_settings()), RemoteDisputeRepository)

    store = MemoryRowStore({"Adminportal": [["ID"]]})
    assert build_repository(load_settings(), store).store is store


class _Secrets:
    def __init__(self, error):
        self.error = error

    def __contains__(self, key):
        raise self.error


def test_missing_secrets_file_falls_back_to_env(monkeypatch):
    monkeypatch.setitem(sys.modules, "streamlit", SimpleNamespace(secrets=_Secrets(FileNotFoundError("no secrets.toml"))))
    monkeypatch.setenv("PORTAL_API_URL", "https://portal.example/exec")

    assert get_config_value("PORTAL_API_URL") == "https://portal.example/exec"


def test_unexpected_secrets_errors_propagate(monkeypatch):
    monkeypatch.setitem(sys.modules, "streamlit", SimpleNamespace(secrets=_Secrets(RuntimeError("bad secrets.toml"))))

    with pytest.raises(RuntimeError):
        get_config_value("PORTAL_API_URL")
