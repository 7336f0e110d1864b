"""Integration-style tests that exercise the CLI entrypoint against the demo store."""
import csv
import json
from pathlib import Path

import pytest
from openpyxl import load_workbook

import dispute_portal.cli as cli
from dispute_portal.core.errors import NotFoundError


def test_export_writes_excel(tmp_path: Path, run_cli, capsys) -> None:
    target = tmp_path / "disputes.xlsx"

    run_cli(["export", "--output", str(target)])

    assert f"Wrote {target}" in capsys.readouterr().out
    sheet = load_workbook(target).active
    assert sheet.max_row - 1 == 7


def test_export_csv_applies_filters(tmp_path: Path, run_cli) -> None:
    target = tmp_path / "pending.csv"

    run_cli(["export", "--format", "csv", "--output", str(target), "--status", "Pending"])

    with target.open(encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert [row["Order Number"] for row in rows] == ["ORD001", "ORD005"]


def test_export_for_one_supplier(tmp_path: Path, run_cli) -> None:
    target = tmp_path / "mine.csv"

    run_cli(["export", "--format", "csv", "--output", str(target), "--owner", "SUP001", "--search", "wrong"])

    with target.open(encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert [row["Order Number"] for row in rows] == ["ORD002"]


def test_metrics_prints_json(run_cli, capsys) -> None:
    run_cli(["metrics"])

    report = json.loads(capsys.readouterr().out)
    assert report["metrics"]["total_submitted"] == 7
    assert report["tally"]["Pending"] == 2
    assert report["resolution_rate"] == 14
    assert [bucket["days"] for bucket in report["pending_age"]] == ["0-3 days", "4-7 days", "8-14 days", "15+ days"]


def test_metrics_for_supplier(run_cli, capsys) -> None:
    run_cli(["metrics", "--owner", "supplier@demo"])

    report = json.loads(capsys.readouterr().out)
    assert report["metrics"]["total_submitted"] == 4


def test_portal_errors_exit_non_zero(monkeypatch: pytest.MonkeyPatch, run_cli, capsys) -> None:
    class MissingSheet:
        def list(self, owner=None):
            raise NotFoundError("Sheet 'Adminportal' not found")

    monkeypatch.setattr(cli, "build_repository", lambda settings: MissingSheet())

    with pytest.raises(SystemExit) as excinfo:
        run_cli(["metrics"])

    assert excinfo.value.code == 1
    assert "Sheet 'Adminportal' not found" in capsys.readouterr().err


def test_serve_hands_the_app_to_uvicorn(monkeypatch: pytest.MonkeyPatch, run_cli) -> None:
    import uvicorn

    captured = {}

    def fake_run(app, host, port):
        captured.update(app=app, host=host, port=port)

    monkeypatch.setattr(uvicorn, "run", fake_run)

    run_cli(["serve", "--port", "9000"])

    assert captured["port"] == 9000
    assert captured["host"] == "127.0.0.1"
    assert captured["app"].state.backend is not None
