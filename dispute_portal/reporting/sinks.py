"""File sinks for exporting dispute rows."""
from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

from openpyxl import Workbook

from dispute_portal.reporting.templates import EXPORT_HEADERS

SHEET_TITLE = "Disputes"


def ensure_output_dir(output_path: Path) -> None:
    """Create parent folders for sink outputs when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def _workbook(rows: List[Dict[str, Any]], headers: Sequence[str]) -> Workbook:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    sheet.append(list(headers))
    for row in rows:
        sheet.append([row.get(header, "") for header in headers])
    return workbook


def write_excel(
    rows: Iterable[Dict[str, Any]], output_path: Path, headers: Sequence[str] = EXPORT_HEADERS
) -> None:
    """Write rows to an Excel workbook; the header row is written even when empty."""

    ensure_output_dir(output_path)
    _workbook(list(rows), headers).save(output_path)


def excel_bytes(rows: Iterable[Dict[str, Any]], headers: Sequence[str] = EXPORT_HEADERS) -> bytes:
    """Render the workbook in memory, for browser downloads."""

    buffer = io.BytesIO()
    _workbook(list(rows), headers).save(buffer)
    return buffer.getvalue()


def write_csv(
    rows: Iterable[Dict[str, Any]], output_path: Path, headers: Sequence[str] = EXPORT_HEADERS
) -> None:
    """Write export rows to a CSV file with consistent headers."""

    rows = list(rows)
    ensure_output_dir(output_path)
    with output_path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=list(headers))
        writer.writeheader()
        writer.writerows(rows)
