"""Google Sheets row store backed by a service account."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence

import gspread

from dispute_portal.core.errors import NotFoundError, StoreError
from dispute_portal.store.base import RowStore, rows_from_values

logger = logging.getLogger(__name__)


class GoogleSheetsRowStore(RowStore):
    """Each table is a worksheet; row 1 holds the headers."""

    def __init__(self, spreadsheet_id: str, service_account_path: Path | None = None, client=None) -> None:
        if not spreadsheet_id:
            raise ValueError("spreadsheet_id is required for the Google Sheets store")
        if client is None:
            client = (
                gspread.service_account(filename=str(service_account_path))
                if service_account_path
                else gspread.service_account()
            )
        self._spreadsheet = client.open_by_key(spreadsheet_id)

    def _worksheet(self, table: str):
        try:
            return self._spreadsheet.worksheet(table)
        except gspread.exceptions.WorksheetNotFound as exc:
            raise NotFoundError(f"Sheet '{table}' not found") from exc
        except gspread.exceptions.APIError as exc:
            raise StoreError(f"Google Sheets request failed: {exc}") from exc

    def has_table(self, table: str) -> bool:
        try:
            self._worksheet(table)
        except NotFoundError:
            return False
        return True

    def headers(self, table: str) -> List[str]:
        try:
            return [str(value) for value in self._worksheet(table).row_values(1)]
        except gspread.exceptions.APIError as exc:
            raise StoreError(f"Google Sheets request failed: {exc}") from exc

    def read_rows(self, table: str) -> List[Dict[str, Any]]:
        try:
            values = self._worksheet(table).get_all_values()
        except gspread.exceptions.APIError as exc:
            raise StoreError(f"Google Sheets request failed: {exc}") from exc
        return rows_from_values(values)

    def append_row(self, table: str, values: Sequence[Any]) -> None:
        try:
            self._worksheet(table).append_row(list(values), value_input_option="USER_ENTERED")
        except gspread.exceptions.APIError as exc:
            raise StoreError(f"Google Sheets request failed: {exc}") from exc

    def update_row(self, table: str, row_index: int, values: Dict[str, Any]) -> None:
        worksheet = self._worksheet(table)
        headers = self.headers(table)
        sheet_row = row_index + 2
        try:
            for header, value in values.items():
                if header not in headers:
                    raise StoreError(f"Column '{header}' not found in sheet '{table}'")
                worksheet.update_cell(sheet_row, headers.index(header) + 1, value)
        except gspread.exceptions.APIError as exc:
            raise StoreError(f"Google Sheets request failed: {exc}") from exc

    def ensure_table(self, table: str, headers: Sequence[str]) -> None:
        if self.has_table(table):
            return
        logger.info("Creating worksheet %s", table)
        try:
            worksheet = self._spreadsheet.add_worksheet(title=table, rows=1000, cols=max(len(headers), 1))
            worksheet.append_row(list(headers))
        except gspread.exceptions.APIError as exc:
            raise StoreError(f"Google Sheets request failed: {exc}") from exc
