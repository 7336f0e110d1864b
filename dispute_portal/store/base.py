"""Row store contract shared by the in-memory and Google Sheets backends.

A table is addressed by name and holds a header row followed by data rows.
Data rows are exposed as dictionaries keyed by header, in sheet order.
``row_index`` arguments count data rows from zero (the header is not a row).
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence


class RowStore:
    """Minimal tabular persistence used by the repository and the endpoint."""

    def has_table(self, table: str) -> bool:
        raise NotImplementedError

    def headers(self, table: str) -> List[str]:
        raise NotImplementedError

    def read_rows(self, table: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def append_row(self, table: str, values: Sequence[Any]) -> None:
        raise NotImplementedError

    def update_row(self, table: str, row_index: int, values: Dict[str, Any]) -> None:
        raise NotImplementedError

    def ensure_table(self, table: str, headers: Sequence[str]) -> None:
        raise NotImplementedError


def rows_from_values(values: List[List[Any]]) -> List[Dict[str, Any]]:
    """Turn a grid (header row first) into header-keyed dictionaries."""

    if not values:
        return []
    headers = [str(header) for header in values[0]]
    rows: List[Dict[str, Any]] = []
    for raw in values[1:]:
        padded = list(raw) + [""] * (len(headers) - len(raw))
        rows.append({header: padded[i] for i, header in enumerate(headers) if header})
    return rows
