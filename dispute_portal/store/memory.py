"""In-memory row store used by tests and demo mode."""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Sequence

from dispute_portal.core.errors import NotFoundError, StoreError
from dispute_portal.store.base import RowStore, rows_from_values

logger = logging.getLogger(__name__)


class MemoryRowStore(RowStore):
    """Keeps every table as a grid of values, header row first, like a sheet."""

    def __init__(self, tables: Optional[Dict[str, List[List[Any]]]] = None) -> None:
        self._tables: Dict[str, List[List[Any]]] = copy.deepcopy(tables or {})

    def _grid(self, table: str) -> List[List[Any]]:
        grid = self._tables.get(table)
        if grid is None:
            raise NotFoundError(f"Sheet '{table}' not found")
        return grid

    def has_table(self, table: str) -> bool:
        return table in self._tables

    def headers(self, table: str) -> List[str]:
        grid = self._grid(table)
        return [str(header) for header in grid[0]] if grid else []

    def read_rows(self, table: str) -> List[Dict[str, Any]]:
        return rows_from_values(copy.deepcopy(self._grid(table)))

    def append_row(self, table: str, values: Sequence[Any]) -> None:
        self._grid(table).append(list(values))

    def update_row(self, table: str, row_index: int, values: Dict[str, Any]) -> None:
        grid = self._grid(table)
        headers = self.headers(table)
        if row_index < 0 or row_index + 1 >= len(grid):
            raise NotFoundError(f"Row {row_index} not found in sheet '{table}'")
        row = grid[row_index + 1]
        row.extend([""] * (len(headers) - len(row)))
        for header, value in values.items():
            if header not in headers:
                raise StoreError(f"Column '{header}' not found in sheet '{table}'")
            row[headers.index(header)] = value

    def ensure_table(self, table: str, headers: Sequence[str]) -> None:
        if table not in self._tables:
            logger.info("Creating sheet %s", table)
            self._tables[table] = [list(headers)]

    def snapshot(self) -> Dict[str, List[List[Any]]]:
        """Return a deep copy of every table, for assertions and debugging."""

        return copy.deepcopy(self._tables)
