"""
Competitor analysis grid.

One matrix per tenant: rows are the criteria being compared, columns are
competitors, cells say whether a competitor meets a criterion. Every edit
saves the whole grid.
"""

import copy
from typing import Dict, List, Optional

from src.app.controllers.collection_controller import CollectionController
from src.app.controllers.entity_types import COMPETITOR_MATRIX
from src.app.repositories.tabular_store import ITabularStore, Row
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.app.services.user_messages import NOT_SELECTED, VALIDATION_FAILURE
from src.libs.result import Result

Cells = Dict[str, Dict[str, bool]]


class CompetitorMatrixController(CollectionController):
    def __init__(
        self,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        super().__init__(COMPETITOR_MATRIX, store, session, notifier)

    @property
    def matrix(self) -> Optional[Row]:
        rows = self.rows
        return rows[0] if rows else None

    def is_checked(self, row: str, column: str) -> bool:
        matrix = self.matrix or {}
        return bool((matrix.get("cells") or {}).get(row, {}).get(column, False))

    async def _save(self, columns: List[str], rows: List[str], cells: Cells) -> Result[Row]:
        matrix = self.matrix
        if matrix is None:
            return self._fail(NOT_SELECTED, "update", "No competitor matrix loaded")
        self.select(matrix["id"])
        return await self.update(
            matrix["id"], {"columns": columns, "rows": rows, "cells": cells}
        )

    def _grid(self):
        matrix = self.matrix or {}
        return (
            list(matrix.get("columns") or []),
            list(matrix.get("rows") or []),
            copy.deepcopy(matrix.get("cells") or {}),
        )

    def _invalid_name(self, name: Optional[str], taken: List[str]) -> Optional[Result]:
        if not name or not name.strip():
            return self._fail(VALIDATION_FAILURE, "update", "Name is empty")
        if name in taken:
            return self._fail(VALIDATION_FAILURE, "update", f"Name '{name}' is already used")
        return None

    async def add_column(self, name: Optional[str] = None) -> Result[Row]:
        columns, rows, cells = self._grid()
        name = name if name is not None else f"Column {len(columns) + 1}"
        invalid = self._invalid_name(name, columns)
        if invalid is not None:
            return invalid
        for row in rows:
            cells.setdefault(row, {})[name] = False
        return await self._save([*columns, name], rows, cells)

    async def add_row(self, name: Optional[str] = None) -> Result[Row]:
        columns, rows, cells = self._grid()
        name = name if name is not None else f"Row {len(rows) + 1}"
        invalid = self._invalid_name(name, rows)
        if invalid is not None:
            return invalid
        cells[name] = {column: False for column in columns}
        return await self._save(columns, [*rows, name], cells)

    async def toggle_cell(self, row: str, column: str) -> Result[Row]:
        columns, rows, cells = self._grid()
        if row not in rows or column not in columns:
            return self._fail(VALIDATION_FAILURE, "update", f"No cell ({row}, {column})")
        cells.setdefault(row, {})[column] = not cells.get(row, {}).get(column, False)
        return await self._save(columns, rows, cells)

    async def rename_column(self, old: str, new: str) -> Result[Row]:
        columns, rows, cells = self._grid()
        if old not in columns:
            return self._fail(VALIDATION_FAILURE, "update", f"No column '{old}'")
        if new == old:
            return await self._save(columns, rows, cells)
        invalid = self._invalid_name(new, columns)
        if invalid is not None:
            return invalid
        for marks in cells.values():
            if old in marks:
                marks[new] = marks.pop(old)
        return await self._save([new if c == old else c for c in columns], rows, cells)

    async def rename_row(self, old: str, new: str) -> Result[Row]:
        columns, rows, cells = self._grid()
        if old not in rows:
            return self._fail(VALIDATION_FAILURE, "update", f"No row '{old}'")
        if new == old:
            return await self._save(columns, rows, cells)
        invalid = self._invalid_name(new, rows)
        if invalid is not None:
            return invalid
        cells[new] = cells.pop(old, {})
        return await self._save(columns, [new if r == old else r for r in rows], cells)
