"""
Export Table Use Case

Renders one table's rows for a tenant as a CSV document.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.app.use_cases.tables.scope import resolve_tenant_scope
from src.domain.tables import TENANT_COLUMN
from src.libs.result import Error, Result, Return

from .csv_render import render_competitor_matrix, render_rows

logger = logging.getLogger(__name__)

MATRIX_TABLE = "competitor_matrices"


class ExportResponse(BaseModel):
    filename: str
    content: str


class ExportTableUseCase:
    """
    Business Rules:
    - Same tenant scoping as table reads
    - Competitor matrices export the tenant's matrix as a grid;
      an empty matrix table is NO_ROWS
    - Pure read: nothing is written
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, table: str, tenant_id: Optional[str]
    ) -> Result[ExportResponse]:
        scope = resolve_tenant_scope(caller, tenant_id)
        if scope.is_err():
            return scope

        async with self.uow:
            response = await self.uow.records.select(
                table, {TENANT_COLUMN: str(scope.value)}
            )
        if response.error is not None:
            return Return.err(response.error)

        rows = response.rows
        if table == MATRIX_TABLE:
            if not rows:
                return Return.err(Error("NO_ROWS", "No competitor matrix to export"))
            content = render_competitor_matrix(rows[0])
            filename = "competitors_analysis.csv"
        else:
            content = render_rows(table, rows)
            filename = f"{table}.csv"

        logger.info(f"Exported {len(rows)} {table} row(s) for tenant {scope.value}")
        return Return.ok(ExportResponse(filename=filename, content=content))
