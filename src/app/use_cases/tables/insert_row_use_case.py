import logging
from typing import List

from src.app.repositories.tabular_store import Row
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.domain.tables import TENANT_COLUMN
from src.libs.result import Result, Return

from .scope import resolve_tenant_scope

logger = logging.getLogger(__name__)


class InsertRowUseCase:
    """
    Create one row in a tenant-owned table.

    Business Rules:
    - The row must name its tenant; non-master callers only their own
    - id and timestamps are assigned by the store
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, table: str, row: Row) -> Result[List[Row]]:
        scope = resolve_tenant_scope(caller, row.get(TENANT_COLUMN))
        if scope.is_err():
            return scope

        async with self.uow:
            response = await self.uow.records.insert(
                table, {**row, TENANT_COLUMN: str(scope.value)}
            )
            if response.error is not None:
                return Return.err(response.error)
            await self.uow.commit()

        logger.info(f"User {caller.user_id} created a {table} row for {scope.value}")
        return Return.ok(response.rows)
