from typing import Any, Dict, List

from src.app.repositories.tabular_store import Row
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.domain.tables import TENANT_COLUMN
from src.libs.result import Result, Return

from .scope import resolve_tenant_scope, scoped_filters


class SelectRowsUseCase:
    """
    Read the rows of one tenant-owned table matching equality filters.

    Business Rules:
    - The tenant_id filter is mandatory and scoped to the caller
    - No pagination: every matching row is returned, ordered by id
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, table: str, filters: Dict[str, Any]
    ) -> Result[List[Row]]:
        scope = resolve_tenant_scope(caller, filters.get(TENANT_COLUMN))
        if scope.is_err():
            return scope

        async with self.uow:
            response = await self.uow.records.select(
                table, scoped_filters(filters, scope.value)
            )
            if response.error is not None:
                return Return.err(response.error)
            return Return.ok(response.rows)
