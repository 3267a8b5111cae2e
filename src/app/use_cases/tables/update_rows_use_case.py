from typing import Any, Dict

from src.app.repositories.tabular_store import Row
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.domain.tables import TENANT_COLUMN
from src.libs.result import Result, Return

from .scope import require_id_filter, resolve_tenant_scope, scoped_filters


class UpdateRowsUseCase:
    """
    Overwrite columns of one record.

    Business Rules:
    - id and tenant_id filters are mandatory
    - Last write wins; there is no version check
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, table: str, patch: Row, filters: Dict[str, Any]
    ) -> Result[None]:
        scope = resolve_tenant_scope(caller, filters.get(TENANT_COLUMN))
        if scope.is_err():
            return scope
        has_id = require_id_filter(filters)
        if has_id.is_err():
            return has_id

        async with self.uow:
            response = await self.uow.records.update(
                table, patch, scoped_filters(filters, scope.value)
            )
            if response.error is not None:
                return Return.err(response.error)
            await self.uow.commit()
            return Return.ok()
