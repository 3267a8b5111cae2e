"""
Use Case: List Tenants

Master-only overview of every company in the workspace.
"""

from typing import List, Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.libs.result import Error, Result, Return


class TenantSummary(BaseModel):
    id: str
    name: str
    created_by: Optional[str]


class ListTenantsResponse(BaseModel):
    """Response DTO for ListTenantsUseCase"""

    tenants: List[TenantSummary]


class ListTenantsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller) -> Result[ListTenantsResponse]:
        if not caller.is_master:
            return Return.err(
                Error("NOT_PRIVILEGED", "Only master users can list companies")
            )

        async with self.uow:
            tenants = await self.uow.tenants.list_all()
            return Return.ok(
                ListTenantsResponse(
                    tenants=[
                        TenantSummary(
                            id=str(tenant.id),
                            name=tenant.name,
                            created_by=str(tenant.created_by) if tenant.created_by else None,
                        )
                        for tenant in tenants
                    ]
                )
            )
