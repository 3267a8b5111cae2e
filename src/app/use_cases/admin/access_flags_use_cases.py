"""
Use Cases: Read / Replace Tenant Access Flags

Access flags decide which feature areas a tenant's non-master users may open.
"""

from typing import Dict
from uuid import UUID

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.domain.entities import AccessArea, AuditEvent
from src.libs.result import Error, Result, Return


class AccessFlagsResponse(BaseModel):
    """Response DTO for both access flag use cases"""

    tenant_id: str
    access_flags: Dict[str, bool]


def _normalized(flags: Dict[str, bool]) -> Dict[str, bool]:
    """Every known area present, unknown keys dropped"""
    return {area.value: bool(flags.get(area.value, False)) for area in AccessArea}


class GetAccessFlagsUseCase:
    """
    Business Rules:
    - Master users may read any tenant's flags
    - Other users may read only their home tenant's flags
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Caller, tenant_id: UUID) -> Result[AccessFlagsResponse]:
        if not caller.is_master and tenant_id != caller.tenant_id:
            return Return.err(
                Error("TENANT_FORBIDDEN", "Cannot read another company's access")
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            return Return.ok(
                AccessFlagsResponse(
                    tenant_id=str(tenant.id),
                    access_flags=_normalized(tenant.access_flags or {}),
                )
            )


class UpdateAccessFlagsUseCase:
    """
    Replace a tenant's access flags.

    Business Logic:
    1. Caller must be master
    2. Reject unknown feature areas (INVALID_ACCESS_AREA)
    3. Store the full flag set (missing areas become False)
    4. Record an "access_flags_updated" audit event with before/after
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, tenant_id: UUID, flags: Dict[str, bool]
    ) -> Result[AccessFlagsResponse]:
        if not caller.is_master:
            return Return.err(
                Error("NOT_PRIVILEGED", "Only master users can edit access")
            )

        known = {area.value for area in AccessArea}
        unknown = sorted(set(flags) - known)
        if unknown:
            return Return.err(
                Error("INVALID_ACCESS_AREA", f"Unknown area(s): {', '.join(unknown)}")
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            previous = _normalized(tenant.access_flags or {})
            tenant.access_flags = _normalized(flags)
            tenant = await self.uow.tenants.update(tenant)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=caller.user_id,
                    action="access_flags_updated",
                    event_metadata={"before": previous, "after": tenant.access_flags},
                )
            )
            await self.uow.commit()

            return Return.ok(
                AccessFlagsResponse(
                    tenant_id=str(tenant.id), access_flags=dict(tenant.access_flags)
                )
            )
