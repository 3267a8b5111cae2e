"""
Switch Acting Tenant Use Case

Lets a master user act on behalf of another tenant, leaving an audit trail.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import tenant_info
from src.app.use_cases.caller import Caller
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return

from .dtos import SwitchTenantResponse


class SwitchTenantUseCase:
    """
    Use case for switching the acting tenant of a master user.

    Business Rules:
    - Only master users may act as another tenant
    - Target tenant must exist
    - The user's home tenant never changes; the switch is recorded as a
      "tenant_switch" audit event against the target tenant
    - Switching back to the home tenant is allowed and audited the same way
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Caller, target_tenant_id: UUID
    ) -> Result[SwitchTenantResponse]:
        if not caller.is_master:
            return Return.err(
                Error("NOT_PRIVILEGED", "Only master users can switch company")
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(target_tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=caller.user_id,
                    action="tenant_switch",
                    event_metadata={
                        "home_tenant_id": str(caller.tenant_id),
                        "acting_tenant_id": str(tenant.id),
                        "tenant_name": tenant.name,
                    },
                )
            )
            await self.uow.commit()

            return Return.ok(
                SwitchTenantResponse(
                    acting_tenant=tenant_info(tenant),
                    home_tenant_id=str(caller.tenant_id),
                )
            )
