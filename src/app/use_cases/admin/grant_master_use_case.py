"""
Use Case: Grant Master Privilege

Service-to-service operation (admin API key); there is no self-service path
to become a master user.
"""

from uuid import UUID

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return


class GrantMasterResponse(BaseModel):
    """Response DTO for GrantMasterUseCase"""

    user_id: str
    is_master: bool


class GrantMasterUseCase:
    """
    Business Logic:
    1. Validate user exists
    2. Set (or clear) is_master
    3. Record a "master_granted" / "master_revoked" audit event

    Idempotent: granting an existing master succeeds without change
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, is_master: bool = True) -> Result[GrantMasterResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if user.is_master != is_master:
                user.is_master = is_master
                user = await self.uow.users.update(user)
                await self.uow.audit_events.create(
                    AuditEvent(
                        tenant_id=user.tenant_id,
                        user_id=None,  # System action, no acting user
                        action="master_granted" if is_master else "master_revoked",
                        event_metadata={"user_id": str(user.id), "email": user.email},
                    )
                )
                await self.uow.commit()

            return Return.ok(
                GrantMasterResponse(user_id=str(user.id), is_master=user.is_master)
            )
