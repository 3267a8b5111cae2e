"""
Load Context Use Case

Loads the signed-in user, their home tenant and its access flags.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import identity_info, tenant_info
from src.libs.result import Error, Result, Return

from .dtos import ContextResponse


class LoadContextUseCase:
    """
    Use case for loading current user and tenant context.

    Business Rules:
    - JWT payload provides user_id
    - User must exist and still have a home tenant
    - Returns identity + tenant details (with access flags)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[ContextResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            tenant = None
            if user.tenant_id is not None:
                tenant = await self.uow.tenants.get_by_id(user.tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            return Return.ok(
                ContextResponse(identity=identity_info(user), tenant=tenant_info(tenant))
            )
