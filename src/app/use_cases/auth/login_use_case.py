"""
Login Use Case

Verifies credentials and resolves the user's home tenant.
"""

from datetime import UTC, datetime

import bcrypt

from src.api.utils.jwt import generate_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return

from .dtos import AuthResponse, identity_info, tenant_info


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown email and wrong password answer with the same error
    - The user must have a home tenant that still exists
    - Updates user.last_login_at and records a "login" audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[AuthResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Hash dummy password to maintain constant time
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if user.tenant_id is None:
                return Return.err(
                    Error("TENANT_NOT_FOUND", "User has no company")
                )
            tenant = await self.uow.tenants.get_by_id(user.tenant_id)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            user.last_login_at = datetime.now(UTC).replace(tzinfo=None)
            user = await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user.id,
                    action="login",
                    event_metadata={"email": user.email},
                )
            )

            await self.uow.commit()

            access_token = generate_jwt(user.id, tenant.id, is_master=user.is_master)

            return Return.ok(
                AuthResponse(
                    access_token=access_token,
                    identity=identity_info(user),
                    tenant=tenant_info(tenant),
                )
            )
