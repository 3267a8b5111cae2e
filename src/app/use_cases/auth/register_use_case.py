import bcrypt

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    Tenant,
    User,
    avatar_url_for,
    default_access_flags,
)
from src.libs.result import Error, Result, Return

from .dtos import AuthResponse, RegisterCommand, identity_info, tenant_info


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthResponse] (token + identity + tenant)

    Business Logic:
    1. Reject an email that is already registered
    2. Hash password with bcrypt cost factor 12
    3. Create User with an initials avatar
    4. Create Tenant with default access flags (problem area only)
    5. Point the user's home tenant at the new tenant
    6. Record a "register" audit event
    7. Commit atomically and issue an access token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            user = User(
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                name=command.name,
                avatar_url=avatar_url_for(command.name),
            )
            user = await self.uow.users.create(user)

            tenant = Tenant(
                name=command.company_name,
                access_flags=default_access_flags(),
                created_by=user.id,
            )
            tenant = await self.uow.tenants.create(tenant)

            user.tenant_id = tenant.id
            user = await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user.id,
                    action="register",
                    event_metadata={"email": user.email, "tenant_name": tenant.name},
                )
            )

            await self.uow.commit()

            # Import JWT utility here to avoid circular dependency
            from src.api.utils.jwt import generate_jwt

            access_token = generate_jwt(user.id, tenant.id, is_master=user.is_master)

            return Return.ok(
                AuthResponse(
                    access_token=access_token,
                    identity=identity_info(user),
                    tenant=tenant_info(tenant),
                )
            )
