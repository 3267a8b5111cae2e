"""
Change Password Use Case

Lets a signed-in user replace their password.
"""

from uuid import UUID

import bcrypt

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.libs.result import Error, Result, Return

from .dtos import ChangePasswordResponse

MIN_PASSWORD_LENGTH = 8


class ChangePasswordUseCase:
    """
    Use case for changing the signed-in user's password.

    Business Rules:
    - The current password must be confirmed
    - The new password must be at least 8 characters long
    - The new password must differ from the current one
    - Password is hashed with bcrypt (cost factor 12)
    - Records a "password_changed" audit event on the home tenant
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> Result[ChangePasswordResponse]:
        """
        Errors:
            - INVALID_PASSWORD: New password is too short
            - USER_NOT_FOUND: User no longer exists
            - INVALID_CREDENTIALS: Current password does not match
            - PASSWORD_UNCHANGED: New password equals the current one
        """
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error("INVALID_PASSWORD", "Password must be at least 8 characters long")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            current_hash = user.password_hash.encode()
            if not bcrypt.checkpw(current_password.encode(), current_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Current password is incorrect")
                )
            if bcrypt.checkpw(new_password.encode(), current_hash):
                return Return.err(
                    Error(
                        "PASSWORD_UNCHANGED",
                        "New password must be different from the current one",
                    )
                )

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            user.password_hash = password_hash.decode()
            await self.uow.users.update(user)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=user.tenant_id,
                    user_id=user.id,
                    action="password_changed",
                    event_metadata={"email": user.email},
                )
            )

            await self.uow.commit()

            return Return.ok(
                ChangePasswordResponse(
                    status="success", message="Password has been changed successfully"
                )
            )
