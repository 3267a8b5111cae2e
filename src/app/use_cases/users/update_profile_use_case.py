from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import IdentityInfo, identity_info
from src.libs.result import Error, Result, Return


class UpdateProfileUseCase:
    """
    Update the signed-in user's display name and avatar.

    Fields left as None are not touched; a blank name is rejected.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Result[IdentityInfo]:
        if name is not None and not name.strip():
            return Return.err(Error("INVALID_NAME", "Name cannot be blank"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if name is not None:
                user.name = name.strip()
            if avatar_url is not None:
                user.avatar_url = avatar_url
            user = await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(identity_info(user))
