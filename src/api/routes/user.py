from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import IdentityInfo
from src.app.use_cases.caller import Caller
from src.app.use_cases.users import (
    ChangePasswordResponse,
    ChangePasswordUseCase,
    ContextResponse,
    LoadContextUseCase,
    UpdateProfileUseCase,
)
from src.depends import get_caller, get_unit_of_work

router = APIRouter(prefix="/users", tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ContextResponse)
async def get_me(
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load the signed-in user, their home company and its access flags.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: User or company no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = LoadContextUseCase(uow)
    result = await use_case.execute(caller.user_id)

    if result.is_err():
        error = result.error
        if error.code in ("USER_NOT_FOUND", "TENANT_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class UpdateProfileRequest(BaseModel):
    """PATCH /users/me request payload; omitted fields stay unchanged"""

    name: Optional[str] = Field(None, max_length=255)
    avatar_url: Optional[str] = Field(None, max_length=1024)


@router.patch("/me", status_code=status.HTTP_200_OK, response_model=IdentityInfo)
async def update_me(
    request: UpdateProfileRequest,
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = UpdateProfileUseCase(uow)
    result = await use_case.execute(
        caller.user_id, name=request.name, avatar_url=request.avatar_url
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_NAME":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class ChangePasswordRequest(BaseModel):
    """PATCH /users/me/password request payload"""

    current_password: str = Field(..., description="Password the user signs in with today")
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars)")


@router.patch(
    "/me/password", status_code=status.HTTP_200_OK, response_model=ChangePasswordResponse
)
async def change_password(
    request: ChangePasswordRequest,
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Replace the signed-in user's password.

    Issued tokens stay valid until they expire.

    Raises:
        - 400 Bad Request: Current password is wrong, or the new one is unchanged or too short
        - 401 Unauthorized: Invalid or expired JWT
        - 404 Not Found: User no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = ChangePasswordUseCase(uow)
    result = await use_case.execute(
        caller.user_id, request.current_password, request.new_password
    )

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_CREDENTIALS", "PASSWORD_UNCHANGED", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
