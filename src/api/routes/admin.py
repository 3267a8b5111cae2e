"""
Admin API Routes

Company overview and access control for master users (JWT), plus the
service-to-service grant of master privilege (Admin API Key).
"""

from typing import Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    AccessFlagsResponse,
    GetAccessFlagsUseCase,
    GrantMasterResponse,
    GrantMasterUseCase,
    ListTenantsResponse,
    ListTenantsUseCase,
    UpdateAccessFlagsUseCase,
)
from src.app.use_cases.caller import Caller
from src.depends import get_caller, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get(
    "/tenants", status_code=status.HTTP_200_OK, response_model=ListTenantsResponse
)
async def list_tenants(
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List every company with its access flags (master users only).

    Raises:
        - 403 Forbidden: Caller is not a master user
    """
    use_case = ListTenantsUseCase(uow)
    result = await use_case.execute(caller)

    if result.is_err():
        error = result.error
        if error.code == "NOT_PRIVILEGED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.get(
    "/tenants/{tenant_id}/access",
    status_code=status.HTTP_200_OK,
    response_model=AccessFlagsResponse,
)
async def get_access_flags(
    tenant_id: UUID,
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetAccessFlagsUseCase(uow)
    result = await use_case.execute(caller, tenant_id)

    if result.is_err():
        error = result.error
        if error.code == "TENANT_FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class UpdateAccessFlagsRequest(BaseModel):
    """PUT /admin/tenants/{id}/access payload; missing areas are disabled"""

    access_flags: Dict[str, bool] = Field(..., description="Feature area -> enabled")


@router.put(
    "/tenants/{tenant_id}/access",
    status_code=status.HTTP_200_OK,
    response_model=AccessFlagsResponse,
)
async def update_access_flags(
    tenant_id: UUID,
    request: UpdateAccessFlagsRequest,
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Replace a company's access flags (master users only).

    Raises:
        - 400 Bad Request: Unknown feature area
        - 403 Forbidden: Caller is not a master user
        - 404 Not Found: TENANT_NOT_FOUND
    """
    use_case = UpdateAccessFlagsUseCase(uow)
    result = await use_case.execute(caller, tenant_id, request.access_flags)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ACCESS_AREA":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_PRIVILEGED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class GrantMasterRequest(BaseModel):
    is_master: bool = True


@router.post(
    "/users/{user_id}/master",
    status_code=status.HTTP_200_OK,
    response_model=GrantMasterResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def grant_master(
    user_id: UUID,
    request: Optional[GrantMasterRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Grant (or revoke) master privilege.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: USER_NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = GrantMasterUseCase(uow)
    is_master = request.is_master if request is not None else True
    result = await use_case.execute(user_id, is_master=is_master)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
