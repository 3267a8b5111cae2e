from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.app.use_cases.tenants import SwitchTenantResponse, SwitchTenantUseCase
from src.depends import get_caller, get_unit_of_work

router = APIRouter(prefix="/tenants", tags=["Tenant"])


class SwitchTenantRequest(BaseModel):
    """POST /tenants/switch request payload"""

    tenant_id: UUID = Field(..., description="Company the master user acts as")


@router.post(
    "/switch", status_code=status.HTTP_200_OK, response_model=SwitchTenantResponse
)
async def switch_tenant(
    request: SwitchTenantRequest,
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Act as another company (master users only).

    The token is left untouched: the caller's identity and home company do
    not change. The switch is recorded in the target company's audit log.

    Raises:
        - 403 Forbidden: Caller is not a master user
        - 404 Not Found: Target company does not exist
        - 500 Internal Server Error: Server error
    """
    use_case = SwitchTenantUseCase(uow)
    result = await use_case.execute(caller, request.tenant_id)

    if result.is_err():
        error = result.error
        if error.code == "NOT_PRIVILEGED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
