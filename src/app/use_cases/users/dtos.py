from pydantic import BaseModel

from src.app.use_cases.auth.dtos import IdentityInfo, TenantInfo


class ContextResponse(BaseModel):
    """Response for load context use case"""

    identity: IdentityInfo
    tenant: TenantInfo


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
