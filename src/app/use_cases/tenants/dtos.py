"""
Tenant Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel

from src.app.use_cases.auth.dtos import TenantInfo


class SwitchTenantResponse(BaseModel):
    """Response for switch tenant use case"""

    acting_tenant: TenantInfo
    home_tenant_id: str
