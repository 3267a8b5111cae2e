"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Dict, Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - validated intent to open a new workspace

    Created by API layer after request validation passes.
    """

    name: str
    email: str
    password: str
    company_name: str


# ============================================================================
# Response DTOs
# ============================================================================


class IdentityInfo(BaseModel):
    """The signed-in user as the workspace client holds it"""

    id: str
    email: str
    name: str
    avatar_url: Optional[str] = None
    tenant_id: str
    is_master: bool = False


class TenantInfo(BaseModel):
    """Tenant information in authentication responses"""

    id: str
    name: str
    access_flags: Dict[str, bool]


class AuthResponse(BaseModel):
    """Response for register and login use cases"""

    access_token: str
    identity: IdentityInfo
    tenant: TenantInfo


def identity_info(user) -> IdentityInfo:
    return IdentityInfo(
        id=str(user.id),
        email=user.email,
        name=user.name,
        avatar_url=user.avatar_url,
        tenant_id=str(user.tenant_id),
        is_master=user.is_master,
    )


def tenant_info(tenant) -> TenantInfo:
    return TenantInfo(
        id=str(tenant.id),
        name=tenant.name,
        access_flags=dict(tenant.access_flags or {}),
    )
