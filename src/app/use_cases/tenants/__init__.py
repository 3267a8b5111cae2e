"""
Tenant Use Cases

Acting-as-tenant switching for master users.
"""

from .dtos import SwitchTenantResponse
from .switch_tenant_use_case import SwitchTenantUseCase

__all__ = [
    "SwitchTenantUseCase",
    "SwitchTenantResponse",
]
