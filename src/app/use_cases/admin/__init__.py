"""Admin use cases: company overview, access flags and master privilege."""

from .access_flags_use_cases import (
    AccessFlagsResponse,
    GetAccessFlagsUseCase,
    UpdateAccessFlagsUseCase,
)
from .grant_master_use_case import GrantMasterResponse, GrantMasterUseCase
from .list_tenants_use_case import ListTenantsResponse, ListTenantsUseCase, TenantSummary

__all__ = [
    "ListTenantsUseCase",
    "ListTenantsResponse",
    "TenantSummary",
    "GetAccessFlagsUseCase",
    "UpdateAccessFlagsUseCase",
    "AccessFlagsResponse",
    "GrantMasterUseCase",
    "GrantMasterResponse",
]
