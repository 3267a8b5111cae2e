"""
Tenant scoping for table operations.

Every read and write names the tenant it targets; non-master callers may only
target their home tenant.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.app.use_cases.caller import Caller
from src.domain.tables import TENANT_COLUMN
from src.libs.result import Error, Result, Return


def resolve_tenant_scope(caller: Caller, requested: Optional[Any]) -> Result[UUID]:
    """
    Validate the tenant a request targets.

    Returns:
        Result with the target tenant UUID, or Error
        (MISSING_TENANT_FILTER, INVALID_TENANT_ID, TENANT_FORBIDDEN)
    """
    if requested is None or requested == "":
        return Return.err(
            Error("MISSING_TENANT_FILTER", f"A '{TENANT_COLUMN}' filter is required")
        )
    try:
        tenant_id = requested if isinstance(requested, UUID) else UUID(str(requested))
    except ValueError:
        return Return.err(Error("INVALID_TENANT_ID", "Invalid tenant ID format"))

    if tenant_id != caller.tenant_id and not caller.is_master:
        return Return.err(
            Error("TENANT_FORBIDDEN", "Records of another company are not accessible")
        )
    return Return.ok(tenant_id)


def scoped_filters(filters: Dict[str, Any], tenant_id: UUID) -> Dict[str, Any]:
    return {**filters, TENANT_COLUMN: str(tenant_id)}


def require_id_filter(filters: Dict[str, Any]) -> Result[None]:
    if filters.get("id") in (None, ""):
        return Return.err(
            Error("MISSING_ID_FILTER", "Updates and deletes must target a record id")
        )
    return Return.ok()
