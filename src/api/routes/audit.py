"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from src.api.error import ClientError, ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import GetAuditEventsUseCase
from src.app.use_cases.caller import Caller
from src.depends import get_caller, get_unit_of_work

router = APIRouter(prefix="/audit", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    action: str
    user_email: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /audit/events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_audit_events(
    caller: Caller = Depends(get_caller),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tenant_id: Optional[UUID] = Query(None, description="Company (defaults to home company)"),
    action: Optional[str] = Query(None, description="Only events with this action"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Audit Events

    Returns sign-ins, company switches and access changes, newest first.
    Master users may read any company's log.

    Query Parameters:
        - tenant_id: Company to read (default: caller's home company)
        - action: Filter by action name
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Another company's log without master privilege
        - 404 Not Found: Company does not exist
        - 500 Internal Server Error: Server error
    """
    use_case = GetAuditEventsUseCase(uow)
    result = await use_case.execute(
        caller,
        tenant_id=tenant_id,
        limit=limit,
        cursor=cursor,
        action=action,
    )

    if result.is_err():
        error = result.error
        if error.code == "TENANT_FORBIDDEN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TENANT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
