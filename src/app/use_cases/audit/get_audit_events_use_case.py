"""
Get Audit Events Use Case

Retrieves sign-in and administrative audit events for a tenant with pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.caller import Caller
from src.libs.result import Error, Result, Return


class GetAuditEventsUseCase:
    """
    Use case for retrieving audit events for a tenant.

    Business Rules:
    - Members read their own tenant's events; masters read any tenant's
    - Results ordered by newest first
    - Supports cursor-based pagination and filtering by action
    - Each event includes action, user_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        caller: Caller,
        tenant_id: Optional[UUID] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            caller: Authenticated caller from JWT
            tenant_id: Tenant to read (defaults to the caller's home tenant)
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)
            action: Only return events with this action (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        target = tenant_id or caller.tenant_id
        if target != caller.tenant_id and not caller.is_master:
            return Return.err(
                Error("TENANT_FORBIDDEN", "Audit events of another company are not accessible")
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(target)
            if tenant is None:
                return Return.err(Error("TENANT_NOT_FOUND", "Tenant not found"))

            events, next_cursor = await self.uow.audit_events.get_by_tenant_paginated(
                target, limit=limit, cursor=cursor, action=action
            )

            emails: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                user_email = None
                if event.user_id:
                    if event.user_id not in emails:
                        user = await self.uow.users.get_by_id(event.user_id)
                        emails[event.user_id] = user.email if user else None
                    user_email = emails[event.user_id]

                events_list.append(
                    {
                        "action": event.action,
                        "user_email": user_email,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
