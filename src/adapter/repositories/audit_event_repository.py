import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.domain.entities import AuditEvent


def _encode_cursor(created_at: datetime) -> str:
    return base64.b64encode(created_at.isoformat().encode("utf-8")).decode("utf-8")


def _decode_cursor(cursor: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(base64.b64decode(cursor).decode("utf-8"))
    except (ValueError, TypeError):
        return None


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Append an audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        await self.session.refresh(audit_event)
        return audit_event

    async def get_by_tenant_paginated(
        self,
        tenant_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """
        Audit events for a tenant, newest first.

        Cursor format: base64-encoded ISO timestamp of the last event's
        created_at. An undecodable cursor restarts from the newest event.
        """
        stmt = select(AuditEvent).where(AuditEvent.tenant_id == tenant_id)
        if action:
            stmt = stmt.where(AuditEvent.action == action)

        if cursor:
            cursor_timestamp = _decode_cursor(cursor)
            if cursor_timestamp is not None:
                stmt = stmt.where(AuditEvent.created_at < cursor_timestamp)

        # One extra row tells us whether another page exists
        stmt = stmt.order_by(AuditEvent.created_at.desc()).limit(limit + 1)
        result = await self.session.exec(stmt)
        events = list(result.all())

        if len(events) <= limit:
            return events, None
        events = events[:limit]
        return events, _encode_cursor(events[-1].created_at)
