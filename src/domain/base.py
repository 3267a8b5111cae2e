from datetime import UTC, datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns"""
    return datetime.now(UTC).replace(tzinfo=None)


class TenantOwnedRecord(SQLModel):
    """
    Columns shared by every tenant-owned table.

    id, created_at and updated_at are assigned by the store; tenant_id is
    stamped at creation and never changes afterwards.
    """

    id: Optional[int] = Field(default=None, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
