"""
Tenant Entity

Represents an organization ("company") whose records are isolated from every
other organization's records.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, JSON, SQLModel

from .enums import default_access_flags


class Tenant(SQLModel, table=True):
    """
    Tenant entity - isolated workspace for one organization.

    Business Rules:
    - access_flags holds one boolean per AccessArea
    - A new tenant may only see the problem area until a master grants more
    - created_by points at the registering user (informational only)
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    access_flags: dict = Field(
        default_factory=default_access_flags, sa_column=Column(JSON)
    )
    created_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
