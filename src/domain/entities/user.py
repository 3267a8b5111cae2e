"""
User Entity

Represents the authenticated actor. Each user belongs to exactly one home
tenant.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


def avatar_url_for(name: str) -> str:
    """Initials-based avatar, e.g. "Ada Lovelace" -> name=AL"""
    initials = "".join(part[0] for part in name.split() if part).upper()
    return f"https://ui-avatars.com/api/?name={initials}&background=random&size=256"


class User(SQLModel, table=True):
    """
    User entity - the authenticated actor.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - tenant_id is the home tenant; it never changes after registration
    - is_master users may act on behalf of any tenant
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    name: str = Field(default="", max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=512)

    tenant_id: Optional[UUID] = Field(default=None, foreign_key="tenants.id")
    is_master: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
