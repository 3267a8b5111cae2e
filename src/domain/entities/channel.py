"""
Channel Entity
"""

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord


class Channel(TenantOwnedRecord, table=True):
    """A route through which the tenant reaches its customers"""

    __tablename__ = "channels"

    name: str = Field(max_length=255)
    description: str = Field(default="")
    channel_type: str = Field(default="", max_length=255)
    objective: str = Field(default="")
