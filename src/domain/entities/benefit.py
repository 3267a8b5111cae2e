"""
Benefit Entity
"""

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord


class Benefit(TenantOwnedRecord, table=True):
    __tablename__ = "benefits"

    title: str = Field(max_length=255)
    description: str = Field(default="")
    competitive_edge: str = Field(default="")
