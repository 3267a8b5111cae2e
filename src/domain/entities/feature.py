"""
Feature Entity
"""

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord

from .enums import FeaturePriority


class Feature(TenantOwnedRecord, table=True):
    """A product feature planned for a given app version"""

    __tablename__ = "features"

    title: str = Field(max_length=255)
    description: str = Field(default="")
    app_version: str = Field(default="", max_length=50)
    priority: FeaturePriority = Field(default=FeaturePriority.medium)
