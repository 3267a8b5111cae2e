"""
CustomerExperience Entity
"""

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord

from .enums import ExperienceCategory


class CustomerExperience(TenantOwnedRecord, table=True):
    """A need, fear or desire the solution addresses"""

    __tablename__ = "customer_experiences"

    title: str = Field(max_length=255)
    description: str = Field(default="")
    category: ExperienceCategory = Field(default=ExperienceCategory.need)
