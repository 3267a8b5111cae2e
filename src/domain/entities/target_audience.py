"""
TargetAudience Entity
"""

from typing import Optional

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord


class TargetAudience(TenantOwnedRecord, table=True):
    """Persona-level description of who buys inside a customer segment"""

    __tablename__ = "target_audiences"

    customer_segment_id: Optional[int] = Field(
        default=None, foreign_key="customer_segments.id"
    )
    segment: str = Field(default="")
    age_range: str = Field(default="")
    education: str = Field(default="")
    location: str = Field(default="")
    job_title: str = Field(default="")
    company_size: str = Field(default="")
    industry: str = Field(default="")
    consumption_habits: str = Field(default="")
    buying_role: str = Field(default="")
    tasks_and_responsibilities: str = Field(default="")
