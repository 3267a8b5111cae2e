"""
Metric Entity
"""

from typing import List

from sqlmodel import Column, Field, JSON

from src.domain.base import TenantOwnedRecord


class Metric(TenantOwnedRecord, table=True):
    """
    Metric entity - a key indicator tracked month by month.

    values is a list of {"month": "YYYY-MM", "value": number} points.
    """

    __tablename__ = "metrics"

    name: str = Field(max_length=255)
    description: str = Field(default="")
    area: str = Field(default="", max_length=255)
    values: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
