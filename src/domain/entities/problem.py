"""
Problem Entity

The single problem statement a tenant is working on.
"""

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord


class Problem(TenantOwnedRecord, table=True):
    """
    Problem entity - one row per tenant, created lazily with empty text.

    Business Rules:
    - Every field is free text and may be empty
    - Pages expect at least one row to edit, so an empty table is filled
      with a blank problem on first load
    """

    __tablename__ = "problems"

    description: str = Field(default="")
    current_solution: str = Field(default="")
    impact: str = Field(default="")
    examples: str = Field(default="")
    frequency: str = Field(default="")
    segment: str = Field(default="")
    severity: str = Field(default="")
