"""
CompetitorMatrix Entity

Feature-by-competitor checkbox grid, one per tenant.
"""

from typing import Dict, List

from sqlmodel import Column, Field, Index, JSON

from src.domain.base import TenantOwnedRecord


class CompetitorMatrix(TenantOwnedRecord, table=True):
    """
    CompetitorMatrix entity - rows are criteria, columns are competitors.

    Business Rules:
    - At most one matrix per tenant
    - cells[row][column] exists for every (row, column) pair
    """

    __tablename__ = "competitor_matrices"

    name: str = Field(default="", max_length=255)
    columns: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    rows: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    cells: Dict[str, Dict[str, bool]] = Field(
        default_factory=dict, sa_column=Column(JSON)
    )

    __table_args__ = (
        Index("uq_competitor_matrix_tenant", "tenant_id", unique=True),
    )
