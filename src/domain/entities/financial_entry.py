"""
FinancialEntry Entity

A single cost or revenue line.
"""

from datetime import date

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord

from .enums import FinancialEntryType


class FinancialEntry(TenantOwnedRecord, table=True):
    """
    FinancialEntry entity - one inflow (revenue) or outflow (cost).

    Business Rules:
    - amount is always positive; entry_type carries the direction
    - entry_date is a calendar date (no time component)
    """

    __tablename__ = "financial_entries"

    name: str = Field(max_length=255)
    entry_type: FinancialEntryType
    category: str = Field(max_length=255)
    entry_date: date
    amount: float = Field(default=0.0)
