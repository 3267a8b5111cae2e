"""
CustomerSegment Entity
"""

from typing import List

from sqlmodel import Column, Field, JSON

from src.domain.base import TenantOwnedRecord

from .enums import ClientType


class CustomerSegment(TenantOwnedRecord, table=True):
    """
    CustomerSegment entity - a group of customers the tenant may serve.

    Business Rules:
    - name and client_type are required
    - relations lists free-text links to other segments
    """

    __tablename__ = "customer_segments"

    name: str = Field(max_length=255)
    description: str = Field(default="")
    area: str = Field(default="", max_length=255)
    client_type: ClientType
    will_serve: bool = Field(default=False)
    justification: str = Field(default="")
    relations: List[str] = Field(default_factory=list, sa_column=Column(JSON))
