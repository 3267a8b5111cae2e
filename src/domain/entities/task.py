"""
Task Entity
"""

from datetime import date
from typing import Optional

from sqlmodel import Field

from src.domain.base import TenantOwnedRecord

from .enums import TaskStatus


class Task(TenantOwnedRecord, table=True):
    """Task entity - a unit of work shown on the kanban board and calendar"""

    __tablename__ = "tasks"

    name: str = Field(max_length=255)
    description: str = Field(default="")
    status: TaskStatus = Field(default=TaskStatus.to_do)
    due_date: Optional[date] = Field(default=None)
    assignee: str = Field(default="", max_length=255)
