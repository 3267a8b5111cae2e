"""
Workspace Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AccessArea,
    ClientType,
    ExperienceCategory,
    FeaturePriority,
    FinancialEntryType,
    TaskStatus,
    default_access_flags,
)

# Export all entities
from .user import User, avatar_url_for
from .tenant import Tenant
from .audit_event import AuditEvent
from .problem import Problem
from .customer_segment import CustomerSegment
from .target_audience import TargetAudience
from .channel import Channel
from .financial_entry import FinancialEntry
from .metric import Metric
from .task import Task
from .competitor_matrix import CompetitorMatrix
from .benefit import Benefit
from .feature import Feature
from .customer_experience import CustomerExperience

__all__ = [
    # Enums
    "AccessArea",
    "ClientType",
    "ExperienceCategory",
    "FeaturePriority",
    "FinancialEntryType",
    "TaskStatus",
    "default_access_flags",
    # Entities
    "User",
    "avatar_url_for",
    "Tenant",
    "AuditEvent",
    # Tenant-owned records
    "Problem",
    "CustomerSegment",
    "TargetAudience",
    "Channel",
    "FinancialEntry",
    "Metric",
    "Task",
    "CompetitorMatrix",
    "Benefit",
    "Feature",
    "CustomerExperience",
]
