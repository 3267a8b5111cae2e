"""
Workspace Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccessArea(str, Enum):
    """Feature areas a tenant can be granted access to"""

    problem = "problem"
    customers = "customers"
    solution = "solution"
    competitors = "competitors"
    financials = "financials"
    progress = "progress"


class ClientType(str, Enum):
    b2b = "B2B"
    b2c = "B2C"
    b2g = "B2G"


class FinancialEntryType(str, Enum):
    """Direction of a financial entry"""

    inflow = "inflow"
    outflow = "outflow"


class TaskStatus(str, Enum):
    """Kanban columns, in board order"""

    to_do = "to_do"
    doing = "doing"
    approval = "approval"
    done = "done"


class FeaturePriority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class ExperienceCategory(str, Enum):
    need = "need"
    fear = "fear"
    desire = "desire"


def default_access_flags() -> dict:
    """Flags granted to a freshly registered tenant"""
    flags = {area.value: False for area in AccessArea}
    flags[AccessArea.problem.value] = True
    return flags
