"""
Registry of tenant-owned tables exposed through the tabular store.
"""

from typing import Dict, Optional, Type

from src.domain.base import TenantOwnedRecord
from src.domain.entities import (
    Benefit,
    Channel,
    CompetitorMatrix,
    CustomerExperience,
    CustomerSegment,
    Feature,
    FinancialEntry,
    Metric,
    Problem,
    TargetAudience,
    Task,
)

TENANT_COLUMN = "tenant_id"

# Columns assigned by the store; never accepted in a patch
PROTECTED_COLUMNS = frozenset({"id", TENANT_COLUMN, "created_at", "updated_at"})

TENANT_TABLES: Dict[str, Type[TenantOwnedRecord]] = {
    model.__tablename__: model
    for model in (
        Problem,
        CustomerSegment,
        TargetAudience,
        Channel,
        FinancialEntry,
        Metric,
        Task,
        CompetitorMatrix,
        Benefit,
        Feature,
        CustomerExperience,
    )
}


def model_for(table: str) -> Optional[Type[TenantOwnedRecord]]:
    return TENANT_TABLES.get(table)
