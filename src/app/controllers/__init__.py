"""
Collection controllers: the tenant-scoped cache over each record table.
"""

from typing import Optional

from src.app.repositories.tabular_store import ITabularStore
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext

from .collection_controller import CollectionController, ControllerState
from .competitor_matrix_controller import CompetitorMatrixController
from .customer_segment_controller import CustomerSegmentController
from .entity_types import ENTITY_TYPES, EntityType
from .filters import Contains, DateRange, Equals, apply_filters
from .financial_entry_controller import FinancialEntryController, FinancialTotals
from .metric_controller import MetricController
from .problem_controller import ProblemController
from .target_audience_controller import TargetAudienceController
from .task_calendar import CalendarView
from .task_controller import TaskController

SPECIALIZED = {
    "problem": ProblemController,
    "customer_segment": CustomerSegmentController,
    "target_audience": TargetAudienceController,
    "financial_entry": FinancialEntryController,
    "metric": MetricController,
    "task": TaskController,
    "competitor_matrix": CompetitorMatrixController,
}


def controller_for(
    entity_type,
    store: ITabularStore,
    session: SessionContext,
    notifier: Optional[Notifier] = None,
) -> CollectionController:
    """
    Controller for an entity type (descriptor or name).

    Types with page-specific behaviour get their subclass; the rest get the
    generic controller.
    """
    if isinstance(entity_type, str):
        if entity_type not in ENTITY_TYPES:
            raise KeyError(f"Unknown entity type '{entity_type}'")
        entity_type = ENTITY_TYPES[entity_type]

    controller_class = SPECIALIZED.get(entity_type.name)
    if controller_class is not None:
        return controller_class(store, session, notifier)
    return CollectionController(entity_type, store, session, notifier)


__all__ = [
    "CollectionController",
    "ControllerState",
    "EntityType",
    "ENTITY_TYPES",
    "Contains",
    "Equals",
    "DateRange",
    "apply_filters",
    "ProblemController",
    "CustomerSegmentController",
    "TargetAudienceController",
    "FinancialEntryController",
    "FinancialTotals",
    "MetricController",
    "TaskController",
    "CompetitorMatrixController",
    "CalendarView",
    "controller_for",
]
