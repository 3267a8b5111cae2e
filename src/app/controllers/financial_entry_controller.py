from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from src.app.controllers.collection_controller import CollectionController
from src.app.controllers.entity_types import FINANCIAL_ENTRY
from src.app.controllers.filters import Contains, DateRange, DateLike, Equals
from src.app.repositories.tabular_store import ITabularStore, Row
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.domain.entities import FinancialEntryType


@dataclass(frozen=True)
class FinancialTotals:
    inflow: float
    outflow: float

    @property
    def balance(self) -> float:
        return self.inflow - self.outflow


class FinancialEntryController(CollectionController):
    def __init__(
        self,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        super().__init__(FINANCIAL_ENTRY, store, session, notifier)

    def filtered(
        self,
        name: Optional[str] = None,
        entry_type: Any = None,
        start: DateLike = None,
        end: DateLike = None,
    ) -> List[Row]:
        return self.filter(
            Contains("name", name),
            Equals("entry_type", entry_type),
            DateRange("entry_date", start, end),
        )

    def totals(self, rows: Optional[Iterable[Row]] = None) -> FinancialTotals:
        """Sums over ``rows`` (default: the whole cache)"""
        inflow = outflow = 0.0
        for row in self.rows if rows is None else rows:
            amount = float(row.get("amount") or 0)
            if row.get("entry_type") == FinancialEntryType.inflow.value:
                inflow += amount
            elif row.get("entry_type") == FinancialEntryType.outflow.value:
                outflow += amount
        return FinancialTotals(inflow=round(inflow, 2), outflow=round(outflow, 2))
