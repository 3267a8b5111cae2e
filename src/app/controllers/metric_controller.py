from typing import Optional

from src.app.controllers.collection_controller import CollectionController
from src.app.controllers.entity_types import METRIC
from src.app.repositories.tabular_store import ITabularStore, Row
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.app.services.user_messages import NOT_SELECTED
from src.libs.result import Result


class MetricController(CollectionController):
    """Metrics hold one value per month; points are edited on the selected metric"""

    def __init__(
        self,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        super().__init__(METRIC, store, session, notifier)

    async def set_point(self, month: str, value: float) -> Result[Row]:
        """Add a month's value, replacing an existing one for that month"""
        metric = self.selected
        if metric is None:
            return self._fail(NOT_SELECTED, "update")
        points = [point for point in metric.get("values") or [] if point.get("month") != month]
        points.append({"month": month, "value": value})
        points.sort(key=lambda point: point["month"])
        return await self.update(metric["id"], {"values": points})

    async def remove_point(self, month: str) -> Result[Row]:
        metric = self.selected
        if metric is None:
            return self._fail(NOT_SELECTED, "update")
        points = [point for point in metric.get("values") or [] if point.get("month") != month]
        return await self.update(metric["id"], {"values": points})
