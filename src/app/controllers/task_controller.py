from typing import Any, Dict, Iterable, List, Optional

from src.app.controllers.collection_controller import CollectionController
from src.app.controllers.entity_types import TASK
from src.app.controllers.filters import Contains, Equals
from src.app.repositories.tabular_store import ITabularStore, Row
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.domain.entities import TaskStatus
from src.libs.result import Result


class TaskController(CollectionController):
    def __init__(
        self,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        super().__init__(TASK, store, session, notifier)

    def filtered(
        self,
        name: Optional[str] = None,
        assignee: Optional[str] = None,
        status: Any = None,
    ) -> List[Row]:
        return self.filter(
            Contains("name", name),
            Contains("assignee", assignee),
            Equals("status", status),
        )

    def kanban(self, rows: Optional[Iterable[Row]] = None) -> Dict[str, List[Row]]:
        """Board columns in status order; every status has a column"""
        columns: Dict[str, List[Row]] = {status.value: [] for status in TaskStatus}
        for row in self.rows if rows is None else rows:
            columns.setdefault(row.get("status") or TaskStatus.to_do.value, []).append(row)
        return columns

    async def move(self, task_id: Any, status: Any) -> Result[Row]:
        """Drop a card on another column"""
        selected = self.select(task_id)
        if selected.is_err():
            return selected
        return await self.update(task_id, {"status": status})
