from typing import Any, Optional

from src.app.controllers.collection_controller import CollectionController
from src.app.controllers.entity_types import PROBLEM
from src.app.repositories.tabular_store import ITabularStore, Row
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.app.services.user_messages import NOT_SELECTED
from src.libs.result import Result


class ProblemController(CollectionController):
    """
    The tenant's problem statement.

    Loading an empty table creates one blank problem, so there is always a
    row to edit; fields are saved one at a time.
    """

    def __init__(
        self,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        super().__init__(PROBLEM, store, session, notifier)

    @property
    def problem(self) -> Optional[Row]:
        rows = self.rows
        return rows[0] if rows else None

    async def update_field(self, field: str, value: Any) -> Result[Row]:
        problem = self.problem
        if problem is None:
            loaded = await self.load()
            if loaded.is_err():
                return loaded
            problem = self.problem
        if problem is None:
            return self._fail(NOT_SELECTED, "update", "No problem row after load")
        self.select(problem["id"])
        return await self.update(problem["id"], {field: value})
