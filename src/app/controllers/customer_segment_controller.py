from typing import Any, List, Optional

from src.app.controllers.collection_controller import CollectionController
from src.app.controllers.entity_types import CUSTOMER_SEGMENT
from src.app.controllers.filters import Contains, Equals
from src.app.repositories.tabular_store import ITabularStore, Row
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.app.services.user_messages import NOT_SELECTED, VALIDATION_FAILURE
from src.libs.result import Result


class CustomerSegmentController(CollectionController):
    def __init__(
        self,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        super().__init__(CUSTOMER_SEGMENT, store, session, notifier)

    def filtered(
        self,
        name: Optional[str] = None,
        client_type: Any = None,
        will_serve: Any = None,
    ) -> List[Row]:
        return self.filter(
            Contains("name", name),
            Equals("client_type", client_type),
            Equals("will_serve", will_serve),
        )

    async def add_relation(self, relation: str) -> Result[Row]:
        """Append a relation to the selected segment"""
        segment = self.selected
        if segment is None:
            return self._fail(NOT_SELECTED, "update")
        relation = (relation or "").strip()
        relations = list(segment.get("relations") or [])
        if not relation or relation in relations:
            return self._fail(
                VALIDATION_FAILURE, "update", f"Relation '{relation}' is empty or present"
            )
        return await self.update(segment["id"], {"relations": [*relations, relation]})

    async def remove_relation(self, relation: str) -> Result[Row]:
        segment = self.selected
        if segment is None:
            return self._fail(NOT_SELECTED, "update")
        relations = [item for item in segment.get("relations") or [] if item != relation]
        return await self.update(segment["id"], {"relations": relations})
