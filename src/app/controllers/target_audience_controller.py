from typing import Dict, Optional

from src.app.controllers.collection_controller import CollectionController
from src.app.controllers.entity_types import CUSTOMER_SEGMENT, TARGET_AUDIENCE
from src.app.repositories.tabular_store import ITabularStore
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.app.services.user_messages import READ_FAILURE
from src.domain.tables import TENANT_COLUMN
from src.libs.result import Result, Return


class TargetAudienceController(CollectionController):
    def __init__(
        self,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        super().__init__(TARGET_AUDIENCE, store, session, notifier)

    async def segment_names(self) -> Result[Dict[int, str]]:
        """Names of the current tenant's customer segments, by id"""
        tenant = self._tenant("load")
        if tenant.is_err():
            return tenant

        response = await self.store.select(
            CUSTOMER_SEGMENT.table, {TENANT_COLUMN: tenant.value}
        )
        if response.error is not None and not response.no_rows:
            return self._fail(
                READ_FAILURE, "load", f"{response.error.code}: {response.error.message}"
            )
        return Return.ok(
            {
                row["id"]: row.get("name", "")
                for row in response.rows
                if str(row.get(TENANT_COLUMN)) == tenant.value
            }
        )
