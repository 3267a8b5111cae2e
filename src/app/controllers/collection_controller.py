"""
Tenant-Scoped Collection Controller.

One instance per entity type and view: it loads the current tenant's rows
into a local cache and mediates create/update/remove against the tabular
store, keeping the cache consistent with the store.

Business Rules:
- Reads and writes are scoped to the session's tenant reference; without
  one nothing reaches the store (NOT_AUTHENTICATED)
- The tenant reference is stamped on every created row, overriding input
- A store "no rows" answer is an empty result, never an error
- At most one operation runs at a time; a second call is refused
- Every failure is reported once through the notifier in fixed wording;
  raw store text only goes to the log
- After ``close()`` late completions leave the controller untouched
"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError

from src.app.controllers.entity_types import EntityType
from src.app.controllers.filters import Predicate, apply_filters
from src.app.repositories.tabular_store import ITabularStore, Row
from src.app.services.notifier import Notifier
from src.app.services.session_context import SessionContext
from src.app.services.user_messages import (
    CONTROLLER_CLOSED,
    NOT_AUTHENTICATED,
    NOT_SELECTED,
    OPERATION_IN_PROGRESS,
    READ_FAILURE,
    VALIDATION_FAILURE,
    WRITE_FAILURE,
    message_for,
)
from src.domain.tables import PROTECTED_COLUMNS, TENANT_COLUMN
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

# Result of an operation whose tenant was switched away while it was in flight
SUPERSEDED = "SUPERSEDED"


class ControllerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class CollectionController:
    def __init__(
        self,
        entity_type: EntityType,
        store: ITabularStore,
        session: SessionContext,
        notifier: Optional[Notifier] = None,
    ):
        self.entity_type = entity_type
        self.store = store
        self.session = session
        self.notifier = notifier or Notifier()

        self.state = ControllerState.UNINITIALIZED
        self.busy = False
        self.closed = False
        self.selected_id: Optional[int] = None
        self.last_error: Optional[Error] = None

        self._rows: List[Row] = []
        self._tenant_id: Optional[str] = None
        self._generation = 0
        self._unsubscribe = session.subscribe(self._on_session_change)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def rows(self) -> List[Row]:
        return [dict(row) for row in self._rows]

    @property
    def tenant_id(self) -> Optional[str]:
        """Tenant the cached rows belong to"""
        return self._tenant_id

    @property
    def selected(self) -> Optional[Row]:
        return self.get(self.selected_id) if self.selected_id is not None else None

    def get(self, record_id: Any) -> Optional[Row]:
        for row in self._rows:
            if str(row.get("id")) == str(record_id):
                return dict(row)
        return None

    def filter(self, *predicates: Predicate) -> List[Row]:
        """Rows of the cache matching every active predicate; never queries the store"""
        return apply_filters(self.rows, predicates)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, record_id: Any) -> Result[Row]:
        row = self.get(record_id)
        if row is None:
            return self._fail(NOT_SELECTED, "select", f"No cached {self.entity_type.table} row {record_id}")
        self.selected_id = row["id"]
        return Return.ok(row)

    def deselect(self) -> None:
        self.selected_id = None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self) -> Result[List[Row]]:
        return await self._exclusive("load", self._load)

    async def create(self, fields: Dict[str, Any]) -> Result[Row]:
        return await self._exclusive("create", lambda: self._create(fields))

    async def update(self, record_id: Any, fields: Dict[str, Any]) -> Result[Row]:
        return await self._exclusive("update", lambda: self._update(record_id, fields))

    async def remove(self, record_id: Any) -> Result[None]:
        return await self._exclusive("remove", lambda: self._remove(record_id))

    def close(self) -> None:
        """Stop observing the session; in-flight results will be ignored"""
        if self.closed:
            return
        self.closed = True
        self._generation += 1
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _exclusive(
        self, action: str, operation: Callable[[], Awaitable[Result]]
    ) -> Result:
        if self.closed:
            return Return.err(Error(CONTROLLER_CLOSED, "Controller is closed"))
        if self.busy:
            return self._fail(OPERATION_IN_PROGRESS, action)
        self.busy = True
        try:
            return await operation()
        finally:
            self.busy = False

    def _fail(self, code: str, action: str, detail: Optional[str] = None) -> Result:
        message = message_for(code, action, self.entity_type.label)
        if detail:
            logger.warning(f"{self.entity_type.name} {action} failed ({code}): {detail}")
        self.last_error = Error(code, message)
        self.notifier.notify(message, code=code)
        return Return.err(self.last_error)

    def _superseded(self, generation: int) -> Optional[Result]:
        if generation == self._generation:
            return None
        if self.closed:
            return Return.err(Error(CONTROLLER_CLOSED, "Controller is closed"))
        return Return.err(Error(SUPERSEDED, "The company changed during the operation"))

    def _tenant(self, action: str) -> Result[str]:
        tenant = self.session.get_tenant_reference()
        if tenant.is_err():
            return self._fail(NOT_AUTHENTICATED, action)
        if self._tenant_id is None:
            self._tenant_id = tenant.value
        return tenant

    async def _load(self, allow_default: bool = True) -> Result[List[Row]]:
        tenant = self._tenant("load")
        if tenant.is_err():
            self.state = ControllerState.ERROR
            return tenant
        tenant_id = tenant.value
        generation = self._generation

        self.state = ControllerState.LOADING
        response = await self.store.select(
            self.entity_type.table, {TENANT_COLUMN: tenant_id}
        )
        superseded = self._superseded(generation)
        if superseded is not None:
            return superseded

        if response.error is not None and not response.no_rows:
            self.state = ControllerState.ERROR
            return self._fail(
                READ_FAILURE, "load", f"{response.error.code}: {response.error.message}"
            )

        rows = [row for row in response.rows if str(row.get(TENANT_COLUMN)) == tenant_id]
        if not rows and allow_default and self.entity_type.default_row is not None:
            return await self._insert_default(tenant_id, generation)

        self._replace_cache(tenant_id, rows)
        return Return.ok(self.rows)

    async def _insert_default(self, tenant_id: str, generation: int) -> Result[List[Row]]:
        """Create the lazy default row once; a failure leaves an empty error state"""
        row = {**self.entity_type.default_row(), TENANT_COLUMN: tenant_id}
        response = await self.store.insert(self.entity_type.table, row)
        superseded = self._superseded(generation)
        if superseded is not None:
            return superseded

        if response.error is not None:
            self._rows = []
            self._tenant_id = tenant_id
            self.state = ControllerState.ERROR
            return self._fail(
                WRITE_FAILURE, "create", f"{response.error.code}: {response.error.message}"
            )

        logger.info(f"Created default {self.entity_type.name} for tenant {tenant_id}")
        if response.rows:
            self._replace_cache(tenant_id, response.rows)
            return Return.ok(self.rows)
        return await self._load(allow_default=False)

    def _replace_cache(self, tenant_id: str, rows: List[Row]) -> None:
        if tenant_id != self._tenant_id:
            self.selected_id = None
        self._rows = [dict(row) for row in rows]
        self._tenant_id = tenant_id
        if self.selected_id is not None and self.get(self.selected_id) is None:
            self.selected_id = None
        self.last_error = None
        self.state = ControllerState.READY

    def _validation_detail(self, exc: ValidationError) -> str:
        return ", ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )

    async def _create(self, fields: Dict[str, Any]) -> Result[Row]:
        tenant = self._tenant("create")
        if tenant.is_err():
            return tenant

        submitted = {key: value for key, value in fields.items() if key != TENANT_COLUMN}
        try:
            payload = self.entity_type.validate(submitted)
        except ValidationError as exc:
            return self._fail(VALIDATION_FAILURE, "create", self._validation_detail(exc))

        prior_state = self.state
        generation = self._generation
        response = await self.store.insert(
            self.entity_type.table, {**payload, TENANT_COLUMN: tenant.value}
        )
        superseded = self._superseded(generation)
        if superseded is not None:
            return superseded

        if response.error is not None:
            self.state = prior_state
            return self._fail(
                WRITE_FAILURE, "create", f"{response.error.code}: {response.error.message}"
            )

        created = response.rows
        self._rows.extend(dict(row) for row in created)
        logger.info(f"Created {self.entity_type.name} for tenant {tenant.value}")

        await self._load(allow_default=False)
        if created:
            return Return.ok(self.get(created[0].get("id")) or dict(created[0]))
        return Return.ok(payload)

    def _checked_patch(self, current: Row, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Wire-ready patch holding only the named fields; raises ValueError"""
        protected = sorted(set(fields) & PROTECTED_COLUMNS)
        if protected:
            raise ValueError(f"protected field(s): {', '.join(protected)}")
        unknown = sorted(set(fields) - set(self.entity_type.field_names))
        if unknown:
            raise ValueError(f"unknown field(s): {', '.join(unknown)}")

        merged = {name: current.get(name) for name in self.entity_type.field_names if name in current}
        merged.update(fields)
        validated = self.entity_type.validate(merged)
        return {name: validated[name] for name in fields}

    async def _update(self, record_id: Any, fields: Dict[str, Any]) -> Result[Row]:
        if self.selected_id is None or str(self.selected_id) != str(record_id):
            return self._fail(NOT_SELECTED, "update", f"Record {record_id} is not selected")
        current = self.get(record_id)
        if current is None:
            return self._fail(NOT_SELECTED, "update", f"Record {record_id} is not cached")

        tenant = self._tenant("update")
        if tenant.is_err():
            return tenant

        try:
            patch = self._checked_patch(current, fields)
        except ValidationError as exc:
            return self._fail(VALIDATION_FAILURE, "update", self._validation_detail(exc))
        except ValueError as exc:
            return self._fail(VALIDATION_FAILURE, "update", str(exc))

        prior_state = self.state
        generation = self._generation
        response = await self.store.update(
            self.entity_type.table,
            patch,
            {"id": current["id"], TENANT_COLUMN: tenant.value},
        )
        superseded = self._superseded(generation)
        if superseded is not None:
            return superseded

        if response.error is not None:
            self.state = prior_state
            return self._fail(
                WRITE_FAILURE, "update", f"{response.error.code}: {response.error.message}"
            )

        self._rows = [
            {**row, **patch} if str(row.get("id")) == str(record_id) else row
            for row in self._rows
        ]
        await self._load(allow_default=False)
        return Return.ok(self.get(record_id) or {**current, **patch})

    async def _remove(self, record_id: Any) -> Result[None]:
        if self.selected_id is None or str(self.selected_id) != str(record_id):
            return self._fail(NOT_SELECTED, "remove", f"Record {record_id} is not selected")
        current = self.get(record_id)
        if current is None:
            return self._fail(NOT_SELECTED, "remove", f"Record {record_id} is not cached")

        tenant = self._tenant("remove")
        if tenant.is_err():
            return tenant

        prior_state = self.state
        generation = self._generation
        response = await self.store.delete(
            self.entity_type.table, {"id": current["id"], TENANT_COLUMN: tenant.value}
        )
        superseded = self._superseded(generation)
        if superseded is not None:
            return superseded

        if response.error is not None:
            self.state = prior_state
            return self._fail(
                WRITE_FAILURE, "remove", f"{response.error.code}: {response.error.message}"
            )

        self._rows = [row for row in self._rows if str(row.get("id")) != str(record_id)]
        self.selected_id = None
        logger.info(f"Deleted {self.entity_type.name} {record_id} for tenant {tenant.value}")
        await self._load(allow_default=False)
        return Return.ok()

    def _on_session_change(self, session: SessionContext) -> None:
        """Drop the cache when the tenant it belongs to is no longer current"""
        tenant = session.get_tenant_reference()
        current = tenant.value if tenant.is_ok() else None
        if current == self._tenant_id:
            return
        self._generation += 1
        self._rows = []
        self._tenant_id = None
        self.selected_id = None
        self.state = ControllerState.UNINITIALIZED
