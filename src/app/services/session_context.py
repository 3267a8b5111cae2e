"""
Session/Identity Context.

One observable object per signed-in client holding the identity, its bearer
token, its home company's access flags and an explicit acting-as-tenant
override. Controllers and the access gate receive it by injection and
subscribe to changes instead of polling.
"""

import logging
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from src.app.services.session_storage import ISessionStorage, PersistedState
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
NOT_PRIVILEGED = "NOT_PRIVILEGED"


class Identity(BaseModel):
    """The authenticated actor"""

    id: str
    email: str
    name: str = ""
    avatar_url: Optional[str] = None
    tenant_id: str
    is_master: bool = False


Listener = Callable[["SessionContext"], None]


class SessionContext:
    def __init__(self, storage: Optional[ISessionStorage] = None):
        self.storage = storage
        self._identity: Optional[Identity] = None
        self._access_token: Optional[str] = None
        self._access_flags: Dict[str, bool] = {}
        self._acting_tenant_id: Optional[str] = None
        self._listeners: List[Listener] = []

        if storage is not None:
            state = storage.load()
            if state is not None:
                try:
                    self._restore(state)
                except ValidationError as exc:
                    logger.warning(f"Discarding stored session with an invalid identity: {exc}")
                    self._identity = None
                    self._access_token = None
                    self._access_flags = {}
                    self._acting_tenant_id = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def access_flags(self) -> Dict[str, bool]:
        return dict(self._access_flags)

    @property
    def acting_tenant_id(self) -> Optional[str]:
        return self._acting_tenant_id

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    @property
    def is_master(self) -> bool:
        return self._identity is not None and self._identity.is_master

    def get_tenant_reference(self) -> Result[str]:
        """Acting tenant when one is set, else the identity's home tenant"""
        if self._identity is None:
            return Return.err(Error(NOT_AUTHENTICATED, "Nobody is signed in"))
        return Return.ok(self._acting_tenant_id or self._identity.tenant_id)

    def has_access(self, area: str) -> bool:
        if self.is_master:
            return True
        return bool(self._access_flags.get(area, False))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_identity(
        self,
        identity: Optional[Identity],
        access_token: Optional[str] = None,
        access_flags: Optional[Dict[str, bool]] = None,
        acting_tenant_id: Optional[str] = None,
    ) -> None:
        """
        Replace the signed-in identity; None signs out.

        ``acting_tenant_id`` is applied only to a master identity.
        """
        self._identity = identity
        self._access_token = access_token if identity is not None else None
        self._access_flags = dict(access_flags or {}) if identity is not None else {}
        self._acting_tenant_id = None
        if acting_tenant_id and identity is not None and identity.is_master:
            acting_tenant_id = str(acting_tenant_id)
            if acting_tenant_id != identity.tenant_id:
                self._acting_tenant_id = acting_tenant_id
        self._changed()

    def switch_tenant(self, tenant_id: str) -> Result[str]:
        """
        Act as another company. Only master identities may; the identity's
        own id and home tenant are untouched.
        """
        if self._identity is None:
            return Return.err(Error(NOT_AUTHENTICATED, "Nobody is signed in"))
        if not self._identity.is_master:
            return Return.err(Error(NOT_PRIVILEGED, "Only master users can switch company"))

        tenant_id = str(tenant_id)
        self._acting_tenant_id = None if tenant_id == self._identity.tenant_id else tenant_id
        logger.info(f"User {self._identity.id} now acting as tenant {tenant_id}")
        self._changed()
        return Return.ok(tenant_id)

    def clear_tenant_override(self) -> None:
        if self._acting_tenant_id is None:
            return
        self._acting_tenant_id = None
        self._changed()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(context)`` after every change; returns an unsubscribe"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _snapshot(self) -> PersistedState:
        return {
            "identity": self._identity.model_dump() if self._identity else None,
            "access_token": self._access_token,
            "access_flags": dict(self._access_flags),
            "acting_tenant_id": self._acting_tenant_id,
        }

    def _restore(self, state: PersistedState) -> None:
        identity = state.get("identity")
        self._identity = Identity.model_validate(identity) if identity else None
        if self._identity is None:
            return
        self._access_token = state.get("access_token")
        self._access_flags = dict(state.get("access_flags") or {})
        acting = state.get("acting_tenant_id")
        self._acting_tenant_id = acting if acting and self._identity.is_master else None

    def _changed(self) -> None:
        if self.storage is not None:
            if self._identity is None:
                self.storage.clear()
            else:
                self.storage.save(self._snapshot())
        for listener in list(self._listeners):
            listener(self)
