"""
Durable storage boundary for the signed-in session.

The session is stored under one namespaced key as ``{"version": N, "state":
{...}}``. Older shapes are migrated forward on load:

* version 0: ``state`` is the bare user object
* version 1: ``state`` is ``{"user": {"id", "email", "companyId", ...}}``
* version 2: ``state`` is ``{"identity", "access_token", "access_flags",
  "acting_tenant_id"}``
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

STORAGE_VERSION = 2

PersistedState = Dict[str, Any]


class UnsupportedStorageVersion(ValueError):
    pass


def signed_out_state() -> PersistedState:
    return {
        "identity": None,
        "access_token": None,
        "access_flags": {},
        "acting_tenant_id": None,
    }


def _identity_from_legacy_user(user: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not user:
        return None
    email = user.get("email", "")
    return {
        "id": user["id"],
        "email": email,
        "name": user.get("name") or email.split("@")[0],
        "avatar_url": user.get("avatar_url"),
        "tenant_id": user.get("companyId") or user.get("tenant_id"),
        "is_master": bool(user.get("is_master", False)),
    }


def migrate(version: int, state: Any) -> PersistedState:
    """Bring a stored state of any known version to the current shape"""
    if version == 0:
        version, state = 1, {"user": state}
    if version == 1:
        migrated = signed_out_state()
        migrated["identity"] = _identity_from_legacy_user((state or {}).get("user"))
        version, state = 2, migrated
    if version != STORAGE_VERSION:
        raise UnsupportedStorageVersion(f"Unknown session storage version {version}")
    return {**signed_out_state(), **(state or {})}


class ISessionStorage(ABC):
    """Where the session context keeps its state between runs"""

    @abstractmethod
    def load(self) -> Optional[PersistedState]:
        """Current-version state, or None when nothing usable is stored"""
        pass

    @abstractmethod
    def save(self, state: PersistedState) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class MemorySessionStorage(ISessionStorage):
    """Process-local storage holding the same envelope a file would"""

    def __init__(self, envelope: Optional[Dict[str, Any]] = None):
        self.envelope = envelope

    def load(self) -> Optional[PersistedState]:
        if self.envelope is None:
            return None
        return migrate(self.envelope.get("version", 0), self.envelope.get("state"))

    def save(self, state: PersistedState) -> None:
        self.envelope = {"version": STORAGE_VERSION, "state": state}

    def clear(self) -> None:
        self.envelope = None
