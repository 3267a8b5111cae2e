"""
JSON-file session storage.

The file holds a JSON object of namespaced keys so several clients (or
several stores of one client) can share it; this storage owns one key.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from src.app.services.session_storage import (
    STORAGE_VERSION,
    ISessionStorage,
    PersistedState,
    UnsupportedStorageVersion,
    migrate,
)

logger = logging.getLogger(__name__)


class FileSessionStorage(ISessionStorage):
    def __init__(self, path: str, key: str = "auth-storage"):
        self.path = path
        self.key = key

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as r_file:
            data = json.load(r_file)
        if not isinstance(data, dict):
            raise ValueError("Session file does not hold a JSON object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as w_file:
            json.dump(data, w_file)
        os.replace(tmp_path, self.path)

    def load(self) -> Optional[PersistedState]:
        """
        Stored state migrated to the current version.

        A missing key loads as None. Unreadable or corrupt content also loads
        as None (signed out) and is logged rather than raised.
        """
        try:
            envelope = self._read_all().get(self.key)
            if envelope is None:
                return None
            if not isinstance(envelope, dict):
                raise ValueError(f"Session key '{self.key}' is not an object")
            return migrate(int(envelope.get("version", 0)), envelope.get("state"))
        except (OSError, ValueError, KeyError, TypeError, UnsupportedStorageVersion) as exc:
            logger.warning(f"Ignoring unreadable session storage at {self.path}: {exc}")
            return None

    def save(self, state: PersistedState) -> None:
        try:
            data = self._read_all()
        except (OSError, ValueError):
            logger.warning(f"Overwriting unreadable session storage at {self.path}")
            data = {}
        data[self.key] = {"version": STORAGE_VERSION, "state": state}
        self._write_all(data)

    def clear(self) -> None:
        try:
            data = self._read_all()
        except (OSError, ValueError):
            data = {}
        if self.key in data:
            del data[self.key]
            self._write_all(data)
