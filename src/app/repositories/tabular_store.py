"""
Remote Tabular Store boundary.

Every operation answers with a StoreResponse instead of raising: callers
branch on ``response.error``. ``NO_ROWS`` marks an empty single-row read and
is a normal outcome, not a failure.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.libs.result import Error

NO_ROWS = "NO_ROWS"

Row = Dict[str, Any]
Filters = Dict[str, Any]


@dataclass(frozen=True)
class StoreResponse:
    data: Any = None
    error: Optional[Error] = None

    @classmethod
    def success(cls, data: Any = None) -> "StoreResponse":
        return cls(data=data)

    @classmethod
    def failure(cls, code: str, message: str) -> "StoreResponse":
        return cls(error=Error(code, message))

    @property
    def no_rows(self) -> bool:
        return self.error is not None and self.error.code == NO_ROWS

    @property
    def rows(self) -> List[Row]:
        if self.error is not None or self.data is None:
            return []
        if isinstance(self.data, list):
            return self.data
        return [self.data]


class ITabularStore(ABC):
    """Per-table select/insert/update/delete filtered by column equality"""

    @abstractmethod
    async def select(self, table: str, filters: Filters) -> StoreResponse:
        """Rows whose columns equal every filter value"""
        pass

    @abstractmethod
    async def insert(self, table: str, row: Row) -> StoreResponse:
        """Create one row; data is a list holding the stored row"""
        pass

    @abstractmethod
    async def update(self, table: str, patch: Row, filters: Filters) -> StoreResponse:
        """Overwrite the patched columns on every matching row"""
        pass

    @abstractmethod
    async def delete(self, table: str, filters: Filters) -> StoreResponse:
        """Delete every matching row"""
        pass
