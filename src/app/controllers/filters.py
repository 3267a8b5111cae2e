"""
Client-side predicates over cached rows.

A predicate with an empty value, or the ``"none"`` sentinel a select box
uses for "no choice", is inactive and matches everything. Active predicates
are AND-combined, so order never matters.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

from src.app.repositories.tabular_store import Row

NONE_SENTINEL = "none"

DateLike = Union[date, str, None]


def _inactive(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == "" or value.strip().lower() == NONE_SENTINEL
    return False


def _as_date(value: DateLike) -> Optional[date]:
    """None for blank or unparseable values"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _inactive(value):
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _normalized(value: Any) -> Any:
    """Enum members, booleans and "true"/"false" strings compare alike"""
    if hasattr(value, "value"):
        value = value.value
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match on a text column"""

    column: str
    text: Optional[str]

    @property
    def active(self) -> bool:
        return not _inactive(self.text)

    def matches(self, row: Row) -> bool:
        if not self.active:
            return True
        value = row.get(self.column)
        return str(self.text).strip().lower() in str(value or "").lower()


@dataclass(frozen=True)
class Equals:
    """Equality on an enum or boolean column"""

    column: str
    value: Any

    @property
    def active(self) -> bool:
        return not _inactive(self.value)

    def matches(self, row: Row) -> bool:
        if not self.active:
            return True
        return _normalized(row.get(self.column)) == _normalized(self.value)


@dataclass(frozen=True)
class DateRange:
    """Inclusive date bounds; either bound may be left open"""

    column: str
    start: DateLike = None
    end: DateLike = None

    @property
    def active(self) -> bool:
        """A bound that does not parse as a date is left open"""
        return _as_date(self.start) is not None or _as_date(self.end) is not None

    def matches(self, row: Row) -> bool:
        if not self.active:
            return True
        current = _as_date(row.get(self.column))
        if current is None:
            return False
        start = _as_date(self.start)
        end = _as_date(self.end)
        if start is not None and current < start:
            return False
        if end is not None and current > end:
            return False
        return True


Predicate = Union[Contains, Equals, DateRange]


def apply_filters(rows: Iterable[Row], predicates: Iterable[Predicate]) -> List[Row]:
    active = [predicate for predicate in predicates if predicate.active]
    return [row for row in rows if all(predicate.matches(row) for predicate in active)]
