"""
Task calendar arithmetic.

Month view: whole weeks starting on Sunday, padded with the neighbouring
months' days. Week view: Monday to Sunday around the anchor day.
"""

import calendar
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Iterable, List

from src.app.repositories.tabular_store import Row

MONTH = "month"
WEEK = "week"


def month_grid(year: int, month: int) -> List[List[date]]:
    return calendar.Calendar(firstweekday=calendar.SUNDAY).monthdatescalendar(year, month)


def week_days(day: date) -> List[date]:
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=offset) for offset in range(7)]


def shift_month(day: date, months: int) -> date:
    """Same day-of-month ``months`` away, clamped to the target month's length"""
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def tasks_due_on(rows: Iterable[Row], day: date) -> List[Row]:
    iso = day.isoformat()
    return [row for row in rows if str(row.get("due_date") or "")[:10] == iso]


@dataclass(frozen=True)
class CalendarView:
    anchor: date
    mode: str = MONTH

    def days(self) -> List[date]:
        if self.mode == WEEK:
            return week_days(self.anchor)
        return [day for week in month_grid(self.anchor.year, self.anchor.month) for day in week]

    def weeks(self) -> List[List[date]]:
        if self.mode == WEEK:
            return [week_days(self.anchor)]
        return month_grid(self.anchor.year, self.anchor.month)

    def in_period(self, day: date) -> bool:
        """False for the padding days of a month view"""
        if self.mode == WEEK:
            return day in week_days(self.anchor)
        return (day.year, day.month) == (self.anchor.year, self.anchor.month)

    def previous(self) -> "CalendarView":
        if self.mode == WEEK:
            return replace(self, anchor=self.anchor - timedelta(days=7))
        return replace(self, anchor=shift_month(self.anchor, -1))

    def next(self) -> "CalendarView":
        if self.mode == WEEK:
            return replace(self, anchor=self.anchor + timedelta(days=7))
        return replace(self, anchor=shift_month(self.anchor, 1))

    def with_mode(self, mode: str) -> "CalendarView":
        return replace(self, mode=mode)

    def schedule(self, rows: Iterable[Row]) -> List[tuple]:
        """(day, tasks due that day) for every day on screen"""
        rows = list(rows)
        return [(day, tasks_due_on(rows, day)) for day in self.days()]
