"""
Dismissable user notices.

The view layer renders ``notifier.notices`` and calls ``dismiss``; nothing
here knows how a notice is drawn.
"""

import itertools
from datetime import datetime
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from src.domain.base import utcnow

MAX_NOTICES = 50


@dataclass
class Notice:
    id: int
    message: str
    level: str = "error"
    code: Optional[str] = None
    created_at: datetime = field(default_factory=utcnow)


class Notifier:
    """Keeps at most ``max_notices``; the oldest notice is dropped first"""

    def __init__(self, max_notices: int = MAX_NOTICES):
        self.max_notices = max_notices
        self._ids = itertools.count(1)
        self._notices: List[Notice] = []
        self._listeners: List[Callable[[Notice], None]] = []

    @property
    def notices(self) -> List[Notice]:
        return list(self._notices)

    def notify(self, message: str, level: str = "error", code: Optional[str] = None) -> Notice:
        notice = Notice(id=next(self._ids), message=message, level=level, code=code)
        self._notices.append(notice)
        if len(self._notices) > self.max_notices:
            del self._notices[: len(self._notices) - self.max_notices]
        for listener in list(self._listeners):
            listener(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.notify(message, level="success")

    def dismiss(self, notice_id: int) -> bool:
        before = len(self._notices)
        self._notices = [notice for notice in self._notices if notice.id != notice_id]
        return len(self._notices) != before

    def clear(self) -> None:
        self._notices = []

    def on_notice(self, listener: Callable[[Notice], None]) -> None:
        self._listeners.append(listener)
