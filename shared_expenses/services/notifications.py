"""Transient user-visible notifications (toasts).

Notices queue up until the next page render or API poll drains them. The
queue is bounded; the oldest notice is dropped when it overflows.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Deque, List, Literal

Level = Literal["success", "error", "info"]


@dataclass(frozen=True)
class Notice:
    level: Level
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }


class Notifier:
    def __init__(self, max_pending: int = 20):
        self._pending: Deque[Notice] = deque(maxlen=max_pending)

    def push(self, level: Level, message: str) -> Notice:
        notice = Notice(level=level, message=message)
        self._pending.append(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.push("success", message)

    def error(self, message: str) -> Notice:
        return self.push("error", message)

    def pending(self) -> List[Notice]:
        return list(self._pending)

    def drain(self) -> List[Notice]:
        notices = list(self._pending)
        self._pending.clear()
        return notices
