from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .enums import Priority, RepeatInterval

REMINDER_ID_OFFSET = 1_000_000


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: str
    completed: bool
    deadline: datetime
    created_at: datetime
    priority: Priority
    is_starred: bool
    reminder_offset_minutes: int
    repeat_interval: RepeatInterval
    expired: bool
    rewarded: bool = False

    @property
    def is_pending(self) -> bool:
        return not self.completed and not self.expired

    @property
    def reminder_id(self) -> int:
        return self.id + REMINDER_ID_OFFSET


@dataclass
class Achievement:
    id: str
    title: str
    description: str
    point_value: int
    icon: str
    unlocked: bool = False


@dataclass(frozen=True)
class Banner:
    id: str
    title: str
    description: str
    points: int
    icon: str


@dataclass(frozen=True)
class TaskStats:
    total: int
    completed: int
    starred: int
    expired: int

    @property
    def completion_rate(self) -> float:
        if not self.total:
            return 0.0
        return self.completed / self.total * 100
