from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RepeatInterval(StrEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class AchievementId(StrEnum):
    FIRST_TASK = "first_task"
    FIVE_TASKS = "five_tasks"
    STREAK_3 = "streak_3"
    PRIORITY_MASTER = "priority_master"
