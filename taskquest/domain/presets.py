from __future__ import annotations

from datetime import timedelta

from .enums import Priority, RepeatInterval

QUICK_DEADLINES = [
    ("15 min", timedelta(minutes=15)),
    ("30 min", timedelta(minutes=30)),
    ("1 hour", timedelta(hours=1)),
    ("2 hours", timedelta(hours=2)),
    ("4 hours", timedelta(hours=4)),
    ("1 day", timedelta(days=1)),
]

REMINDER_OPTIONS = [
    ("No reminder", 0),
    ("5 min before", 5),
    ("15 min before", 15),
    ("30 min before", 30),
    ("1 hour before", 60),
]

PRIORITY_OPTIONS = [
    ("Low", Priority.LOW),
    ("Medium", Priority.MEDIUM),
    ("High", Priority.HIGH),
]

REPEAT_OPTIONS = [
    ("No repeat", RepeatInterval.NONE),
    ("Daily", RepeatInterval.DAILY),
    ("Weekly", RepeatInterval.WEEKLY),
    ("Monthly", RepeatInterval.MONTHLY),
]
