from __future__ import annotations

from datetime import datetime

from taskquest.domain.entities import Task

TIME_UP = "Time's up"


def format_time_left(deadline: datetime, now: datetime) -> str:
    seconds = int((deadline - now).total_seconds())
    if seconds <= 0:
        return TIME_UP

    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs:
        parts.append(f"{secs}s")
    return " ".join(parts)


def time_left_by_task(tasks: tuple[Task, ...], now: datetime) -> dict[int, str]:
    return {task.id: format_time_left(task.deadline, now) for task in tasks if task.is_pending}
