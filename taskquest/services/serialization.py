from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from taskquest.domain.entities import Task
from taskquest.domain.enums import Priority, RepeatInterval

TASKS_KEY = "tasks"
POINTS_KEY = "userPoints"


def _task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "completed": task.completed,
        "deadline": task.deadline.isoformat(),
        "createdAt": task.created_at.isoformat(),
        "priority": task.priority.value,
        "isStarred": task.is_starred,
        "reminder": task.reminder_offset_minutes,
        "repeats": task.repeat_interval.value,
        "expired": task.expired,
        "rewarded": task.rewarded,
    }


def _task_from_dict(data: dict[str, Any]) -> Task:
    return Task(
        id=int(data["id"]),
        title=data["title"],
        description=data.get("description") or "",
        completed=bool(data.get("completed", False)),
        deadline=datetime.fromisoformat(data["deadline"]),
        created_at=datetime.fromisoformat(data["createdAt"]),
        priority=Priority(data.get("priority", Priority.MEDIUM.value)),
        is_starred=bool(data.get("isStarred", False)),
        reminder_offset_minutes=int(data.get("reminder") or 0),
        repeat_interval=RepeatInterval(data.get("repeats") or RepeatInterval.NONE.value),
        expired=bool(data.get("expired", False)),
        rewarded=bool(data.get("rewarded", False)),
    )


def dump_tasks(tasks: list[Task] | tuple[Task, ...]) -> str:
    return json.dumps([_task_to_dict(task) for task in tasks], ensure_ascii=False)


def load_tasks(blob: str) -> list[Task]:
    payload = json.loads(blob)
    if not isinstance(payload, list):
        raise ValueError("Task blob must be a JSON array")
    return [_task_from_dict(item) for item in payload]


def dump_points(points: int) -> str:
    return str(points)


def load_points(blob: str) -> int:
    return max(0, int(blob.strip()))
