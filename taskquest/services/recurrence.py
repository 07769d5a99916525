from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta

from taskquest.domain.entities import Task
from taskquest.domain.enums import RepeatInterval


def next_occurrence(task: Task, *, new_id: int, now: datetime) -> Task | None:
    if task.repeat_interval == RepeatInterval.NONE:
        return None
    return replace(
        task,
        id=new_id,
        deadline=next_deadline(task.deadline, task.repeat_interval),
        created_at=now,
        completed=False,
        expired=False,
        rewarded=False,
    )


def next_deadline(current: datetime, interval: RepeatInterval) -> datetime:
    if interval == RepeatInterval.NONE:
        raise ValueError(f"Task does not repeat: {interval}")

    # Shift local wall-clock time so the due hour survives DST changes.
    local = current.astimezone().replace(tzinfo=None)
    if interval == RepeatInterval.DAILY:
        shifted = local + timedelta(days=1)
    elif interval == RepeatInterval.WEEKLY:
        shifted = local + timedelta(weeks=1)
    else:
        shifted = _add_months(local, 1)
    return shifted.astimezone()


def _add_months(base: datetime, months: int) -> datetime:
    # Day overflow rolls forward: Jan 31 + 1 month -> Mar 3 (Mar 2 in leap years).
    year = base.year + (base.month - 1 + months) // 12
    month = (base.month - 1 + months) % 12 + 1
    first = base.replace(year=year, month=month, day=1)
    return first + timedelta(days=base.day - 1)
