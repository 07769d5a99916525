from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable

from taskquest.domain.entities import Achievement, Banner, Task, TaskStats
from taskquest.domain.enums import Priority, RepeatInterval
from taskquest.domain.errors import NotFoundError, ValidationError
from taskquest.domain.filters import TaskFilters

from .alerts import TaskAlerts
from .clock import Clock, SystemClock
from .display import time_left_by_task
from .ledger import GamificationLedger
from .ports import Deferrer, KeyValueStore, NotificationAdapter, run_now
from .recurrence import next_occurrence
from .scanner import ExpirationScanner
from .task_store import TaskIdAllocator, TaskStore

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class TaskService:
    def __init__(
        self,
        kv: KeyValueStore,
        notifier: NotificationAdapter,
        clock: Clock | None = None,
        defer: Deferrer = run_now,
        achievements: list[Achievement] | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._store = TaskStore(kv, defer)
        self._ledger = GamificationLedger(kv, defer, achievements)
        self._alerts = TaskAlerts(notifier)
        self._scanner = ExpirationScanner(self._store, self._ledger, self._alerts)
        self._ids = TaskIdAllocator(self._clock)
        self._last_notification: Banner | None = None
        self._listeners: list[Listener] = []

    def load(self) -> None:
        tasks = self._store.load()
        self._store.replace_all(tasks)
        for task in tasks:
            self._ids.observe(task.id)
        self._ledger.load()

        now = self._clock.now()
        for task in tasks:
            self._alerts.schedule(task, now)
        logger.info("Loaded %s tasks, %s points", len(tasks), self._ledger.points)
        self._notify()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._store.list()

    @property
    def points(self) -> int:
        return self._ledger.points

    @property
    def achievements(self) -> tuple[Achievement, ...]:
        return self._ledger.achievements

    @property
    def last_notification(self) -> Banner | None:
        return self._last_notification

    def dismiss_notification(self) -> None:
        if self._last_notification is None:
            return
        self._last_notification = None
        self._notify()

    def list_tasks(self, filters: TaskFilters | None = None) -> list[Task]:
        filters = filters or TaskFilters()
        return [task for task in self._store.list() if filters.matches(task)]

    def get_task(self, task_id: int) -> Task | None:
        return self._store.get(task_id)

    def stats(self) -> TaskStats:
        tasks = self._store.list()
        return TaskStats(
            total=len(tasks),
            completed=sum(1 for task in tasks if task.completed),
            starred=sum(1 for task in tasks if task.is_starred),
            expired=sum(1 for task in tasks if task.expired),
        )

    def time_left(self) -> dict[int, str]:
        return time_left_by_task(self._store.list(), self._clock.now())

    def add_task(
        self,
        title: str,
        deadline: datetime | timedelta,
        *,
        description: str = "",
        priority: Priority | str = Priority.MEDIUM,
        reminder_offset_minutes: int = 0,
        repeat_interval: RepeatInterval | str = RepeatInterval.NONE,
    ) -> Task:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Task title is required")
        if reminder_offset_minutes < 0:
            raise ValidationError("Reminder offset cannot be negative")

        now = self._clock.now()
        if isinstance(deadline, timedelta):
            deadline = now + deadline
        elif deadline.tzinfo is None:
            deadline = deadline.astimezone()
        if deadline <= now:
            raise ValidationError("Deadline must be later than now")

        try:
            priority = Priority(priority)
            repeat_interval = RepeatInterval(repeat_interval)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

        task = Task(
            id=self._ids.next_id(),
            title=title,
            description=(description or "").strip(),
            completed=False,
            deadline=deadline,
            created_at=now,
            priority=priority,
            is_starred=False,
            reminder_offset_minutes=reminder_offset_minutes,
            repeat_interval=repeat_interval,
            expired=False,
        )
        self._store.upsert(task)
        self._alerts.schedule(task, now)
        logger.info("Task %s added (deadline %s)", task.id, deadline.isoformat())

        successor = next_occurrence(task, new_id=self._ids.next_id(), now=now)
        if successor is not None:
            self._store.upsert(successor)
            self._alerts.schedule(successor, now)
            logger.info("Task %s repeats %s: next occurrence %s", task.id, repeat_interval.value, successor.id)

        self._notify()
        return task

    def toggle_completed(self, task_id: int) -> Task:
        task = self._require(task_id)
        now = self._clock.now()

        if task.completed:
            updated = replace(task, completed=False)
            self._store.upsert(updated)
            self._alerts.schedule(updated, now)
            self._notify()
            return updated

        expired = task.expired or task.deadline < now
        updated = replace(task, completed=True, expired=expired)
        banner: Banner | None = None
        if not expired:
            updated = replace(updated, rewarded=True)
            self._store.upsert(updated)
            banner = self._ledger.award_completion(
                updated,
                self._store.list(),
                now,
                include_base=not task.rewarded,
            )
        else:
            self._store.upsert(updated)
            logger.info("Task %s completed without reward (expired=%s)", task_id, expired)
        self._alerts.cancel(task_id)

        if banner is not None:
            self._last_notification = banner
        self._notify()
        return updated

    def toggle_starred(self, task_id: int) -> Task:
        task = self._require(task_id)
        updated = replace(task, is_starred=not task.is_starred)
        self._store.upsert(updated)
        self._notify()
        return updated

    def delete_task(self, task_id: int) -> bool:
        if not self._store.remove(task_id):
            return False
        self._alerts.cancel(task_id)
        logger.info("Task %s deleted", task_id)
        self._notify()
        return True

    def scan_expired(self) -> list[Banner]:
        banners = self._scanner.scan(self._clock.now())
        if banners:
            self._last_notification = banners[-1]
            self._notify()
        return banners

    def _require(self, task_id: int) -> Task:
        task = self._store.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
