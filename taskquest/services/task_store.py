from __future__ import annotations

import logging

from taskquest.domain.entities import REMINDER_ID_OFFSET, Task
from taskquest.domain.errors import PersistenceError

from .clock import Clock
from .ports import Deferrer, KeyValueStore, run_now
from .serialization import TASKS_KEY, dump_tasks, load_tasks

logger = logging.getLogger(__name__)

ID_BLOCK = 2 * REMINDER_ID_OFFSET


class TaskIdAllocator:
    def __init__(self, clock: Clock, last_id: int = 0) -> None:
        self._clock = clock
        self._last_id = last_id

    def observe(self, task_id: int) -> None:
        self._last_id = max(self._last_id, task_id)

    def next_id(self) -> int:
        candidate = max(int(self._clock.now().timestamp() * 1000), self._last_id + 1)
        if candidate % ID_BLOCK >= REMINDER_ID_OFFSET:
            candidate = (candidate // ID_BLOCK + 1) * ID_BLOCK
        self._last_id = candidate
        return candidate


class TaskStore:
    def __init__(self, kv: KeyValueStore, defer: Deferrer = run_now) -> None:
        self._kv = kv
        self._defer = defer
        self._tasks: list[Task] = []
        self._flush_pending = False

    def list(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task | None:
        return next((task for task in self._tasks if task.id == task_id), None)

    def upsert(self, task: Task) -> None:
        for index, existing in enumerate(self._tasks):
            if existing.id == task.id:
                self._tasks[index] = task
                break
        else:
            self._tasks.insert(0, task)
        self._schedule_flush()

    def remove(self, task_id: int) -> bool:
        remaining = [task for task in self._tasks if task.id != task_id]
        if len(remaining) == len(self._tasks):
            return False
        self._tasks = remaining
        self._schedule_flush()
        return True

    def replace_all(self, tasks: list[Task]) -> None:
        self._tasks = list(tasks)

    def load(self) -> list[Task]:
        try:
            blob = self._kv.load(TASKS_KEY)
        except PersistenceError:
            logger.exception("Failed to load tasks")
            return []
        if blob is None:
            return []
        try:
            return load_tasks(blob)
        except (ValueError, KeyError, TypeError):
            logger.exception("Stored task collection is corrupt; starting empty")
            return []

    def flush(self) -> None:
        self._flush_pending = False
        try:
            self._kv.save(TASKS_KEY, dump_tasks(self._tasks))
        except PersistenceError:
            logger.warning("Task flush failed; in-memory state kept", exc_info=True)

    def _schedule_flush(self) -> None:
        if self._flush_pending:
            return
        self._flush_pending = True
        self._defer(self.flush)
