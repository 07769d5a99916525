from __future__ import annotations

import logging
from datetime import datetime, timedelta

from taskquest.domain.entities import REMINDER_ID_OFFSET, Task
from taskquest.domain.errors import NotificationError

from .ports import NotificationAdapter

logger = logging.getLogger(__name__)


class TaskAlerts:
    def __init__(self, adapter: NotificationAdapter) -> None:
        self._adapter = adapter

    def schedule(self, task: Task, now: datetime) -> None:
        if not task.is_pending or task.deadline <= now:
            return
        self._schedule(task.id, task.title, "Task is due now!", task.deadline)

        if task.reminder_offset_minutes > 0:
            reminder_at = task.deadline - timedelta(minutes=task.reminder_offset_minutes)
            if reminder_at > now:
                self._schedule(
                    task.reminder_id,
                    f"Reminder: {task.title}",
                    f"{task.reminder_offset_minutes} minutes left until the deadline",
                    reminder_at,
                )

    def cancel(self, task_id: int) -> None:
        for notification_id in (task_id, task_id + REMINDER_ID_OFFSET):
            try:
                self._adapter.cancel(notification_id)
            except NotificationError:
                logger.warning("Failed to cancel alert %s", notification_id, exc_info=True)

    def _schedule(self, notification_id: int, title: str, body: str, fire_at: datetime) -> None:
        try:
            self._adapter.schedule_at(notification_id, title, body, fire_at)
        except NotificationError:
            logger.warning("Failed to schedule alert %s at %s", notification_id, fire_at, exc_info=True)
