from __future__ import annotations


class TaskQuestError(Exception):
    pass


class ValidationError(TaskQuestError):
    pass


class NotFoundError(TaskQuestError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class PersistenceError(TaskQuestError):
    pass


class NotificationError(TaskQuestError):
    pass
