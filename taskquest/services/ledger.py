from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from taskquest.domain.entities import Achievement, Banner, Task
from taskquest.domain.enums import AchievementId, Priority
from taskquest.domain.errors import PersistenceError

from .ports import Deferrer, KeyValueStore, run_now
from .serialization import POINTS_KEY, dump_points, load_points

logger = logging.getLogger(__name__)

COMPLETION_REWARD = {
    Priority.HIGH: 5,
    Priority.MEDIUM: 3,
    Priority.LOW: 2,
}

EXPIRATION_PENALTY = {
    Priority.HIGH: 8,
    Priority.MEDIUM: 5,
    Priority.LOW: 3,
}

TaskCounter = Callable[[tuple[Task, ...], datetime], int]


def _completed(tasks: tuple[Task, ...], now: datetime) -> int:
    return sum(1 for task in tasks if task.completed)


def _completed_created_today(tasks: tuple[Task, ...], now: datetime) -> int:
    today = now.date()
    return sum(
        1
        for task in tasks
        if task.completed and task.created_at.astimezone(now.tzinfo).date() == today
    )


def _completed_high_priority(tasks: tuple[Task, ...], now: datetime) -> int:
    return sum(1 for task in tasks if task.completed and task.priority == Priority.HIGH)


@dataclass(frozen=True)
class AchievementRule:
    achievement_id: AchievementId
    counter: TaskCounter
    threshold: int


ACHIEVEMENT_RULES = (
    AchievementRule(AchievementId.FIRST_TASK, _completed, 1),
    AchievementRule(AchievementId.FIVE_TASKS, _completed, 5),
    AchievementRule(AchievementId.STREAK_3, _completed_created_today, 3),
    AchievementRule(AchievementId.PRIORITY_MASTER, _completed_high_priority, 3),
)


def default_achievements() -> list[Achievement]:
    return [
        Achievement(
            id=AchievementId.FIRST_TASK.value,
            title="Perfect Start",
            description="Complete your first task",
            point_value=5,
            icon="🌟",
        ),
        Achievement(
            id=AchievementId.FIVE_TASKS.value,
            title="Active Achiever",
            description="Complete 5 tasks",
            point_value=10,
            icon="🏆",
        ),
        Achievement(
            id=AchievementId.STREAK_3.value,
            title="On Fire",
            description="Complete 3 tasks in one day",
            point_value=8,
            icon="⚡",
        ),
        Achievement(
            id=AchievementId.PRIORITY_MASTER.value,
            title="Priority Master",
            description="Complete 3 high-priority tasks",
            point_value=10,
            icon="👑",
        ),
    ]


class GamificationLedger:
    def __init__(
        self,
        kv: KeyValueStore,
        defer: Deferrer = run_now,
        achievements: list[Achievement] | None = None,
    ) -> None:
        self._kv = kv
        self._defer = defer
        self._points = 0
        items = achievements if achievements is not None else default_achievements()
        self._achievements = {achievement.id: replace(achievement) for achievement in items}

    @property
    def points(self) -> int:
        return self._points

    @property
    def achievements(self) -> tuple[Achievement, ...]:
        return tuple(replace(achievement) for achievement in self._achievements.values())

    def load(self) -> None:
        try:
            blob = self._kv.load(POINTS_KEY)
        except PersistenceError:
            logger.exception("Failed to load points")
            return
        if blob is None:
            return
        try:
            self._points = load_points(blob)
        except ValueError:
            logger.exception("Stored points value is corrupt: %r", blob)

    def award_completion(
        self,
        task: Task,
        tasks: tuple[Task, ...],
        now: datetime,
        *,
        include_base: bool = True,
    ) -> Banner | None:
        delta = COMPLETION_REWARD[task.priority] if include_base else 0
        unlocked: Achievement | None = None

        for rule in ACHIEVEMENT_RULES:
            achievement = self._achievements.get(rule.achievement_id.value)
            if achievement is None or achievement.unlocked:
                continue
            if rule.counter(tasks, now) != rule.threshold:
                continue
            achievement.unlocked = True
            delta += achievement.point_value
            unlocked = achievement
            logger.info("Achievement unlocked: %s", achievement.id)

        if delta:
            self._set_points(self._points + delta)
        logger.info("Task %s completed: +%s points (total %s)", task.id, delta, self._points)

        if unlocked is not None:
            return Banner(
                id=unlocked.id,
                title=unlocked.title,
                description=unlocked.description,
                points=unlocked.point_value,
                icon=unlocked.icon,
            )
        if delta > 0:
            return Banner(
                id="task_completed",
                title="Well done!",
                description="Task completed",
                points=delta,
                icon="✅",
            )
        return None

    def deduct_expiration(self, task: Task) -> Banner:
        penalty = EXPIRATION_PENALTY[task.priority]
        self._set_points(max(0, self._points - penalty))
        logger.info("Task %s expired: -%s points (total %s)", task.id, penalty, self._points)
        return Banner(
            id="points_deducted",
            title="Deadline missed",
            description=f"{penalty} points deducted, time ran out for: {task.title}",
            points=-penalty,
            icon="⚠️",
        )

    def flush(self) -> None:
        try:
            self._kv.save(POINTS_KEY, dump_points(self._points))
        except PersistenceError:
            logger.warning("Points flush failed; in-memory total kept", exc_info=True)

    def _set_points(self, value: int) -> None:
        self._points = value
        self._defer(self.flush)
