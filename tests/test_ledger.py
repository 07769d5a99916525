from __future__ import annotations

from datetime import timedelta

import pytest

from fakes import START, MemoryKeyValueStore
from taskquest.domain.entities import Task
from taskquest.domain.enums import Priority, RepeatInterval
from taskquest.services.ledger import GamificationLedger, default_achievements
from taskquest.services.serialization import POINTS_KEY


def make_task(task_id: int, *, completed: bool = True, priority: Priority = Priority.MEDIUM, created_days_ago: int = 0) -> Task:
    created_at = START - timedelta(days=created_days_ago)
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        description="",
        completed=completed,
        deadline=created_at + timedelta(hours=1),
        created_at=created_at,
        priority=priority,
        is_starred=False,
        reminder_offset_minutes=0,
        repeat_interval=RepeatInterval.NONE,
        expired=False,
    )


def unlocked_achievements(*keep_locked: str):
    achievements = default_achievements()
    for achievement in achievements:
        achievement.unlocked = achievement.id not in keep_locked
    return achievements


@pytest.mark.parametrize(
    ("priority", "reward"),
    [(Priority.HIGH, 5), (Priority.MEDIUM, 3), (Priority.LOW, 2)],
)
def test_base_reward_by_priority(priority: Priority, reward: int) -> None:
    ledger = GamificationLedger(MemoryKeyValueStore(), achievements=unlocked_achievements())
    task = make_task(1, priority=priority)

    banner = ledger.award_completion(task, (task,), START)

    assert ledger.points == reward
    assert banner.id == "task_completed"
    assert banner.points == reward


def test_five_tasks_unlocks_on_exactly_five_completions() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore(), achievements=unlocked_achievements("five_tasks"))
    tasks = tuple(make_task(i, created_days_ago=1) for i in range(1, 6))

    banner = ledger.award_completion(tasks[0], tasks, START)

    assert banner.id == "five_tasks"
    assert ledger.points == 3 + 10


def test_threshold_is_skipped_when_count_jumps_past_it() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore(), achievements=unlocked_achievements("five_tasks"))
    tasks = tuple(make_task(i, created_days_ago=1) for i in range(1, 7))

    ledger.award_completion(tasks[0], tasks, START)

    five = next(a for a in ledger.achievements if a.id == "five_tasks")
    assert not five.unlocked
    assert ledger.points == 3


def test_streak_counts_only_tasks_created_today() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore(), achievements=unlocked_achievements("streak_3"))
    today = (make_task(1), make_task(2))
    older = (make_task(3, created_days_ago=1),)

    ledger.award_completion(today[0], today + older, START)
    assert not next(a for a in ledger.achievements if a.id == "streak_3").unlocked

    third = make_task(4)
    banner = ledger.award_completion(third, today + older + (third,), START)

    assert banner.id == "streak_3"
    assert ledger.points == 3 + 3 + 8


def test_priority_master_counts_completed_high_priority_tasks() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore(), achievements=unlocked_achievements("priority_master"))
    tasks = (
        make_task(1, priority=Priority.HIGH, created_days_ago=2),
        make_task(2, priority=Priority.HIGH, created_days_ago=2),
        make_task(3, priority=Priority.HIGH, created_days_ago=2),
        make_task(4, completed=False, priority=Priority.HIGH),
    )

    banner = ledger.award_completion(tasks[2], tasks, START)

    assert banner.id == "priority_master"
    assert ledger.points == 5 + 10


def test_several_unlocks_in_one_evaluation_surface_the_last() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore())
    tasks = tuple(make_task(i, priority=Priority.HIGH) for i in range(1, 4))

    banner = ledger.award_completion(tasks[2], tasks, START)

    unlocked = {a.id for a in ledger.achievements if a.unlocked}
    assert unlocked == {"streak_3", "priority_master"}
    assert banner.id == "priority_master"
    assert ledger.points == 5 + 8 + 10


def test_achievement_unlocks_at_most_once() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore())
    task = make_task(1)

    ledger.award_completion(task, (task,), START)
    banner = ledger.award_completion(task, (task,), START)

    assert banner.id == "task_completed"
    assert ledger.points == (3 + 5) + 3


def test_recrossing_threshold_after_delete_gives_no_second_bonus() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore())
    first = make_task(1, created_days_ago=1)
    ledger.award_completion(first, (first,), START)

    replacement = make_task(2, created_days_ago=1)
    ledger.award_completion(replacement, (replacement,), START)

    assert ledger.points == (3 + 5) + 3


def test_deduction_is_floored_at_zero() -> None:
    kv = MemoryKeyValueStore({POINTS_KEY: "4"})
    ledger = GamificationLedger(kv)
    ledger.load()

    banner = ledger.deduct_expiration(make_task(1, completed=False, priority=Priority.HIGH))

    assert ledger.points == 0
    assert banner.points == -8
    assert kv.data[POINTS_KEY] == "0"


def test_corrupt_points_blob_is_ignored() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore({POINTS_KEY: "lots"}))

    ledger.load()

    assert ledger.points == 0


def test_achievement_snapshots_are_detached() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore())

    snapshot = ledger.achievements
    snapshot[0].unlocked = True

    assert not ledger.achievements[0].unlocked


def test_without_base_reward_only_achievement_bonus_is_paid() -> None:
    ledger = GamificationLedger(MemoryKeyValueStore(), achievements=unlocked_achievements("five_tasks"))
    tasks = tuple(make_task(i, created_days_ago=1) for i in range(1, 6))

    banner = ledger.award_completion(tasks[0], tasks, START, include_base=False)
    assert banner.id == "five_tasks"
    assert ledger.points == 10

    assert ledger.award_completion(tasks[0], tasks, START, include_base=False) is None
    assert ledger.points == 10


def test_supplied_achievements_are_copied() -> None:
    supplied = default_achievements()
    ledger = GamificationLedger(MemoryKeyValueStore(), achievements=supplied)
    task = make_task(1)

    ledger.award_completion(task, (task,), START)

    assert not any(achievement.unlocked for achievement in supplied)
    assert next(a for a in ledger.achievements if a.id == "first_task").unlocked
