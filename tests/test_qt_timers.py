from __future__ import annotations

import os
from datetime import timedelta

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtCore = pytest.importorskip("PySide6.QtCore")
QtTest = pytest.importorskip("PySide6.QtTest")

from fakes import FakeClock  # noqa: E402
from taskquest.domain.enums import Priority  # noqa: E402
from taskquest.infra.notifications import MAX_TIMER_MS, QtNotificationAdapter  # noqa: E402
from taskquest.infra.ticker import EngineTicker  # noqa: E402
from taskquest.services.task_service import TaskService  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def test_scan_tick_expires_and_display_tick_only_reads(qapp, service: TaskService, clock: FakeClock) -> None:
    ticker = EngineTicker(service, scan_interval_ms=10, display_interval_ms=10)
    published: list[dict[int, str]] = []
    ticker.time_left_changed.connect(published.append)
    task = service.add_task("Tick", timedelta(seconds=5), priority=Priority.LOW)
    clock.advance(seconds=6)

    ticker.refresh_display()
    assert published[-1][task.id] == "Time's up"
    assert not service.get_task(task.id).expired

    ticker.scan()
    ticker.scan()
    assert service.get_task(task.id).expired
    assert service.points == 0

    ticker.refresh_display()
    assert task.id not in published[-1]


def test_ticker_start_scans_immediately(qapp, service: TaskService, clock: FakeClock) -> None:
    ticker = EngineTicker(service, scan_interval_ms=60_000, display_interval_ms=60_000)
    task = service.add_task("Immediate", timedelta(seconds=1))
    clock.advance(seconds=2)

    ticker.start()
    try:
        assert service.get_task(task.id).expired
        assert ticker.scan_timer.isActive()
        assert ticker.display_timer.isActive()
    finally:
        ticker.stop()

    assert not ticker.scan_timer.isActive()


def test_adapter_ignores_past_alerts_and_cancels_idempotently(qapp, clock: FakeClock) -> None:
    adapter = QtNotificationAdapter(clock)

    adapter.schedule_at(1, "Past", "body", clock.now() - timedelta(seconds=1))
    adapter.schedule_at(2, "Future", "body", clock.now() + timedelta(minutes=5))

    assert adapter.pending_ids == [2]
    adapter.cancel(2)
    adapter.cancel(2)
    adapter.cancel(999)
    assert adapter.pending_ids == []


def test_adapter_fires_due_alert(qapp, clock: FakeClock) -> None:
    adapter = QtNotificationAdapter(clock)
    fired: list[tuple[int, str, str]] = []
    adapter.alert_fired.connect(lambda notification_id, title, body: fired.append((notification_id, title, body)))
    big_id = 1_773_133_200_000

    adapter.schedule_at(big_id, "Due", "Task is due now!", clock.now() + timedelta(milliseconds=20))
    clock.advance(seconds=1)
    QtTest.QTest.qWait(200)

    assert fired == [(big_id, "Due", "Task is due now!")]
    assert adapter.pending_ids == []


def test_adapter_rearms_alerts_beyond_timer_range(qapp, clock: FakeClock) -> None:
    adapter = QtNotificationAdapter(clock)
    fired: list[int] = []
    adapter.alert_fired.connect(lambda notification_id, title, body: fired.append(notification_id))

    adapter.schedule_at(7, "Monthly", "body", clock.now() + timedelta(days=40))
    clock.advance(milliseconds=MAX_TIMER_MS)
    adapter._on_timeout(7)

    assert adapter.pending_ids == [7]
    assert fired == []


def test_service_drives_the_qt_adapter(qapp, kv, clock: FakeClock) -> None:
    adapter = QtNotificationAdapter(clock)
    service = TaskService(kv, adapter, clock=clock)

    task = service.add_task("Wired", timedelta(hours=1), reminder_offset_minutes=10)
    assert adapter.pending_ids == [task.id, task.reminder_id]

    service.toggle_completed(task.id)
    assert adapter.pending_ids == []

