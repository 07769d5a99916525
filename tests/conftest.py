from __future__ import annotations

import pytest

from fakes import FakeClock, MemoryKeyValueStore, RecordingNotifier
from taskquest.services.task_service import TaskService


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def notifier(clock: FakeClock) -> RecordingNotifier:
    return RecordingNotifier(clock)


@pytest.fixture()
def service(kv: MemoryKeyValueStore, notifier: RecordingNotifier, clock: FakeClock) -> TaskService:
    return TaskService(kv, notifier, clock=clock)
