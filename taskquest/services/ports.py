from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol

Deferrer = Callable[[Callable[[], None]], None]


class NotificationAdapter(Protocol):
    def schedule_at(self, notification_id: int, title: str, body: str, fire_at: datetime) -> None: ...

    def cancel(self, notification_id: int) -> None: ...


class KeyValueStore(Protocol):
    def load(self, key: str) -> str | None: ...

    def save(self, key: str, blob: str) -> None: ...


def run_now(callback: Callable[[], None]) -> None:
    callback()
