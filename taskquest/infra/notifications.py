from __future__ import annotations

import logging
from datetime import datetime

from PySide6.QtCore import QObject, QTimer, Signal
from PySide6.QtWidgets import QSystemTrayIcon

from taskquest.domain.errors import NotificationError
from taskquest.services.clock import Clock

logger = logging.getLogger(__name__)

# QTimer intervals are signed 32-bit milliseconds (about 24.8 days).
MAX_TIMER_MS = 2**31 - 1


class QtNotificationAdapter(QObject):
    alert_fired = Signal(object, str, str)

    def __init__(self, clock: Clock, tray: QSystemTrayIcon | None = None, parent: QObject | None = None):
        super().__init__(parent)
        self._clock = clock
        self._tray = tray
        self._pending: dict[int, tuple[str, str, datetime]] = {}
        self._timers: dict[int, QTimer] = {}

    @property
    def pending_ids(self) -> list[int]:
        return sorted(self._pending)

    def schedule_at(self, notification_id: int, title: str, body: str, fire_at: datetime) -> None:
        self.cancel(notification_id)
        if fire_at <= self._clock.now():
            return
        self._pending[notification_id] = (title, body, fire_at)
        try:
            self._arm(notification_id)
        except RuntimeError as exc:
            self._pending.pop(notification_id, None)
            raise NotificationError(f"Failed to schedule alert {notification_id}") from exc

    def cancel(self, notification_id: int) -> None:
        self._pending.pop(notification_id, None)
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def _arm(self, notification_id: int) -> None:
        _, _, fire_at = self._pending[notification_id]
        delay_ms = int((fire_at - self._clock.now()).total_seconds() * 1000)

        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._on_timeout(notification_id))
        timer.start(max(0, min(delay_ms, MAX_TIMER_MS)))
        self._timers[notification_id] = timer

    def _on_timeout(self, notification_id: int) -> None:
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.deleteLater()
        entry = self._pending.get(notification_id)
        if entry is None:
            return

        title, body, fire_at = entry
        if fire_at > self._clock.now():
            self._arm(notification_id)
            return

        del self._pending[notification_id]
        logger.info("Alert %s fired: %s", notification_id, title)
        self.alert_fired.emit(notification_id, title, body)
        if self._tray is not None and self._tray.isVisible():
            self._tray.showMessage(title, body, QSystemTrayIcon.Information)
