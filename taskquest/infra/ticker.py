from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

from taskquest.services.task_service import TaskService


class EngineTicker(QObject):
    time_left_changed = Signal(object)

    def __init__(
        self,
        service: TaskService,
        scan_interval_ms: int = 1000,
        display_interval_ms: int = 1000,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._service = service

        self.scan_timer = QTimer(self)
        self.scan_timer.setInterval(scan_interval_ms)
        self.scan_timer.timeout.connect(self.scan)

        self.display_timer = QTimer(self)
        self.display_timer.setInterval(display_interval_ms)
        self.display_timer.timeout.connect(self.refresh_display)

    def start(self) -> None:
        self.scan()
        self.refresh_display()
        self.scan_timer.start()
        self.display_timer.start()

    def stop(self) -> None:
        self.scan_timer.stop()
        self.display_timer.stop()

    def scan(self) -> None:
        self._service.scan_expired()

    def refresh_display(self) -> None:
        self.time_left_changed.emit(self._service.time_left())
