from __future__ import annotations

import logging
import sys
from typing import Callable

from PySide6.QtCore import QTimer
from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication, QMessageBox, QStyleFactory, QSystemTrayIcon
from sqlalchemy.exc import SQLAlchemyError

from taskquest.config import SETTINGS
from taskquest.infra.db import build_engine, build_session_factory, init_db
from taskquest.infra.logging import setup_logging
from taskquest.infra.notifications import QtNotificationAdapter
from taskquest.infra.repository import KeyValueRepository
from taskquest.infra.ticker import EngineTicker
from taskquest.services.clock import SystemClock
from taskquest.services.task_service import TaskService
from taskquest.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


_PALETTE = {
    QPalette.Window: "#141821",
    QPalette.WindowText: "#ECEFF4",
    QPalette.Base: "#1A1F2B",
    QPalette.AlternateBase: "#222836",
    QPalette.Text: "#ECEFF4",
    QPalette.Button: "#262D3D",
    QPalette.ButtonText: "#ECEFF4",
    QPalette.ToolTipBase: "#222836",
    QPalette.ToolTipText: "#ECEFF4",
    QPalette.Highlight: "#D97706",
    QPalette.HighlightedText: "#FFFFFF",
}


def _apply_dark_palette(app: QApplication) -> None:
    palette = QPalette()
    for role, color in _PALETTE.items():
        palette.setColor(role, QColor(color))
    app.setPalette(palette)


def _defer_to_event_loop(callback: Callable[[], None]) -> None:
    QTimer.singleShot(0, callback)


def _build_tray(app: QApplication) -> QSystemTrayIcon | None:
    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.info("System tray unavailable; alerts are shown in the window only")
        return None
    tray = QSystemTrayIcon(app.windowIcon(), app)
    tray.setToolTip("TaskQuest")
    tray.show()
    return tray


def main() -> None:
    log_file = setup_logging(SETTINGS)
    logger.info("TaskQuest starting, logging to %s", log_file)
    app = QApplication(sys.argv)

    engine = build_engine(SETTINGS.database_url)
    try:
        init_db(engine)
    except SQLAlchemyError as exc:
        logger.exception("Database initialisation failed")
        QMessageBox.critical(None, "DB error", str(exc))
        return

    app.setStyle(QStyleFactory.create("Fusion"))
    _apply_dark_palette(app)
    app.setFont(QFont("Bahnschrift", 10))

    clock = SystemClock()
    tray = _build_tray(app)
    notifier = QtNotificationAdapter(clock, tray, app)
    service = TaskService(
        KeyValueRepository(build_session_factory(engine)),
        notifier,
        clock=clock,
        defer=_defer_to_event_loop,
    )
    service.load()

    window = MainWindow(service)
    if tray is None:
        notifier.alert_fired.connect(
            lambda _notification_id, title, body: QMessageBox.information(window, title, body)
        )

    ticker = EngineTicker(
        service,
        scan_interval_ms=SETTINGS.scan_interval_ms,
        display_interval_ms=SETTINGS.display_interval_ms,
        parent=window,
    )
    ticker.time_left_changed.connect(window.update_time_left)
    ticker.start()

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
