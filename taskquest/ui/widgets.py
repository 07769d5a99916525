from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from taskquest.domain.entities import Banner, Task
from taskquest.domain.enums import Priority, RepeatInterval
from taskquest.domain.presets import PRIORITY_OPTIONS, REPEAT_OPTIONS

PRIORITY_COLORS = {
    Priority.LOW: "#7CC4A1",
    Priority.MEDIUM: "#E0B25B",
    Priority.HIGH: "#E57B63",
}


class TaskItemWidget(QWidget):
    def __init__(self, task: Task, time_left: str | None = None):
        super().__init__()
        self.task = task

        self.setObjectName("TaskCard")
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)
        self.setMinimumHeight(64)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(4)

        star = "★ " if task.is_starred else ""
        title = QLabel(f"{star}{task.title}")
        title.setProperty("class", "task-title")
        title.setWordWrap(True)
        title.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        if task.completed:
            font = title.font()
            font.setStrikeOut(True)
            title.setFont(font)

        priority_label = next(
            (label for label, value in PRIORITY_OPTIONS if value == task.priority),
            task.priority.value,
        )
        priority = QLabel(priority_label)
        priority.setProperty("class", "task-priority")
        priority.setStyleSheet(
            f"background-color: {PRIORITY_COLORS.get(task.priority, '#9CA3AF')};"
            " border-radius: 6px; padding: 2px 8px; color: #111827;"
        )
        priority.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

        header = QHBoxLayout()
        header.setSpacing(8)
        header.addWidget(title, 1)
        header.addWidget(priority, 0, Qt.AlignTop)

        meta_parts = [f"Due: {task.deadline.strftime('%d.%m.%Y %H:%M:%S')}"]
        if task.reminder_offset_minutes:
            meta_parts.append(f"Reminder: {task.reminder_offset_minutes} min before")
        if task.repeat_interval != RepeatInterval.NONE:
            repeat_label = next(
                (label for label, value in REPEAT_OPTIONS if value == task.repeat_interval),
                task.repeat_interval.value,
            )
            meta_parts.append(f"Repeats: {repeat_label}")
        if task.description:
            meta_parts.append(task.description)

        meta = QLabel(" | ".join(meta_parts))
        meta.setProperty("class", "task-meta")
        meta.setWordWrap(True)

        self.status_label = QLabel()
        self.status_label.setProperty("class", "task-status")

        layout.addLayout(header)
        layout.addWidget(meta)
        layout.addWidget(self.status_label)
        self.set_time_left(time_left)

    def set_time_left(self, time_left: str | None) -> None:
        if self.task.completed and self.task.expired:
            text = "Completed late"
        elif self.task.completed:
            text = "Completed"
        elif self.task.expired:
            text = "Expired"
        else:
            text = f"Time left: {time_left}" if time_left else ""
        self.status_label.setText(text)

    def set_selected(self, selected: bool) -> None:
        self.setProperty("selected", selected)
        self.style().unpolish(self)
        self.style().polish(self)


class BannerWidget(QFrame):
    dismissed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Banner")
        self.setFrameShape(QFrame.StyledPanel)

        self.icon_label = QLabel()
        self.icon_label.setStyleSheet("font-size: 24px;")
        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-weight: 600;")
        self.description_label = QLabel()
        self.description_label.setWordWrap(True)
        self.points_label = QLabel()
        self.points_label.setStyleSheet("font-size: 16px; font-weight: 700;")

        dismiss_button = QPushButton("OK")
        dismiss_button.setProperty("variant", "ghost")
        dismiss_button.clicked.connect(self.dismissed.emit)

        text_column = QVBoxLayout()
        text_column.setSpacing(2)
        text_column.addWidget(self.title_label)
        text_column.addWidget(self.description_label)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.addWidget(self.icon_label)
        layout.addLayout(text_column, 1)
        layout.addWidget(self.points_label)
        layout.addWidget(dismiss_button)

        self.hide()

    def show_banner(self, banner: Banner | None) -> None:
        if banner is None:
            self.hide()
            return
        self.icon_label.setText(banner.icon)
        self.title_label.setText(banner.title)
        self.description_label.setText(banner.description)
        self.points_label.setText(f"{banner.points:+d}")
        color = "#7CC4A1" if banner.points >= 0 else "#E24A4A"
        self.points_label.setStyleSheet(f"font-size: 16px; font-weight: 700; color: {color};")
        self.show()
