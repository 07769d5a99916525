from __future__ import annotations

from datetime import timedelta

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QSpinBox,
    QTextEdit,
    QVBoxLayout,
)

from taskquest.domain.entities import Achievement
from taskquest.domain.enums import Priority
from taskquest.domain.presets import PRIORITY_OPTIONS, QUICK_DEADLINES, REMINDER_OPTIONS, REPEAT_OPTIONS


class AddTaskDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("New task")
        self.resize(420, 420)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("What needs to be done?")

        self.description_input = QTextEdit()
        self.description_input.setPlaceholderText("Details (optional)")
        self.description_input.setFixedHeight(72)

        self.hours_input = QSpinBox()
        self.hours_input.setRange(0, 23)
        self.hours_input.setSuffix(" h")
        self.minutes_input = QSpinBox()
        self.minutes_input.setRange(0, 59)
        self.minutes_input.setSuffix(" m")
        self.seconds_input = QSpinBox()
        self.seconds_input.setRange(0, 59)
        self.seconds_input.setSuffix(" s")
        self.days_input = QSpinBox()
        self.days_input.setRange(0, 365)
        self.days_input.setSuffix(" d")

        duration_row = QHBoxLayout()
        for spin in (self.days_input, self.hours_input, self.minutes_input, self.seconds_input):
            duration_row.addWidget(spin)

        quick_grid = QGridLayout()
        for index, (label, delta) in enumerate(QUICK_DEADLINES):
            button = QPushButton(label)
            button.setProperty("variant", "secondary")
            button.clicked.connect(lambda _checked=False, d=delta: self.set_duration(d))
            quick_grid.addWidget(button, index // 3, index % 3)

        self.priority_combo = QComboBox()
        for label, value in PRIORITY_OPTIONS:
            self.priority_combo.addItem(label, value)
        self.priority_combo.setCurrentIndex(self.priority_combo.findData(Priority.MEDIUM))

        self.reminder_combo = QComboBox()
        for label, minutes in REMINDER_OPTIONS:
            self.reminder_combo.addItem(label, minutes)

        self.repeat_combo = QComboBox()
        for label, value in REPEAT_OPTIONS:
            self.repeat_combo.addItem(label, value)

        form = QFormLayout()
        form.addRow("Title", self.title_input)
        form.addRow("Description", self.description_input)
        form.addRow("Time until deadline", duration_row)
        form.addRow("", quick_grid)
        form.addRow("Priority", self.priority_combo)
        form.addRow("Reminder", self.reminder_combo)
        form.addRow("Repeat", self.repeat_combo)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        layout = QVBoxLayout(self)
        layout.addLayout(form)
        layout.addWidget(buttons)

    def set_duration(self, delta: timedelta) -> None:
        total = int(delta.total_seconds())
        days, rest = divmod(total, 86400)
        hours, rest = divmod(rest, 3600)
        minutes, seconds = divmod(rest, 60)
        self.days_input.setValue(days)
        self.hours_input.setValue(hours)
        self.minutes_input.setValue(minutes)
        self.seconds_input.setValue(seconds)

    def duration(self) -> timedelta:
        return timedelta(
            days=self.days_input.value(),
            hours=self.hours_input.value(),
            minutes=self.minutes_input.value(),
            seconds=self.seconds_input.value(),
        )

    def values(self) -> dict:
        return {
            "title": self.title_input.text(),
            "description": self.description_input.toPlainText(),
            "deadline": self.duration(),
            "priority": self.priority_combo.currentData(),
            "reminder_offset_minutes": self.reminder_combo.currentData(),
            "repeat_interval": self.repeat_combo.currentData(),
        }


class AchievementsDialog(QDialog):
    def __init__(self, achievements: tuple[Achievement, ...], points: int, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Achievements")
        self.resize(380, 320)

        title = QLabel(f"Points: {points}")
        title.setStyleSheet("font-size: 14px; font-weight: 600;")

        listing = QListWidget()
        for achievement in achievements:
            state = "Unlocked" if achievement.unlocked else "Locked"
            item = QListWidgetItem(
                f"{achievement.icon}  {achievement.title} (+{achievement.point_value})\n"
                f"{achievement.description} · {state}"
            )
            item.setFlags(item.flags() & ~Qt.ItemIsSelectable)
            listing.addItem(item)

        close_button = QPushButton("Close")
        close_button.clicked.connect(self.accept)

        buttons = QHBoxLayout()
        buttons.addStretch()
        buttons.addWidget(close_button)

        layout = QVBoxLayout(self)
        layout.addWidget(title)
        layout.addWidget(listing)
        layout.addLayout(buttons)
