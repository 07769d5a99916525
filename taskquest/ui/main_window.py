from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from taskquest.domain.entities import Task
from taskquest.domain.errors import NotFoundError, ValidationError
from taskquest.domain.filters import TaskFilters
from taskquest.services.task_service import TaskService

from .dialogs import AchievementsDialog, AddTaskDialog
from .widgets import BannerWidget, TaskItemWidget


class MainWindow(QWidget):
    def __init__(self, service: TaskService):
        super().__init__()
        self.setWindowTitle("TaskQuest")
        self.resize(720, 760)

        self.service = service
        self.current_task_id: int | None = None
        self._time_left: dict[int, str] = {}

        self.points_label = QLabel()
        self.points_label.setObjectName("PointsLabel")
        self.points_label.setStyleSheet("font-size: 18px; font-weight: 700;")

        self.stats_label = QLabel()
        self.stats_label.setObjectName("StatsLabel")

        achievements_button = QPushButton("Achievements")
        achievements_button.setProperty("variant", "ghost")
        achievements_button.clicked.connect(self.open_achievements)

        header = QHBoxLayout()
        header.addWidget(self.points_label)
        header.addStretch()
        header.addWidget(achievements_button)

        self.banner = BannerWidget()
        self.banner.dismissed.connect(self.service.dismiss_notification)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search")
        self.search_input.textChanged.connect(lambda _text: self.refresh_tasks())

        self.show_completed_check = QCheckBox("Show completed")
        self.show_completed_check.setChecked(True)
        self.show_completed_check.toggled.connect(lambda _checked: self.refresh_tasks())

        self.starred_only_check = QCheckBox("Starred only")
        self.starred_only_check.toggled.connect(lambda _checked: self.refresh_tasks())

        filters_row = QHBoxLayout()
        filters_row.addWidget(self.search_input, 1)
        filters_row.addWidget(self.show_completed_check)
        filters_row.addWidget(self.starred_only_check)

        self.task_list = QListWidget()
        self.task_list.setObjectName("TaskList")
        self.task_list.setSpacing(4)
        self.task_list.currentItemChanged.connect(self.on_task_selected)

        self.add_button = QPushButton("New task")
        self.add_button.clicked.connect(self.new_task)

        self.done_button = QPushButton("Complete")
        self.done_button.setProperty("variant", "secondary")
        self.done_button.clicked.connect(self.toggle_completed)

        self.star_button = QPushButton("Star")
        self.star_button.setProperty("variant", "secondary")
        self.star_button.clicked.connect(self.toggle_starred)

        self.delete_button = QPushButton("Delete")
        self.delete_button.setProperty("variant", "danger")
        self.delete_button.clicked.connect(self.delete_task)

        actions = QHBoxLayout()
        actions.addWidget(self.add_button)
        actions.addStretch()
        actions.addWidget(self.done_button)
        actions.addWidget(self.star_button)
        actions.addWidget(self.delete_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.addLayout(header)
        layout.addWidget(self.stats_label)
        layout.addWidget(self.banner)
        layout.addLayout(filters_row)
        layout.addWidget(self.task_list, 1)
        layout.addLayout(actions)

        self.service.subscribe(self.refresh_tasks)
        self.refresh_tasks()

        QShortcut(QKeySequence("Ctrl+N"), self, self.new_task)

    def refresh_tasks(self) -> None:
        search = self.search_input.text().strip()
        filters = TaskFilters(
            show_completed=self.show_completed_check.isChecked(),
            starred_only=self.starred_only_check.isChecked(),
            search=search or None,
        )
        tasks = self.service.list_tasks(filters)

        selected_id = self.current_task_id
        self.task_list.blockSignals(True)
        self.task_list.clear()
        for task in tasks:
            item = QListWidgetItem()
            item.setData(Qt.UserRole, task.id)
            widget = TaskItemWidget(task, self._time_left.get(task.id))
            self.task_list.addItem(item)
            self.task_list.setItemWidget(item, widget)
            item.setSizeHint(widget.sizeHint())
            if task.id == selected_id:
                self.task_list.setCurrentItem(item)
                widget.set_selected(True)
        self.task_list.blockSignals(False)

        if selected_id not in {task.id for task in tasks}:
            self.current_task_id = None
        self._sync_buttons()

        self.points_label.setText(f"⭐ {self.service.points} points")
        stats = self.service.stats()
        self.stats_label.setText(
            f"Total: {stats.total} • Completed: {stats.completed} • "
            f"Rate: {stats.completion_rate:.0f}% • Starred: {stats.starred} • "
            f"Expired: {stats.expired}"
        )
        self.banner.show_banner(self.service.last_notification)

    def update_time_left(self, time_left: dict[int, str]) -> None:
        self._time_left = time_left
        for row in range(self.task_list.count()):
            item = self.task_list.item(row)
            widget = self.task_list.itemWidget(item)
            if isinstance(widget, TaskItemWidget):
                widget.set_time_left(time_left.get(widget.task.id))

    def on_task_selected(
        self,
        current: QListWidgetItem | None,
        previous: QListWidgetItem | None = None,
    ) -> None:
        if previous:
            widget = self.task_list.itemWidget(previous)
            if isinstance(widget, TaskItemWidget):
                widget.set_selected(False)
        if not current:
            self.current_task_id = None
        else:
            widget = self.task_list.itemWidget(current)
            if isinstance(widget, TaskItemWidget):
                widget.set_selected(True)
            self.current_task_id = current.data(Qt.UserRole)
        self._sync_buttons()

    def new_task(self) -> None:
        dialog = AddTaskDialog(self)
        if dialog.exec() != AddTaskDialog.Accepted:
            return
        data = dialog.values()
        try:
            task = self.service.add_task(data.pop("title"), data.pop("deadline"), **data)
        except ValidationError as exc:
            QMessageBox.warning(self, "Cannot add task", str(exc))
            return
        self.current_task_id = task.id
        self.refresh_tasks()

    def toggle_completed(self) -> None:
        if self.current_task_id is None:
            return
        try:
            self.service.toggle_completed(self.current_task_id)
        except NotFoundError:
            self.current_task_id = None
            self.refresh_tasks()

    def toggle_starred(self) -> None:
        if self.current_task_id is None:
            return
        try:
            self.service.toggle_starred(self.current_task_id)
        except NotFoundError:
            self.current_task_id = None
            self.refresh_tasks()

    def delete_task(self) -> None:
        if self.current_task_id is None:
            return
        confirm = QMessageBox.question(
            self,
            "Confirm",
            "Delete this task?",
        )
        if confirm != QMessageBox.Yes:
            return
        self.service.delete_task(self.current_task_id)
        self.current_task_id = None
        self.refresh_tasks()

    def open_achievements(self) -> None:
        dialog = AchievementsDialog(self.service.achievements, self.service.points, self)
        dialog.exec()

    def _sync_done_button(self, task: Task | None) -> None:
        if task is None:
            self.done_button.setText("Complete")
            return
        self.done_button.setText("Mark undone" if task.completed else "Complete")

    def _sync_buttons(self) -> None:
        task = self.service.get_task(self.current_task_id) if self.current_task_id is not None else None
        enabled = task is not None
        self.done_button.setEnabled(enabled)
        self.star_button.setEnabled(enabled)
        self.delete_button.setEnabled(enabled)
        self.star_button.setText("Unstar" if task and task.is_starred else "Star")
        self._sync_done_button(task)
