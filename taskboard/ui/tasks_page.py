from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QMessageBox,
)

import httpx

from taskboard.core.models import Task
from taskboard.data import tasks_api
from taskboard.ui.dialogs.edit_task_dialog import EditTaskDialog


class TasksPage(QWidget):
    """
    Task list with an Edit action.

    The edit dialog delegates saving to _on_edit(), which forwards the
    payload to PUT /tasks/{id} and refreshes the row in place.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._tasks: List[Task] = []
        self.load_task: Optional[asyncio.Future] = None
        self._dialog: Optional[EditTaskDialog] = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)

        title = QLabel("Tasks")
        title_font = title.font()
        title_font.setBold(True)
        title_font.setPointSize(title_font.pointSize() + 2)
        title.setFont(title_font)
        layout.addWidget(title)

        self.list = QListWidget()
        self.list.itemDoubleClicked.connect(lambda _item: self._on_edit_clicked())
        layout.addWidget(self.list, 1)

        btn_row = QHBoxLayout()
        self.btn_reload = QPushButton("Reload")
        self.btn_edit = QPushButton("Edit")
        self.btn_reload.clicked.connect(self.reload_tasks)
        self.btn_edit.clicked.connect(self._on_edit_clicked)
        btn_row.addWidget(self.btn_reload)
        btn_row.addStretch(1)
        btn_row.addWidget(self.btn_edit)
        layout.addLayout(btn_row)

    def reload_tasks(self) -> None:
        if self.load_task is not None and not self.load_task.done():
            return
        self.load_task = asyncio.ensure_future(self._load_tasks())

    async def _load_tasks(self) -> None:
        self.btn_reload.setEnabled(False)
        try:
            tasks = await tasks_api.list_tasks()
        except (httpx.HTTPError, ValueError) as e:
            QMessageBox.warning(self, "Warning", f"Failed to load tasks.\n\nDetails:\n{e!r}")
            return
        finally:
            self.btn_reload.setEnabled(True)
        self.set_tasks(tasks)

    def set_tasks(self, tasks: List[Task]) -> None:
        self._tasks = list(tasks)
        self.list.clear()
        for task in self._tasks:
            item = QListWidgetItem(f"{task.title}  [{task.status}]")
            item.setData(Qt.UserRole, task.id)
            if task.is_completed:
                item.setForeground(Qt.darkGreen)
            self.list.addItem(item)

    def _selected_task(self) -> Optional[Task]:
        row = self.list.currentRow()
        if row < 0 or row >= len(self._tasks):
            return None
        return self._tasks[row]

    def _on_edit_clicked(self) -> None:
        task = self._selected_task()
        if task is None:
            QMessageBox.information(self, "Information", "Please select a task to edit.")
            return
        self._dialog = EditTaskDialog(task, self._on_edit, self)
        self._dialog.open()

    async def _on_edit(self, task_id: Any, payload: Dict[str, Any]) -> Task:
        updated = await tasks_api.update_task(task_id, payload)
        self._tasks = [updated if t.id == task_id else t for t in self._tasks]
        self.set_tasks(self._tasks)
        return updated
