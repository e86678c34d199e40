# taskboard/ui/dialogs/edit_task_dialog.py
from __future__ import annotations

import asyncio
from typing import Optional

from PySide6.QtCore import QEvent, QObject, QSignalBlocker
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QTextEdit,
    QPushButton,
    QWidget,
)

from taskboard.core.forms import EditCallback, task_edit_coordinator
from taskboard.core.models import Task
from taskboard.core.submission import SubmitState


_ERROR_STYLE = "color: #c62828;"
_STATUS_DONE_STYLE = "background-color: #e8f5e9; color: #2e7d32; padding: 4px 16px; border-radius: 10px;"
_STATUS_OPEN_STYLE = "background-color: #fff8e1; color: #f9a825; padding: 4px 16px; border-radius: 10px;"


class EditTaskDialog(QDialog):
    """
    Modal task editor.

    Rules:
    - Title is required (non-empty after trimming).
    - Description is optional.
    - Status is shown read-only.
    - Save is enabled only when the form is valid and differs from the task.
    - Cancel discards edits and closes.
    """

    def __init__(self, task: Optional[Task], on_edit: EditCallback, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowTitle("Edit Task")
        self.setModal(True)
        self.setMinimumWidth(460)

        self.coordinator = task_edit_coordinator(task, on_edit, on_close=self._finish)
        self.form = self.coordinator.form
        self.submit_task: Optional[asyncio.Future] = None

        layout = QVBoxLayout(self)

        layout.addWidget(QLabel("Title"))
        self.edt_title = QLineEdit()
        self.edt_title.setPlaceholderText("Task title")
        layout.addWidget(self.edt_title)
        self.lbl_title_error = QLabel()
        self.lbl_title_error.setStyleSheet(_ERROR_STYLE)
        layout.addWidget(self.lbl_title_error)

        layout.addWidget(QLabel("Description"))
        self.edt_description = QTextEdit()
        self.edt_description.setPlaceholderText("Task description")
        self.edt_description.setFixedHeight(100)
        layout.addWidget(self.edt_description)
        self.lbl_description_error = QLabel()
        self.lbl_description_error.setStyleSheet(_ERROR_STYLE)
        layout.addWidget(self.lbl_description_error)

        status_row = QHBoxLayout()
        status_row.addWidget(QLabel("Status:"))
        self.lbl_status = QLabel()
        status_row.addWidget(self.lbl_status)
        status_row.addStretch(1)
        layout.addLayout(status_row)
        self.lbl_status_error = QLabel()
        self.lbl_status_error.setStyleSheet(_ERROR_STYLE)
        layout.addWidget(self.lbl_status_error)

        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet(_ERROR_STYLE)
        self.lbl_error.setWordWrap(True)
        layout.addWidget(self.lbl_error)

        btn_row = QHBoxLayout()
        btn_row.addStretch(1)

        self.btn_cancel = QPushButton("Cancel")
        self.btn_save = QPushButton("Save")

        self.btn_cancel.clicked.connect(self.coordinator.cancel)
        self.btn_save.clicked.connect(self._on_save_clicked)

        btn_row.addWidget(self.btn_cancel)
        btn_row.addWidget(self.btn_save)
        layout.addLayout(btn_row)

        # Wire events
        self.edt_title.textChanged.connect(lambda text: self.form.set_value("title", text))
        self.edt_description.textChanged.connect(
            lambda: self.form.set_value("description", self.edt_description.toPlainText())
        )
        self.edt_title.installEventFilter(self)
        self.edt_description.installEventFilter(self)

        self.form.subscribe(lambda _form: self._render())
        self.coordinator.subscribe(lambda _c: self._render())
        self._render()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.FocusOut:
            if obj is self.edt_title:
                self.form.set_touched("title")
            elif obj is self.edt_description:
                self.form.set_touched("description")
        return super().eventFilter(obj, event)

    def reject(self) -> None:
        # Escape / window close behave like Cancel.
        if self.coordinator.loading:
            return
        self.form.reset()
        super().reject()

    def _finish(self) -> None:
        if self.coordinator.state is SubmitState.SUCCEEDED:
            self.accept()
        else:
            self.reject()

    def _on_save_clicked(self) -> None:
        if self.submit_task is not None and not self.submit_task.done():
            return
        self.submit_task = asyncio.ensure_future(self.coordinator.submit())

    def _render(self) -> None:
        title = self.form.value("title")
        if self.edt_title.text() != title:
            blocker = QSignalBlocker(self.edt_title)
            try:
                self.edt_title.setText(title)
            finally:
                del blocker

        description = self.form.value("description")
        if self.edt_description.toPlainText() != description:
            blocker = QSignalBlocker(self.edt_description)
            try:
                self.edt_description.setPlainText(description)
            finally:
                del blocker

        status = self.form.value("status")
        self.lbl_status.setText(status)
        self.lbl_status.setStyleSheet(_STATUS_DONE_STYLE if status == "completed" else _STATUS_OPEN_STYLE)

        for name, label in (
            ("title", self.lbl_title_error),
            ("description", self.lbl_description_error),
            ("status", self.lbl_status_error),
        ):
            message = self.form.visible_error(name)
            label.setText(message or "")
            label.setVisible(bool(message))

        self.lbl_error.setText(self.coordinator.error)
        self.lbl_error.setVisible(bool(self.coordinator.error))

        self.btn_save.setEnabled(self.coordinator.can_submit)
        self.btn_cancel.setEnabled(not self.coordinator.loading)
