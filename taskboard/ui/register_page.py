from __future__ import annotations

import asyncio
from typing import Optional

from PySide6.QtCore import QEvent, QObject, QSignalBlocker, Qt, Signal
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
)

from taskboard.core.forms import CreateUser, registration_coordinator
from taskboard.data.users_api import create_user as api_create_user


_ERROR_STYLE = "color: #c62828; padding-left: 7px;"
_BANNER_STYLE = "background-color: #fdecea; color: #c62828; padding: 12px; border-radius: 4px;"


class RegisterPage(QWidget):
    """
    Registration page:
      - Email / Password inputs with per-field errors (shown after blur or submit)
      - Single top-level error banner for server/transport failures
      - Submit is disabled while a request is in flight
    """

    registered = Signal()
    login_requested = Signal()

    def __init__(self, create_user: CreateUser = api_create_user, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.coordinator = registration_coordinator(create_user, on_registered=self.registered.emit)
        self.submit_task: Optional[asyncio.Future] = None
        self.form = self.coordinator.form

        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(8)

        title = QLabel("Register")
        title_font = title.font()
        title_font.setBold(True)
        title_font.setPointSize(title_font.pointSize() + 6)
        title.setFont(title_font)
        title.setAlignment(Qt.AlignCenter)

        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet(_BANNER_STYLE)
        self.lbl_error.setWordWrap(True)
        self.lbl_error.setAlignment(Qt.AlignCenter)
        self.lbl_error.hide()

        self.edt_email = QLineEdit()
        self.edt_email.setPlaceholderText("you@example.com")
        self.lbl_email_error = QLabel()
        self.lbl_email_error.setStyleSheet(_ERROR_STYLE)

        self.edt_password = QLineEdit()
        self.edt_password.setEchoMode(QLineEdit.Password)
        self.edt_password.setPlaceholderText("••••••••")
        self.lbl_password_error = QLabel()
        self.lbl_password_error.setStyleSheet(_ERROR_STYLE)

        self.btn_submit = QPushButton("Register")
        self.btn_login = QPushButton("Already have an account? Login")
        self.btn_login.setFlat(True)

        layout.addWidget(self.lbl_error)
        layout.addWidget(title)
        layout.addWidget(QLabel("Email"))
        layout.addWidget(self.edt_email)
        layout.addWidget(self.lbl_email_error)
        layout.addWidget(QLabel("Password"))
        layout.addWidget(self.edt_password)
        layout.addWidget(self.lbl_password_error)
        layout.addWidget(self.btn_submit)
        layout.addWidget(self.btn_login)
        layout.addStretch(1)

        # Wire events
        self.edt_email.textChanged.connect(lambda text: self.form.set_value("email", text))
        self.edt_password.textChanged.connect(lambda text: self.form.set_value("password", text))
        self.edt_email.installEventFilter(self)
        self.edt_password.installEventFilter(self)
        self.btn_submit.clicked.connect(self._on_submit_clicked)
        self.btn_login.clicked.connect(self.login_requested.emit)

        self.form.subscribe(lambda _form: self._render())
        self.coordinator.subscribe(lambda _c: self._render())
        self._render()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.FocusOut:
            if obj is self.edt_email:
                self.form.set_touched("email")
            elif obj is self.edt_password:
                self.form.set_touched("password")
        return super().eventFilter(obj, event)

    def _on_submit_clicked(self) -> None:
        # At most one submission in flight per form.
        if self.submit_task is not None and not self.submit_task.done():
            return
        self.submit_task = asyncio.ensure_future(self.coordinator.submit())

    def _render(self) -> None:
        self._sync_text(self.edt_email, self.form.value("email"))
        self._sync_text(self.edt_password, self.form.value("password"))

        self._show_field_error(self.lbl_email_error, self.form.visible_error("email"))
        self._show_field_error(self.lbl_password_error, self.form.visible_error("password"))

        self.lbl_error.setText(self.coordinator.error)
        self.lbl_error.setVisible(bool(self.coordinator.error))

        loading = self.coordinator.loading
        self.btn_submit.setEnabled(not loading)
        self.btn_submit.setText("Registering..." if loading else "Register")

    @staticmethod
    def _sync_text(edit: QLineEdit, value: str) -> None:
        # Form reset pushes values back into the widgets.
        if edit.text() != value:
            blocker = QSignalBlocker(edit)
            try:
                edit.setText(value)
            finally:
                del blocker

    @staticmethod
    def _show_field_error(label: QLabel, message: Optional[str]) -> None:
        label.setText(message or "")
        label.setVisible(bool(message))
