# taskboard/ui/main_windows.py
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QMenuBar,
)

from taskboard.ui.register_page import RegisterPage
from taskboard.ui.tasks_page import TasksPage


class LoginPage(QWidget):
    """Landing page after registration. Signing in is handled elsewhere."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)

        label = QLabel("Your account is ready. Please log in to continue.")
        label.setWordWrap(True)
        label.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        layout.addWidget(label)

        self.btn_tasks = QPushButton("Open Tasks")
        layout.addWidget(self.btn_tasks)
        layout.addStretch(1)


class MainWindow(QMainWindow):
    """
    Main window:
      - Router stack: Register / Login / Tasks
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Taskboard")

        self._stack = QStackedWidget()
        self._stack.setContentsMargins(0, 0, 0, 0)

        self.register_page = RegisterPage()
        self.login_page = LoginPage()
        self.tasks_page = TasksPage()

        for page in (self.register_page, self.login_page, self.tasks_page):
            self._stack.addWidget(page)

        self.register_page.registered.connect(self.show_login)
        self.register_page.login_requested.connect(self.show_login)
        self.login_page.btn_tasks.clicked.connect(self.show_tasks)

        self.setCentralWidget(self._stack)
        self._build_menu()
        self.show_register()

    # ----------------------------------------------------------------------------------
    # Menu
    # ----------------------------------------------------------------------------------
    def _build_menu(self) -> None:
        menubar = QMenuBar(self)
        self.setMenuBar(menubar)

        menu_file = menubar.addMenu("File")

        self.act_register = QAction("Register", self)
        self.act_register.triggered.connect(self.show_register)
        menu_file.addAction(self.act_register)

        self.act_tasks = QAction("Tasks", self)
        self.act_tasks.triggered.connect(self.show_tasks)
        menu_file.addAction(self.act_tasks)

        menu_file.addSeparator()

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)
        menu_file.addAction(self.act_exit)

    # ----------------------------------------------------------------------------------
    # Router
    # ----------------------------------------------------------------------------------
    def show_register(self) -> None:
        self._stack.setCurrentWidget(self.register_page)

    def show_login(self) -> None:
        self._stack.setCurrentWidget(self.login_page)

    def show_tasks(self) -> None:
        self._stack.setCurrentWidget(self.tasks_page)
        self.tasks_page.reload_tasks()
