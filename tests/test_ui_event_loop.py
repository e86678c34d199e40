from __future__ import annotations

import asyncio
import os

import pytest

# Headless Qt for CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtWidgets = pytest.importorskip("PySide6.QtWidgets")

from PySide6 import QtAsyncio
from PySide6.QtCore import QTimer

from taskboard.core.models import Task
from taskboard.ui.dialogs.edit_task_dialog import EditTaskDialog
from taskboard.ui.register_page import RegisterPage


@pytest.fixture(scope="module")
def qapp():
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])


class _Created:
    status_code = 201


def _run(coro):
    # QtAsyncio only leaves QApplication.exec() when quit_qapp is True; the
    # module-scoped QApplication stays usable for the next run.
    return QtAsyncio.run(coro, keep_running=False, quit_qapp=True)


def test_register_page_keeps_processing_qt_events_while_loading(qapp):
    calls = []

    async def slow_create_user(email, password):
        calls.append(email)
        await asyncio.sleep(0.3)
        return _Created()

    page = RegisterPage(create_user=slow_create_user)
    registered = []
    page.registered.connect(lambda: registered.append(True))

    async def scenario():
        page.edt_email.setText("user@site.com")
        page.edt_password.setText("Abcdef1!")
        seen = []
        QTimer.singleShot(
            50,
            lambda: seen.append((page.coordinator.loading, page.btn_submit.isEnabled(), page.btn_submit.text())),
        )
        page.btn_submit.click()
        page.btn_submit.click()
        await page.submit_task
        return seen

    seen = _run(scenario())

    assert seen == [(True, False, "Registering...")]
    assert calls == ["user@site.com"]
    assert registered == [True]
    assert page.btn_submit.isEnabled() is True
    assert page.btn_submit.text() == "Register"
    assert page.edt_email.text() == ""


def test_edit_dialog_disables_buttons_while_saving(qapp):
    edits = []

    async def slow_edit(task_id, payload):
        await asyncio.sleep(0.3)
        edits.append((task_id, payload["title"]))

    dlg = EditTaskDialog(Task(id=1, title="Buy milk", description="", status="pending"), slow_edit)

    async def scenario():
        dlg.edt_title.setText("Buy bread")
        assert dlg.btn_save.isEnabled() is True
        seen = []
        QTimer.singleShot(
            50,
            lambda: seen.append((dlg.coordinator.loading, dlg.btn_save.isEnabled(), dlg.btn_cancel.isEnabled())),
        )
        dlg.btn_save.click()
        await dlg.submit_task
        return seen

    seen = _run(scenario())

    assert seen == [(True, False, False)]
    assert edits == [(1, "Buy bread")]
    assert dlg.result() == QtWidgets.QDialog.Accepted
