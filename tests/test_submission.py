from __future__ import annotations

import httpx
import pytest

from taskboard.core.forms import registration_form, task_edit_form
from taskboard.core.models import Task
from taskboard.core.submission import (
    Failure,
    SubmissionCoordinator,
    SubmissionError,
    SubmitState,
    Success,
    UNKNOWN_ERROR_MESSAGE,
    describe_error,
)


class RecordingCollaborator:
    def __init__(self):
        self.successes = []
        self.cancels = 0

    def on_submit_success(self, payload):
        self.successes.append(payload)

    def on_cancel(self):
        self.cancels += 1


def _status_error(status_code, **kwargs):
    request = httpx.Request("POST", "http://test/users")
    response = httpx.Response(status_code, request=request, **kwargs)
    return httpx.HTTPStatusError("error", request=request, response=response)


def _edited_form():
    form = task_edit_form(Task(id=7, title="Buy milk", description="", status="pending"))
    form.set_value("title", "Buy bread")
    return form


@pytest.mark.asyncio
async def test_invalid_submit_is_a_noop_and_reveals_errors():
    calls = []

    async def operation(payload):
        calls.append(payload)

    form = registration_form()
    collab = RecordingCollaborator()
    c = SubmissionCoordinator(form, operation, collab)

    result = await c.submit()

    assert result is None
    assert calls == []
    assert c.state is SubmitState.IDLE
    assert form.visible_error("email") == "Email is required"
    assert collab.successes == []


@pytest.mark.asyncio
async def test_success_resets_form_and_notifies():
    seen_loading = []
    form = _edited_form()
    collab = RecordingCollaborator()

    async def operation(payload):
        seen_loading.append(c.loading)

    c = SubmissionCoordinator(form, operation, collab)
    result = await c.submit()

    assert isinstance(result, Success)
    assert result.payload["title"] == "Buy bread"
    assert seen_loading == [True]
    assert c.loading is False
    assert c.state is SubmitState.SUCCEEDED
    assert collab.successes == [result.payload]
    assert form.values()["title"] == "Buy milk"
    assert form.submit_attempted is False


@pytest.mark.asyncio
async def test_sync_operation_is_supported():
    form = _edited_form()
    collab = RecordingCollaborator()
    c = SubmissionCoordinator(form, lambda payload: None, collab)
    assert isinstance(await c.submit(), Success)


@pytest.mark.asyncio
async def test_failure_keeps_values_and_touched_flags():
    form = _edited_form()
    collab = RecordingCollaborator()

    async def operation(payload):
        raise _status_error(409, json={"message": "Conflict on save"})

    c = SubmissionCoordinator(form, operation, collab)
    result = await c.submit()

    assert result == Failure("Conflict on save")
    assert c.state is SubmitState.FAILED
    assert c.error == "Conflict on save"
    assert form.values()["title"] == "Buy bread"
    assert form.field("title").touched is True
    assert collab.successes == []


@pytest.mark.asyncio
async def test_error_is_replaced_then_cleared_on_next_attempt():
    form = _edited_form()
    outcomes = [SubmissionError("first"), RuntimeError("boom"), None]

    async def operation(payload):
        exc = outcomes.pop(0)
        if exc is not None:
            raise exc

    c = SubmissionCoordinator(form, operation, RecordingCollaborator())

    await c.submit()
    assert c.error == "first"
    await c.submit()
    assert c.error == UNKNOWN_ERROR_MESSAGE
    await c.submit()
    assert c.error == ""
    assert c.state is SubmitState.SUCCEEDED


@pytest.mark.asyncio
async def test_submit_while_loading_is_ignored():
    form = _edited_form()
    calls = []

    async def operation(payload):
        calls.append(payload)
        assert await c.submit() is None

    c = SubmissionCoordinator(form, operation, RecordingCollaborator())
    await c.submit()
    assert len(calls) == 1


def test_cancel_resets_and_notifies():
    form = _edited_form()
    collab = RecordingCollaborator()
    c = SubmissionCoordinator(form, lambda payload: None, collab)
    c.error = "stale"

    c.cancel()

    assert collab.cancels == 1
    assert c.error == ""
    assert form.is_dirty is False


def test_can_submit_requires_valid_and_dirty():
    form = task_edit_form(Task(id=1, title="Buy milk"))
    c = SubmissionCoordinator(form, lambda payload: None, RecordingCollaborator())
    assert c.can_submit is False
    form.set_value("title", "Buy bread")
    assert c.can_submit is True
    form.set_value("title", "  ")
    assert c.can_submit is False


def test_describe_error_fallbacks():
    assert describe_error(_status_error(400, json={"message": "Email already exists"})) == "Email already exists"
    assert describe_error(_status_error(500, json={"error": "x"}), fallback="Registration failed.") == "Registration failed."
    assert describe_error(_status_error(500, text="not json"), fallback="Registration failed.") == "Registration failed."
    assert describe_error(_status_error(500, json=["message"]), fallback="F") == "F"
    assert describe_error(httpx.ConnectError("down"), fallback="F") == "F"
    assert describe_error(SubmissionError("Nope")) == "Nope"
    assert describe_error(ValueError("x")) == UNKNOWN_ERROR_MESSAGE


def test_server_message_is_used_verbatim_unless_empty():
    assert describe_error(_status_error(409, json={"message": "   "}), fallback="F") == "   "
    assert describe_error(_status_error(409, json={"message": ""}), fallback="F") == "F"
    assert describe_error(_status_error(409, json={"message": 42}), fallback="F") == "F"
