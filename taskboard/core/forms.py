from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from taskboard.core import rules
from taskboard.core.form_state import FormState
from taskboard.core.models import DEFAULT_STATUS, Task
from taskboard.core.submission import SubmissionCoordinator, SubmissionError


REGISTRATION_FAILED = "Registration failed."
REGISTRATION_REJECTED = "Registration failed. Please try again."

EditCallback = Callable[[Any, Dict[str, Any]], Union[Awaitable[Any], Any]]
CreateUser = Callable[[str, str], Awaitable[Any]]


class _CallbackCollaborator:
    """Adapts plain success/cancel callables to FormCollaborator."""

    def __init__(
        self,
        on_success: Callable[[Dict[str, Any]], None],
        on_cancel: Callable[[], None],
    ) -> None:
        self._on_success = on_success
        self._on_cancel = on_cancel

    def on_submit_success(self, payload: Dict[str, Any]) -> None:
        self._on_success(payload)

    def on_cancel(self) -> None:
        self._on_cancel()


def _noop(*_args: Any) -> None:
    return None


# ---------------------------------------------------------------------
# Task edit
# ---------------------------------------------------------------------
def task_initial_values(task: Optional[Task]) -> Dict[str, str]:
    if task is None:
        return {"title": "", "description": "", "status": DEFAULT_STATUS}
    return {"title": task.title, "description": task.description, "status": task.status}


def task_edit_form(task: Optional[Task]) -> FormState:
    return FormState(rules.TASK_SCHEMA, task_initial_values(task), name="edit_task")


def task_edit_coordinator(
    task: Optional[Task],
    on_edit: EditCallback,
    on_close: Callable[[], None] = _noop,
) -> SubmissionCoordinator:
    """
    Edit-task flow:
      - payload = edited fields + the original task id
      - the update itself is delegated to on_edit(task_id, payload)
      - success and cancel both close the dialog via on_close()
    """
    task_id = task.id if task is not None else None

    def build_payload(values: Dict[str, str]) -> Dict[str, Any]:
        return {
            "id": task_id,
            "title": values.get("title", ""),
            "description": values.get("description", ""),
            "status": values.get("status", DEFAULT_STATUS),
        }

    async def operation(payload: Dict[str, Any]) -> Any:
        outcome = on_edit(task_id, payload)
        if inspect.isawaitable(outcome):
            return await outcome
        return outcome

    return SubmissionCoordinator(
        task_edit_form(task),
        operation,
        _CallbackCollaborator(lambda _payload: on_close(), on_close),
        build_payload=build_payload,
    )


# ---------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------
def registration_form() -> FormState:
    return FormState(rules.CREDENTIALS_SCHEMA, {"email": "", "password": ""}, name="register")


def build_registration_payload(values: Dict[str, str]) -> Dict[str, Any]:
    return {
        "email": values.get("email", "").strip(),
        "password": values.get("password", "").strip(),
    }


def registration_coordinator(
    create_user: CreateUser,
    on_registered: Callable[[], None] = _noop,
    on_cancel: Callable[[], None] = _noop,
) -> SubmissionCoordinator:
    """
    Registration flow:
      - email and password are trimmed before they are sent
      - only HTTP 201 counts as success; on_registered() then navigates away
    """

    async def operation(payload: Dict[str, Any]) -> Any:
        response = await create_user(payload["email"], payload["password"])
        if getattr(response, "status_code", None) != 201:
            raise SubmissionError(REGISTRATION_REJECTED)
        return response

    return SubmissionCoordinator(
        registration_form(),
        operation,
        _CallbackCollaborator(lambda _payload: on_registered(), on_cancel),
        build_payload=build_registration_payload,
        error_fallback=REGISTRATION_FAILED,
    )
