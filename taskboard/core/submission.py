from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union

import httpx
import structlog

from taskboard.core.form_state import FormState


logger = structlog.get_logger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
GENERIC_ERROR_MESSAGE = "Submission failed."


class SubmitState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Success:
    payload: Dict[str, Any]


@dataclass(frozen=True)
class Failure:
    message: str


SubmitResult = Union[Success, Failure]


class SubmissionError(Exception):
    """Raised by an operation to reject a submission with a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FormCollaborator(Protocol):
    def on_submit_success(self, payload: Dict[str, Any]) -> None: ...

    def on_cancel(self) -> None: ...


PayloadBuilder = Callable[[Dict[str, str]], Dict[str, Any]]
Operation = Callable[[Dict[str, Any]], Union[Awaitable[Any], Any]]
Listener = Callable[["SubmissionCoordinator"], None]


def server_message(exc: BaseException) -> Optional[str]:
    """Read {"message": "..."} from an HTTP error response, if there is one."""
    response = getattr(exc, "response", None) if isinstance(exc, httpx.HTTPStatusError) else None
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def describe_error(exc: BaseException, *, fallback: str = GENERIC_ERROR_MESSAGE) -> str:
    """
    One human-readable message per failure:
      - SubmissionError -> its own message
      - httpx errors -> server-supplied message, else fallback
      - anything else -> unknown error
    """
    if isinstance(exc, SubmissionError):
        return exc.message
    if isinstance(exc, httpx.HTTPError):
        return server_message(exc) or fallback
    return UNKNOWN_ERROR_MESSAGE


class SubmissionCoordinator:
    """
    Submit state machine for one form instance.

    IDLE -> SUBMITTING -> SUCCEEDED | FAILED, and FAILED -> SUBMITTING again
    on an explicit resubmit. Failures never escape submit(); they end up in
    `error` and the form keeps what the user typed.
    """

    def __init__(
        self,
        form: FormState,
        operation: Operation,
        collaborator: FormCollaborator,
        *,
        build_payload: Optional[PayloadBuilder] = None,
        error_fallback: str = GENERIC_ERROR_MESSAGE,
    ) -> None:
        self.form = form
        self._operation = operation
        self._collaborator = collaborator
        self._build_payload = build_payload or (lambda values: dict(values))
        self._error_fallback = error_fallback

        self.state: SubmitState = SubmitState.IDLE
        self.error: str = ""
        self._listeners: List[Listener] = []

    @property
    def loading(self) -> bool:
        return self.state is SubmitState.SUBMITTING

    @property
    def can_submit(self) -> bool:
        return not self.loading and self.form.is_valid and self.form.is_dirty

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _set_state(self, state: SubmitState) -> None:
        self.state = state
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    async def submit(self) -> Optional[SubmitResult]:
        if self.loading:
            return None

        self.error = ""
        self.form.touch_all()
        if not self.form.is_valid:
            self._notify()
            return None

        payload = self._build_payload(self.form.values())
        log = logger.bind(form=self.form.name)
        log.info("submission_started")
        self._set_state(SubmitState.SUBMITTING)

        try:
            outcome = self._operation(payload)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            self.error = describe_error(exc, fallback=self._error_fallback)
            log.warning("submission_failed", error=self.error, exc_type=type(exc).__name__)
            self._set_state(SubmitState.FAILED)
            return Failure(self.error)

        self.form.reset()
        log.info("submission_succeeded")
        self._set_state(SubmitState.SUCCEEDED)
        self._collaborator.on_submit_success(payload)
        return Success(payload)

    def cancel(self) -> None:
        if self.loading:
            return
        self.form.reset()
        self.error = ""
        self._set_state(SubmitState.IDLE)
        self._collaborator.on_cancel()
