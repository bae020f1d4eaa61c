"""Domain attachment and certificate provisioning models.

A custom domain moves through one monitored workflow:

- The attach request is accepted by the remote service.
- The status endpoint is polled; each response is a :data:`PollResult`.
- The workflow ends in exactly one terminal :data:`Outcome`.

MonitorState transitions are one-way: ``running`` to one terminal state.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel

INVALID_DOMAIN_CONTEXT = "invalid_domain"


class MonitorState(StrEnum):
    """Lifecycle of a single provisioning monitor."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED_TERMINAL = "failed_terminal"
    TIMED_OUT = "timed_out"

    @property
    def terminal(self) -> bool:
        return self is not MonitorState.RUNNING


class FailureReason(StrEnum):
    """Classification of a terminal ``error`` status."""

    INVALID_DOMAIN = "invalid_domain"
    PROVISIONING_ERROR = "provisioning_error"


class DomainAttachmentRequest(BaseModel):
    """A user's request to attach *domain_name* to the document owning *token*."""

    model_config = {"frozen": True}

    token: str
    domain_name: str


# --- Poll results ---


class Ready(BaseModel):
    """Certificate issued; the domain is usable."""

    model_config = {"frozen": True}

    kind: Literal["ready"] = "ready"


class Pending(BaseModel):
    """Provisioning still in progress."""

    model_config = {"frozen": True}

    kind: Literal["pending"] = "pending"


class Failed(BaseModel):
    """Terminal provisioning error reported by the remote service."""

    model_config = {"frozen": True}

    kind: Literal["failed"] = "failed"
    context: str = ""


PollResult = Ready | Pending | Failed


def parse_poll_result(payload: dict[str, Any]) -> PollResult:
    """Map a ``{status, context?}`` payload onto a :data:`PollResult`.

    ``ok`` maps to Ready and ``error`` to Failed.  Everything else,
    including unknown statuses, is treated as Pending so that polling
    continues until the deadline.
    """
    status = str(payload.get("status", "")).lower()
    if status == "ok":
        return Ready()
    if status == "error":
        context = payload.get("context")
        return Failed(context="" if context is None else str(context))
    return Pending()


# --- Outcomes ---


class Succeeded(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["succeeded"] = "succeeded"
    url: str

    @property
    def state(self) -> MonitorState:
        return MonitorState.SUCCEEDED


class FailedTerminal(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["failed_terminal"] = "failed_terminal"
    reason: FailureReason
    context: str = ""

    @property
    def state(self) -> MonitorState:
        return MonitorState.FAILED_TERMINAL


class TimedOut(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["timed_out"] = "timed_out"

    @property
    def state(self) -> MonitorState:
        return MonitorState.TIMED_OUT


Outcome = Succeeded | FailedTerminal | TimedOut


def site_url(domain_name: str) -> str:
    """Public URL of a site served on *domain_name*."""
    return f"https://{domain_name}/"


def classify_failure(result: Failed) -> FailedTerminal:
    """Build the terminal outcome for a ``Failed`` poll result."""
    if result.context == INVALID_DOMAIN_CONTEXT:
        return FailedTerminal(reason=FailureReason.INVALID_DOMAIN, context=result.context)
    return FailedTerminal(reason=FailureReason.PROVISIONING_ERROR, context=result.context)
