"""ProvisioningMonitor — polls certificate provisioning for one domain.

The monitor is a small state machine that owns two asyncio tasks:

- the *poll timer*, ticking every ``poll_interval`` seconds, and
- the *deadline timer*, firing once after ``timeout`` seconds.

Each tick starts at most one status request.  A tick that finds the
previous request still outstanding is skipped.  The first terminal event
(Ready, Failed, or the deadline) wins: :meth:`_finish` records the state,
cancels both timers and any outstanding request in the same synchronous
step, and resolves the outcome future.

INVARIANT: exactly one Outcome per monitor; every later tick, deadline or
late poll response is a no-op.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from gendocs.domain.provisioning import (
    Failed,
    MonitorState,
    Outcome,
    PollResult,
    Ready,
    Succeeded,
    TimedOut,
    classify_failure,
    parse_poll_result,
    site_url,
)
from gendocs.infrastructure.api import GendocsApiError

log = structlog.get_logger(__name__)

DEFAULT_POLL_INTERVAL = 0.5
DEFAULT_TIMEOUT = 20.0

StatusFetcher = Callable[[str], Awaitable[dict[str, Any]]]


class ProvisioningMonitor:
    """Watch one domain until its certificate is issued, fails, or times out.

    Parameters:
        fetch_status: Coroutine function returning the raw
            ``{status, context?}`` payload for a domain.
        poll_interval: Seconds between poll ticks.
        timeout: Seconds before the workflow gives up.

    Instances are single-use: call :meth:`watch` (or :meth:`run`) once.
    """

    def __init__(
        self,
        fetch_status: StatusFetcher,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._fetch_status = fetch_status
        self.poll_interval = poll_interval
        self.timeout = timeout

        self.state = MonitorState.RUNNING
        self.outcome: Outcome | None = None
        self.polls_started = 0
        self.skipped_ticks = 0
        self.transient_failures = 0

        self._domain = ""
        self._done: asyncio.Future[Outcome] | None = None
        self._poll_timer: asyncio.Task[None] | None = None
        self._deadline_timer: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def watch(self, domain_name: str) -> Outcome:
        """Poll *domain_name* until a terminal Outcome is reached."""
        if self._done is not None:
            raise RuntimeError("ProvisioningMonitor instances are single-use")

        self._domain = domain_name
        self._done = asyncio.get_running_loop().create_future()
        log.debug(
            "monitor.start",
            domain=domain_name,
            poll_interval=self.poll_interval,
            timeout=self.timeout,
        )

        self._deadline_timer = asyncio.create_task(self._run_deadline())
        self._poll_timer = asyncio.create_task(self._run_poll_timer())
        try:
            return await self._done
        finally:
            self.cancel_all()
            await self._reap()

    def run(self, domain_name: str) -> Outcome:
        """Blocking wrapper around :meth:`watch` for synchronous callers."""
        return asyncio.run(self.watch(domain_name))

    def cancel_all(self) -> None:
        """Cancel the poll timer, the deadline timer and any outstanding poll.

        The task calling this (if it is one of them) is left to return on
        its own.
        """
        current = asyncio.current_task()
        for task in (self._poll_timer, self._deadline_timer, self._inflight):
            if task is not None and task is not current and not task.done():
                task.cancel()

    def on_poll_tick(self) -> None:
        """Poll timer callback: start one status request unless one is outstanding."""
        if self.state.terminal:
            return
        if self._inflight is not None and not self._inflight.done():
            self.skipped_ticks += 1
            log.debug("monitor.skip_tick", domain=self._domain, attempt=self.polls_started)
            return
        self.polls_started += 1
        self._inflight = asyncio.create_task(self._poll_once(self.polls_started))

    def on_deadline(self) -> None:
        """Deadline timer callback."""
        if self.state.terminal:
            return
        self._finish(TimedOut())

    def handle_poll_result(self, result: PollResult) -> None:
        """Classify one poll result; terminal results end the workflow."""
        if self.state.terminal:
            return
        if isinstance(result, Ready):
            self._finish(Succeeded(url=site_url(self._domain)))
        elif isinstance(result, Failed):
            self._finish(classify_failure(result))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run_poll_timer(self) -> None:
        while not self.state.terminal:
            await asyncio.sleep(self.poll_interval)
            self.on_poll_tick()

    async def _run_deadline(self) -> None:
        await asyncio.sleep(self.timeout)
        self.on_deadline()

    async def _poll_once(self, attempt: int) -> None:
        try:
            payload = await self._fetch_status(self._domain)
        except GendocsApiError as exc:
            self.transient_failures += 1
            log.warning(
                "monitor.transient_failure",
                domain=self._domain,
                attempt=attempt,
                error=str(exc),
            )
            return
        except Exception as exc:
            self._abort(exc)
            raise

        result = parse_poll_result(payload)
        log.debug(
            "monitor.poll",
            domain=self._domain,
            attempt=attempt,
            status=payload.get("status"),
            result=result.kind,
        )
        self.handle_poll_result(result)

    def _finish(self, outcome: Outcome) -> None:
        if self.state.terminal:
            return
        self.state = outcome.state
        self.outcome = outcome
        self.cancel_all()
        if self._done is not None and not self._done.done():
            self._done.set_result(outcome)
        log.debug(
            "monitor.finish",
            domain=self._domain,
            state=str(self.state),
            polls=self.polls_started,
            skipped=self.skipped_ticks,
        )

    def _abort(self, exc: BaseException) -> None:
        """Terminate on an unexpected error, surfacing it from :meth:`watch`."""
        if self.state.terminal:
            return
        self.state = MonitorState.FAILED_TERMINAL
        self.cancel_all()
        if self._done is not None and not self._done.done():
            self._done.set_exception(exc)

    async def _reap(self) -> None:
        tasks = [
            task
            for task in (self._poll_timer, self._deadline_timer, self._inflight)
            if task is not None and task is not asyncio.current_task()
        ]
        await asyncio.gather(*tasks, return_exceptions=True)
