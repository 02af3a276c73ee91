"""Per-call deadline and cancellation token."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from aws_script_bridge.config import Settings
from aws_script_bridge.errors import CallCancelledError, DeadlineExceededError


class CallContext:
    """Deadline plus cancel flag threaded through one script call.

    Cancellation is cooperative: it is observed before each network call and
    between transfer chunks. A request already on the wire runs until its
    botocore timeout expires. Clients split :meth:`remaining` evenly across
    ``SDK_MAX_ATTEMPTS`` attempts, so retries stay inside the deadline; the
    backoff sleeps between attempts are not counted.
    """

    def __init__(
        self,
        timeout: float,
        cancel_event: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._clock = clock
        self._deadline = clock() + timeout
        self.cancel_event = cancel_event or threading.Event()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        cancel_event: threading.Event | None = None,
    ) -> "CallContext":
        return cls(settings.execution.call_timeout_seconds, cancel_event)

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def remaining(self) -> float:
        return max(0.0, self._deadline - self._clock())

    def check(self) -> None:
        if self.cancel_event.is_set():
            raise CallCancelledError()
        if self.remaining() <= 0:
            raise DeadlineExceededError()
