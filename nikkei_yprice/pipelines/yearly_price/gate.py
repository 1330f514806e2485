"""Bounded admission control for concurrent pipeline tasks."""

import threading
from dataclasses import dataclass, field

from nikkei_yprice.shared.errors import RunCancelledError

# How often a blocked acquire re-checks the cancellation event
_CANCEL_POLL_SECONDS = 0.05


@dataclass(eq=False)
class GateToken:
    """Proof of one successful acquire; released exactly once."""

    released: bool = field(default=False, init=False)


class ConcurrencyGate:
    """Semaphore limiting how many tasks run at the same time.

    Waiters are not served in any particular order. Every acquired token must
    be released exactly once, on every exit path of the guarded work.
    """

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"concurrency limit must be >= 1, got {limit}")
        self.limit = limit
        self._semaphore = threading.Semaphore(limit)
        self._lock = threading.Lock()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of tokens currently held."""
        with self._lock:
            return self._in_flight

    def acquire(self, cancel_event: threading.Event | None = None) -> GateToken:
        """Block until capacity is available.

        Raises:
            RunCancelledError: If cancel_event is set before capacity frees.
        """
        if cancel_event is None:
            self._semaphore.acquire()
        else:
            while not self._semaphore.acquire(timeout=_CANCEL_POLL_SECONDS):
                if cancel_event.is_set():
                    raise RunCancelledError("run aborted while waiting for capacity")
            if cancel_event.is_set():
                self._semaphore.release()
                raise RunCancelledError("run aborted while waiting for capacity")

        with self._lock:
            self._in_flight += 1
        return GateToken()

    def release(self, token: GateToken) -> None:
        """Return capacity held by token.

        Raises:
            RuntimeError: If the token was already released.
        """
        with self._lock:
            if token.released:
                raise RuntimeError("gate token released twice")
            token.released = True
            self._in_flight -= 1
        self._semaphore.release()
