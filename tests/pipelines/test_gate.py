"""Tests for the concurrency gate."""

import threading
import time

import pytest

from nikkei_yprice.pipelines.yearly_price.gate import ConcurrencyGate
from nikkei_yprice.shared.errors import RunCancelledError


class TestConcurrencyGate:
    """Test acquire/release accounting."""

    def test_rejects_non_positive_limit(self):
        """Should require a limit of at least one."""
        with pytest.raises(ValueError):
            ConcurrencyGate(0)

    def test_acquire_and_release_track_in_flight(self):
        """in_flight should follow acquire and release."""
        gate = ConcurrencyGate(2)
        first = gate.acquire()
        second = gate.acquire()
        assert gate.in_flight == 2

        gate.release(first)
        gate.release(second)
        assert gate.in_flight == 0

    def test_double_release_raises(self):
        """Releasing a token twice is a programming error."""
        gate = ConcurrencyGate(1)
        token = gate.acquire()
        gate.release(token)

        with pytest.raises(RuntimeError):
            gate.release(token)
        assert gate.in_flight == 0

    def test_acquire_blocks_until_release(self):
        """A second acquire should wait for the first token to be released."""
        gate = ConcurrencyGate(1)
        token = gate.acquire()
        acquired = threading.Event()

        def _waiter():
            gate.release(gate.acquire())
            acquired.set()

        thread = threading.Thread(target=_waiter)
        thread.start()
        assert not acquired.wait(0.1)

        gate.release(token)
        assert acquired.wait(2)
        thread.join(2)

    def test_cancel_while_waiting(self):
        """A blocked acquire should give up once the run is cancelled."""
        gate = ConcurrencyGate(1)
        token = gate.acquire()
        cancel_event = threading.Event()
        errors = []

        def _waiter():
            try:
                gate.acquire(cancel_event)
            except RunCancelledError as e:
                errors.append(e)

        thread = threading.Thread(target=_waiter)
        thread.start()
        time.sleep(0.1)
        cancel_event.set()
        thread.join(2)

        assert len(errors) == 1
        assert gate.in_flight == 1
        gate.release(token)

    def test_cancelled_event_rejects_free_capacity(self):
        """Should not hand out capacity once the run is cancelled."""
        gate = ConcurrencyGate(1)
        cancel_event = threading.Event()
        cancel_event.set()

        with pytest.raises(RunCancelledError):
            gate.acquire(cancel_event)
        assert gate.in_flight == 0
        gate.release(gate.acquire())
