from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from pacekeeper.domain import BusySpin, CancellationToken, PollingWait, WaitTimeoutError
from tests.support.clock import ScriptedClock


def _gate_opening_after(closed: int) -> tuple[list[int], Callable[[], bool]]:
    evaluations: list[int] = []

    def gate() -> bool:
        evaluations.append(len(evaluations) + 1)
        return len(evaluations) > closed

    return evaluations, gate


def test_busy_spin_returns_once_gate_opens() -> None:
    evaluations, gate = _gate_opening_after(4)

    assert BusySpin().wait_until(gate) is True
    assert len(evaluations) == 5


def test_busy_spin_returns_false_when_cancelled() -> None:
    token = CancellationToken()

    def gate() -> bool:
        token.cancel()
        return False

    assert BusySpin().wait_until(gate, cancellation=token) is False


def test_polling_wait_sleeps_between_evaluations() -> None:
    sleeps: list[float] = []
    evaluations, gate = _gate_opening_after(2)
    wait = PollingWait(interval=0.5, sleep=sleeps.append)

    assert wait.wait_until(gate) is True
    assert sleeps == [0.5, 0.5]
    assert len(evaluations) == 3


def test_polling_wait_open_gate_skips_sleep_and_clock() -> None:
    sleeps: list[float] = []

    def clock_factory() -> ScriptedClock:
        raise AssertionError("clock must not be created for an open gate")

    wait = PollingWait(interval=1.0, timeout=1.0, clock_factory=clock_factory, sleep=sleeps.append)

    assert wait.wait_until(lambda: True) is True
    assert sleeps == []


def test_polling_wait_raises_after_timeout() -> None:
    clock = ScriptedClock([0, 1, 2])
    sleeps: list[float] = []
    wait = PollingWait(
        interval=0.1,
        timeout=2.0,
        clock_factory=lambda: clock,
        sleep=sleeps.append,
    )

    with pytest.raises(WaitTimeoutError) as excinfo:
        wait.wait_until(lambda: False)

    assert excinfo.value.waited_seconds == 2.0
    assert isinstance(excinfo.value, TimeoutError)
    assert len(sleeps) == 2


def test_polling_wait_returns_false_when_cancelled() -> None:
    token = CancellationToken()
    wait = PollingWait(sleep=lambda _: token.cancel())

    assert wait.wait_until(lambda: False, cancellation=token) is False


@pytest.mark.parametrize(("interval", "timeout"), [(-0.1, None), (0.0, -1.0)])
def test_polling_wait_rejects_negative_values(interval: float, timeout: float | None) -> None:
    with pytest.raises(ValueError, match="non-negative"):
        PollingWait(interval=interval, timeout=timeout)


def test_cancellation_token_is_visible_across_threads() -> None:
    token = CancellationToken()
    worker = threading.Thread(target=token.cancel)

    worker.start()
    worker.join()

    assert token.cancelled is True
    assert "cancelled=True" in repr(token)
