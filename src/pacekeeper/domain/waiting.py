"""Strategies for waiting on a closed policy gate, and loop cancellation."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .clock import Clock, MonotonicClock
from .errors import WaitTimeoutError

Gate = Callable[[], bool]


class CancellationToken:
    """Thread-safe flag asking a running loop to stop at its next check."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"


@runtime_checkable
class WaitStrategy(Protocol):
    """Block until ``gate`` returns ``True``.

    Returns ``True`` once the gate opens and ``False`` when ``cancellation`` was
    triggered first.
    """

    def wait_until(
        self,
        gate: Gate,
        *,
        cancellation: CancellationToken | None = None,
    ) -> bool: ...


def _is_cancelled(cancellation: CancellationToken | None) -> bool:
    return cancellation is not None and cancellation.cancelled


@dataclass(slots=True, frozen=True)
class BusySpin:
    """Re-evaluate the gate back to back without sleeping.

    This keeps the calling thread at full CPU while the gate is closed. Prefer
    ``PollingWait`` unless the gate is known to open almost immediately.
    """

    def wait_until(
        self,
        gate: Gate,
        *,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        while not gate():
            if _is_cancelled(cancellation):
                return False
        return True


@dataclass(slots=True, frozen=True)
class PollingWait:
    """Poll the gate, sleeping ``interval`` seconds between evaluations.

    An interval of ``0`` still calls ``sleep(0)``, which yields the thread.
    With ``timeout`` set, a gate that stays closed for that many seconds raises
    ``WaitTimeoutError``.
    """

    interval: float = 0.0
    timeout: float | None = None
    clock_factory: Callable[[], Clock] = MonotonicClock
    sleep: Callable[[float], None] = time.sleep

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError("Wait interval must be non-negative")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError("Wait timeout must be non-negative")

    def wait_until(
        self,
        gate: Gate,
        *,
        cancellation: CancellationToken | None = None,
    ) -> bool:
        if gate():
            return True

        clock = self.clock_factory() if self.timeout is not None else None
        while True:
            if _is_cancelled(cancellation):
                return False
            if clock is not None and self.timeout is not None:
                waited = clock.elapsed().total_seconds()
                if waited >= self.timeout:
                    raise WaitTimeoutError(
                        f"Policy gate stayed closed for {waited:.3f}s "
                        f"(timeout {self.timeout:.3f}s)",
                        waited_seconds=waited,
                    )
            self.sleep(self.interval)
            if gate():
                return True


__all__ = ["BusySpin", "CancellationToken", "Gate", "PollingWait", "WaitStrategy"]
