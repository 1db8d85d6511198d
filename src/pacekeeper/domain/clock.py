"""Elapsed-time sources used by time-based policies and waits."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def reset(self) -> None: ...

    def elapsed(self) -> timedelta: ...


class MonotonicClock:
    """Default implementation backed by ``time.monotonic``."""

    def __init__(self) -> None:
        self._origin = time.monotonic()

    def reset(self) -> None:
        self._origin = time.monotonic()

    def elapsed(self) -> timedelta:
        return timedelta(seconds=time.monotonic() - self._origin)


__all__ = ["Clock", "MonotonicClock"]
