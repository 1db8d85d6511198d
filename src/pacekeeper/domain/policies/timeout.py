"""Stop a loop once a duration has elapsed."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from pacekeeper.domain.clock import MonotonicClock
from pacekeeper.domain.hooks import MISSING
from pacekeeper.domain.policy import Policy

if TYPE_CHECKING:
    from pacekeeper.domain.clock import Clock


class TimeBound(Policy):
    """Complete once ``timeout`` has elapsed since the loop started.

    Every completion check reads the clock exactly once, so a loop performs as
    many ``clock.elapsed()`` reads as it makes completion checks. The gate and
    mutation hooks keep their defaults.
    """

    def __init__(self, timeout: timedelta, *, clock: Clock | None = None) -> None:
        if timeout < timedelta(0):
            raise ValueError("Time bound must be non-negative")
        self._timeout = timeout
        self._clock = clock if clock is not None else MonotonicClock()

    @property
    def timeout(self) -> timedelta:
        return self._timeout

    def initialize(self) -> None:
        self._clock.reset()

    def completed(self, output: object = MISSING) -> bool:  # noqa: ARG002
        return self._timeout <= self._clock.elapsed()

    def __repr__(self) -> str:
        return f"TimeBound(timeout={self._timeout!r})"


__all__ = ["TimeBound"]
