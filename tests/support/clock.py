"""Deterministic clocks for time-based policy tests."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ScriptedClock:
    """Clock returning pre-scripted elapsed durations (in seconds) on successive reads.

    Reading past the end of the script raises ``IndexError`` so tests fail loudly
    when a loop reads the clock more often than expected.
    """

    def __init__(self, readings: Sequence[float]) -> None:
        self._readings = [timedelta(seconds=reading) for reading in readings]
        self.reads = 0
        self.resets = 0

    def reset(self) -> None:
        self.resets += 1

    def elapsed(self) -> timedelta:
        value = self._readings[self.reads]
        self.reads += 1
        return value
