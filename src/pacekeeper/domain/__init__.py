"""Policy engine: the hook contract, chains and the built-in policies."""

from __future__ import annotations

from .chain import DEFAULT_WAIT, PolicyChain
from .clock import Clock, MonotonicClock
from .errors import PacekeeperError, PolicyCompositionError, WaitTimeoutError
from .hooks import MISSING, PolicyHooks
from .policies import CountBound, NoOp, TimeBound
from .policy import Policy
from .waiting import BusySpin, CancellationToken, PollingWait, WaitStrategy

__all__ = [
    "DEFAULT_WAIT",
    "MISSING",
    "BusySpin",
    "CancellationToken",
    "Clock",
    "CountBound",
    "MonotonicClock",
    "NoOp",
    "PacekeeperError",
    "Policy",
    "PolicyChain",
    "PolicyCompositionError",
    "PolicyHooks",
    "PollingWait",
    "TimeBound",
    "WaitStrategy",
    "WaitTimeoutError",
]
