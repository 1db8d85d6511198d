from __future__ import annotations

from importlib import metadata

from pacekeeper.domain import (
    MISSING,
    BusySpin,
    CancellationToken,
    Clock,
    CountBound,
    MonotonicClock,
    NoOp,
    PacekeeperError,
    Policy,
    PolicyChain,
    PolicyCompositionError,
    PolicyHooks,
    PollingWait,
    TimeBound,
    WaitStrategy,
    WaitTimeoutError,
)

try:
    __version__ = metadata.version("pacekeeper")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
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
    "__version__",
]
