"""Built-in policies."""

from __future__ import annotations

from .count import CountBound
from .noop import NoOp
from .timeout import TimeBound

__all__ = ["CountBound", "NoOp", "TimeBound"]
