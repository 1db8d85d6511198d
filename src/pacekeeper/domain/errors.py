"""Error types raised by the policy engine."""

from __future__ import annotations


class PacekeeperError(Exception):
    """Base class for errors raised by pacekeeper itself."""


class PolicyCompositionError(PacekeeperError, ValueError):
    """Raised when linking a policy would make the chain revisit a policy."""


class WaitTimeoutError(PacekeeperError, TimeoutError):
    """Raised when a policy gate stays closed past the wait deadline."""

    def __init__(self, message: str, *, waited_seconds: float) -> None:
        super().__init__(message)
        self.waited_seconds = waited_seconds


__all__ = ["PacekeeperError", "PolicyCompositionError", "WaitTimeoutError"]
