"""Stop a loop after a fixed number of iterations."""

from __future__ import annotations

from pacekeeper.domain.hooks import MISSING
from pacekeeper.domain.policy import Policy


class CountBound(Policy):
    """Complete once ``amount`` iterations have run.

    The output of an iteration is ignored; ``CountBound(0)`` completes before
    the first iteration.
    """

    def __init__(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Count bound must be non-negative")
        self._amount = amount
        self._count = 0

    @property
    def amount(self) -> int:
        return self._amount

    @property
    def count(self) -> int:
        return self._count

    def initialize(self) -> None:
        self._count = 0

    def mutate(self) -> None:
        self._count += 1

    def completed(self, output: object = MISSING) -> bool:  # noqa: ARG002
        return self._amount <= self._count

    def __repr__(self) -> str:
        return f"CountBound(amount={self._amount})"


__all__ = ["CountBound"]
