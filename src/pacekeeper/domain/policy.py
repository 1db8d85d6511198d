"""Base class for policies with the neutral hook defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from .chain import PolicyChain
from .hooks import MISSING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from .hooks import PolicyHooks
    from .waiting import CancellationToken, WaitStrategy

ItemT = TypeVar("ItemT")
OutputT = TypeVar("OutputT")


class Policy:
    """A rule governing when a repeated operation may proceed and when it stops.

    Subclasses override only the hooks they need. The defaults let every
    iteration proceed, never complete, and keep no state.

    A policy can be used on its own, in which case it behaves as a chain of
    length one, or linked to others with :meth:`extend`.
    """

    def initialize(self) -> None:
        """Reset iteration state before a loop starts."""

    def should_apply(self, item: object = MISSING) -> bool:  # noqa: ARG002
        """Return whether the current iteration may proceed."""

        return True

    def completed(self, output: object = MISSING) -> bool:  # noqa: ARG002
        """Return whether the loop must stop."""

        return False

    def mutate(self) -> None:
        """Advance iteration state after the operation ran."""

    def extend(self, policy: PolicyHooks | PolicyChain | None) -> PolicyChain:
        return self.as_chain().extend(policy)

    def as_chain(self) -> PolicyChain:
        return PolicyChain(policies=(self,))

    def map(
        self,
        items: Iterable[ItemT],
        transform: Callable[[ItemT], OutputT],
        *,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[OutputT]:
        return self.as_chain().map(items, transform, wait=wait, cancellation=cancellation)

    def for_each(
        self,
        items: Iterable[ItemT],
        action: Callable[[ItemT], object],
        *,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> int:
        return self.as_chain().for_each(items, action, wait=wait, cancellation=cancellation)

    def generate(
        self,
        producer: Callable[[], OutputT],
        *,
        sentinel: object = MISSING,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[OutputT]:
        return self.as_chain().generate(
            producer, sentinel=sentinel, wait=wait, cancellation=cancellation
        )

    def repeat(
        self,
        action: Callable[[], object],
        *,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> int:
        return self.as_chain().repeat(action, wait=wait, cancellation=cancellation)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["Policy"]
