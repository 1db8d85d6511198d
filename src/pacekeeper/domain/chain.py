"""Policy chains: hook combination rules and the loops they drive.

A chain is an ordered tuple of policies. The boolean hooks are evaluated head
first and short-circuit (one permissive gate lets an iteration proceed, one
completed policy stops the loop). The state hooks run on every policy, tail
first, so each policy is reset and advanced exactly once per loop phase.

Four loop shapes drive caller operations through those hooks:

========== ============ =========== ===================================
method     input        operation   completion checks
========== ============ =========== ===================================
map        iterable     transform   before each item and after output
for_each   iterable     action      before and after each item
generate   producer     transform   before each call and after output
repeat     action       action      before each call only
========== ============ =========== ===================================

``repeat`` has no output to inspect, so a policy that only completes for a
particular output can never stop it; only the output-less ``completed()`` check
does.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Final, TypeVar

from .errors import PolicyCompositionError
from .hooks import MISSING, PolicyHooks
from .waiting import PollingWait, WaitStrategy

if TYPE_CHECKING:
    from .waiting import CancellationToken

log = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
OutputT = TypeVar("OutputT")

DEFAULT_WAIT: Final[WaitStrategy] = PollingWait()


@dataclass(slots=True, frozen=True)
class PolicyChain:
    """An ordered, duplicate-free composition of policies."""

    policies: tuple[PolicyHooks, ...] = ()

    def __post_init__(self) -> None:
        seen: list[PolicyHooks] = []
        for policy in self.policies:
            if any(policy is existing for existing in seen):
                raise PolicyCompositionError(f"{policy!r} appears more than once in the chain")
            seen.append(policy)

    @classmethod
    def of(cls, *policies: PolicyHooks | PolicyChain | None) -> PolicyChain:
        """Build a chain by extending an empty chain with ``policies`` in order."""

        chain = cls()
        for policy in policies:
            chain = chain.extend(policy)
        return chain

    def extend(self, policy: PolicyHooks | PolicyChain | None) -> PolicyChain:
        """Return a new chain with ``policy`` linked after the current tail.

        ``None`` leaves the chain unchanged. Extending with another chain
        appends its policies in order. Linking a policy that is already part of
        the chain raises ``PolicyCompositionError``.
        """

        if policy is None:
            return self
        additions = policy.policies if isinstance(policy, PolicyChain) else (policy,)
        return PolicyChain(policies=(*self.policies, *additions))

    def __len__(self) -> int:
        return len(self.policies)

    def __iter__(self) -> Iterator[PolicyHooks]:
        return iter(self.policies)

    # Combined hooks

    def initialize(self) -> None:
        for policy in reversed(self.policies):
            policy.initialize()

    def should_apply(self, item: object = MISSING) -> bool:
        if not self.policies:
            return True
        return any(policy.should_apply(item) for policy in self.policies)

    def completed(self, output: object = MISSING) -> bool:
        return any(policy.completed(output) for policy in self.policies)

    def mutate(self) -> None:
        for policy in reversed(self.policies):
            policy.mutate()

    # Loop shapes

    def map(
        self,
        items: Iterable[ItemT],
        transform: Callable[[ItemT], OutputT],
        *,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[OutputT]:
        """Lazily yield ``transform(item)`` for items until the chain completes."""

        strategy = wait if wait is not None else DEFAULT_WAIT
        self.initialize()
        iterations = 0
        reason = "exhausted"
        for item in items:
            stop = self._stop_reason(cancellation)
            if stop is not None:
                reason = stop
                break
            if not strategy.wait_until(partial(self.should_apply, item), cancellation=cancellation):
                reason = "cancelled"
                break
            output = transform(item)
            self.mutate()
            iterations += 1
            yield output
            if self.completed(output):
                reason = "completed"
                break
        _log_finished("map", iterations, reason)

    def for_each(
        self,
        items: Iterable[ItemT],
        action: Callable[[ItemT], object],
        *,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> int:
        """Call ``action`` on items until the chain completes.

        Returns the number of iterations performed.
        """

        strategy = wait if wait is not None else DEFAULT_WAIT
        self.initialize()
        iterations = 0
        reason = "exhausted"
        for item in items:
            stop = self._stop_reason(cancellation)
            if stop is not None:
                reason = stop
                break
            if not strategy.wait_until(partial(self.should_apply, item), cancellation=cancellation):
                reason = "cancelled"
                break
            action(item)
            self.mutate()
            iterations += 1
            if self.completed():
                reason = "completed"
                break
        _log_finished("for_each", iterations, reason)
        return iterations

    def generate(
        self,
        producer: Callable[[], OutputT],
        *,
        sentinel: object = MISSING,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[OutputT]:
        """Lazily yield ``producer()`` results until the chain completes.

        When ``sentinel`` is given, a producer result equal to it ends the loop
        without being yielded or counted as an iteration.
        """

        strategy = wait if wait is not None else DEFAULT_WAIT
        self.initialize()
        iterations = 0
        while True:
            reason = self._stop_reason(cancellation)
            if reason is not None:
                break
            if not strategy.wait_until(self.should_apply, cancellation=cancellation):
                reason = "cancelled"
                break
            output = producer()
            if sentinel is not MISSING and output == sentinel:
                reason = "sentinel"
                break
            self.mutate()
            iterations += 1
            yield output
            if self.completed(output):
                reason = "completed"
                break
        _log_finished("generate", iterations, reason)

    def repeat(
        self,
        action: Callable[[], object],
        *,
        wait: WaitStrategy | None = None,
        cancellation: CancellationToken | None = None,
    ) -> int:
        """Call ``action`` until the output-less completion check is true.

        A chain that never completes (for example a lone ``NoOp``) makes this
        loop run until ``cancellation`` is triggered. Returns the number of
        iterations performed.
        """

        strategy = wait if wait is not None else DEFAULT_WAIT
        self.initialize()
        iterations = 0
        while True:
            reason = self._stop_reason(cancellation)
            if reason is not None:
                break
            if not strategy.wait_until(self.should_apply, cancellation=cancellation):
                reason = "cancelled"
                break
            action()
            self.mutate()
            iterations += 1
        _log_finished("repeat", iterations, reason)
        return iterations

    def _stop_reason(self, cancellation: CancellationToken | None) -> str | None:
        if cancellation is not None and cancellation.cancelled:
            return "cancelled"
        if self.completed():
            return "completed"
        return None


def _log_finished(shape: str, iterations: int, reason: str) -> None:
    log.debug("Policy loop %s finished after %s iterations (%s)", shape, iterations, reason)


__all__ = ["DEFAULT_WAIT", "PolicyChain"]
