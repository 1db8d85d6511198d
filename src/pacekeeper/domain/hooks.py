"""The hook contract every policy implements."""

from __future__ import annotations

from typing import Final, Protocol, runtime_checkable


class _Missing:
    """Marker for "no item" and "no output" hook arguments."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


@runtime_checkable
class PolicyHooks(Protocol):
    """Extension points the chain engine invokes at fixed loop phases.

    ``initialize`` runs once when a loop starts, ``should_apply`` gates each
    iteration (the loop waits until it returns ``True``), ``completed`` decides
    whether the loop stops and ``mutate`` runs after the caller's operation.

    ``should_apply`` receives ``MISSING`` when the loop is driven by a producer
    or action rather than a sequence. ``completed`` receives ``MISSING`` for the
    check made before an iteration and the produced output for the check made
    after it.
    """

    def initialize(self) -> None: ...

    def should_apply(self, item: object = MISSING) -> bool: ...

    def completed(self, output: object = MISSING) -> bool: ...

    def mutate(self) -> None: ...


__all__ = ["MISSING", "PolicyHooks"]
