"""Identity policy."""

from __future__ import annotations

from pacekeeper.domain.policy import Policy


class NoOp(Policy):
    """Let every iteration proceed and never complete.

    Over a finite sequence this behaves like a plain loop. Used on its own with
    ``generate`` or ``repeat`` it never terminates unless the loop is cancelled.
    """


__all__ = ["NoOp"]
