"""Application orchestration entry points."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from pacekeeper.config import get_loop_config
from pacekeeper.domain import CountBound, NoOp, PolicyChain, TimeBound

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import timedelta

    from pacekeeper.domain import CancellationToken, Clock, WaitStrategy


log = getLogger(__name__)


class CommandRunner(Protocol):
    """Run ``argv`` once and return its exit code."""

    def __call__(self, argv: Sequence[str], *, check: bool) -> int: ...


def run_subprocess(argv: Sequence[str], *, check: bool) -> int:
    completed = subprocess.run(list(argv), check=check)  # noqa: S603
    return completed.returncode


@dataclass(slots=True)
class CommandLoopResult:
    invocations: int = 0
    failures: int = 0
    interrupted: bool = False


def build_chain(
    *,
    count: int | None = None,
    timeout: timedelta | None = None,
    clock: Clock | None = None,
) -> PolicyChain:
    """Link the requested bounds into a chain, falling back to ``NoOp``."""

    chain = PolicyChain()
    if count is not None:
        chain = chain.extend(CountBound(count))
    if timeout is not None:
        chain = chain.extend(TimeBound(timeout, clock=clock))
    if len(chain) == 0:
        chain = chain.extend(NoOp())
    return chain


class _CommandInvoker:
    def __init__(
        self,
        command: Sequence[str],
        *,
        runner: CommandRunner,
        fail_fast: bool,
        result: CommandLoopResult,
        cancellation: CancellationToken | None,
    ) -> None:
        self._command = tuple(command)
        self._runner = runner
        self._fail_fast = fail_fast
        self._result = result
        self._cancellation = cancellation

    def __call__(self, *extra_args: str) -> None:
        argv = (*self._command, *extra_args)
        self._result.invocations += 1
        try:
            code = self._runner(argv, check=self._fail_fast)
        except subprocess.CalledProcessError as exc:
            if not self._interrupted(exc.returncode):
                raise
            code = exc.returncode
        if self._interrupted(code):
            self._result.interrupted = True
            log.info("Command stopped by signal %s after cancellation: %s", -code, " ".join(argv))
        elif code != 0:
            self._result.failures += 1
            log.warning("Command exited with status %s: %s", code, " ".join(argv))

    def _interrupted(self, code: int) -> bool:
        # negative exit codes: the child was killed by a signal
        return code < 0 and self._cancellation is not None and self._cancellation.cancelled


def repeat_command(
    command: Sequence[str],
    *,
    chain: PolicyChain,
    runner: CommandRunner = run_subprocess,
    fail_fast: bool = False,
    wait: WaitStrategy | None = None,
    cancellation: CancellationToken | None = None,
) -> CommandLoopResult:
    """Run ``command`` repeatedly until ``chain`` completes or is cancelled."""

    result = CommandLoopResult()
    invoke = _CommandInvoker(
        command,
        runner=runner,
        fail_fast=fail_fast,
        result=result,
        cancellation=cancellation,
    )
    effective_wait = wait if wait is not None else get_loop_config().build_wait_strategy()
    log.info("Starting command loop: command=%s, policies=%s", list(command), list(chain))

    chain.repeat(invoke, wait=effective_wait, cancellation=cancellation)

    log.info(
        "Finished command loop: invocations=%s, failures=%s, interrupted=%s",
        result.invocations,
        result.failures,
        result.interrupted,
    )
    return result


def run_command_for_each(
    lines: Iterable[str],
    command: Sequence[str],
    *,
    chain: PolicyChain,
    runner: CommandRunner = run_subprocess,
    fail_fast: bool = False,
    wait: WaitStrategy | None = None,
    cancellation: CancellationToken | None = None,
) -> CommandLoopResult:
    """Run ``command`` once per line, passing the line as the last argument."""

    result = CommandLoopResult()
    invoke = _CommandInvoker(
        command,
        runner=runner,
        fail_fast=fail_fast,
        result=result,
        cancellation=cancellation,
    )
    effective_wait = wait if wait is not None else get_loop_config().build_wait_strategy()
    log.info("Starting per-line command loop: command=%s, policies=%s", list(command), list(chain))

    chain.for_each(lines, invoke, wait=effective_wait, cancellation=cancellation)

    log.info(
        "Finished per-line command loop: invocations=%s, failures=%s, interrupted=%s",
        result.invocations,
        result.failures,
        result.interrupted,
    )
    return result
