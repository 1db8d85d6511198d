from __future__ import annotations

import argparse
import logging
import sys
import threading
from contextlib import contextmanager
from datetime import timedelta
from signal import SIGINT, getsignal, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from pacekeeper.app import build_chain, repeat_command, run_command_for_each
from pacekeeper.config import ConfigurationError, configure_logging, get_loop_config
from pacekeeper.domain import CancellationToken

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence
    from types import FrameType

    from pacekeeper.app import CommandLoopResult

log = logging.getLogger(__name__)


def _add_loop_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--count",
        type=int,
        help="Stop after this many invocations",
    )
    parser.add_argument(
        "--timeout-seconds",
        type=float,
        help="Stop once this many seconds have elapsed since the loop started",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort the loop on the first non-zero exit status",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run (separate it from the options with --)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run commands under pacing policies")
    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    repeat = subparsers.add_parser("repeat", help="Run a command repeatedly")
    _add_loop_arguments(repeat)

    each = subparsers.add_parser(
        "each",
        help="Run a command once per stdin line, passing the line as its last argument",
    )
    _add_loop_arguments(each)

    return parser.parse_args(list(argv))


def _command_from_args(args: argparse.Namespace) -> list[str]:
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        raise ValueError("Missing command to run")
    return command


def _timeout_from_args(args: argparse.Namespace) -> timedelta | None:
    if args.timeout_seconds is None:
        return None
    if args.timeout_seconds < 0:
        raise ValueError("Timeout seconds must be non-negative")
    return timedelta(seconds=args.timeout_seconds)


def _count_from_args(args: argparse.Namespace) -> int | None:
    if args.count is not None and args.count < 0:
        raise ValueError("Count must be non-negative")
    return args.count


def _stdin_lines() -> Iterable[str]:
    for line in sys.stdin:
        stripped = line.rstrip("\r\n")
        if stripped.strip():
            yield stripped


@contextmanager
def _cancel_on_sigint(token: CancellationToken) -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(_signal_received: int, _frame: FrameType | None) -> None:
        log.info("Closed by user (Ctrl+C), stopping after the current invocation")
        token.cancel()

    previous = getsignal(SIGINT)
    signal(SIGINT, handler)
    try:
        yield
    finally:
        signal(SIGINT, previous)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        command = _command_from_args(parsed_args)
        count = _count_from_args(parsed_args)
        timeout = _timeout_from_args(parsed_args)
        wait = get_loop_config().build_wait_strategy()
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    chain = build_chain(count=count, timeout=timeout)
    token = CancellationToken()
    result: CommandLoopResult
    try:
        with _cancel_on_sigint(token):
            if parsed_args.subcommand == "repeat":
                if count is None and timeout is None:
                    log.warning("No --count or --timeout-seconds given; stop with Ctrl+C")
                result = repeat_command(
                    command,
                    chain=chain,
                    fail_fast=parsed_args.fail_fast,
                    wait=wait,
                    cancellation=token,
                )
            elif parsed_args.subcommand == "each":
                result = run_command_for_each(
                    _stdin_lines(),
                    command,
                    chain=chain,
                    fail_fast=parsed_args.fail_fast,
                    wait=wait,
                    cancellation=token,
                )
            else:
                raise ValueError(f"Unsupported command: {parsed_args.subcommand}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during command loop")
        sys.exit(1)

    if result.failures:
        sys.exit(1)


def entrypoint() -> None:
    load_dotenv()
    main()


if __name__ == "__main__":
    entrypoint()
