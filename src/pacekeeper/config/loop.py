"""Defaults for how policy loops wait on a closed gate."""

from __future__ import annotations

from dataclasses import dataclass

from pacekeeper.domain.waiting import PollingWait

from .env import optional_float_env_var

WAIT_INTERVAL_ENV_VAR = "PACEKEEPER_WAIT_INTERVAL_SECONDS"
WAIT_TIMEOUT_ENV_VAR = "PACEKEEPER_WAIT_TIMEOUT_SECONDS"
DEFAULT_WAIT_INTERVAL_SECONDS = 0.0


@dataclass(frozen=True, slots=True)
class LoopConfig:
    wait_interval_seconds: float = DEFAULT_WAIT_INTERVAL_SECONDS
    wait_timeout_seconds: float | None = None

    def build_wait_strategy(self) -> PollingWait:
        return PollingWait(
            interval=self.wait_interval_seconds,
            timeout=self.wait_timeout_seconds,
        )


def get_loop_config() -> LoopConfig:
    interval = optional_float_env_var(WAIT_INTERVAL_ENV_VAR)
    return LoopConfig(
        wait_interval_seconds=DEFAULT_WAIT_INTERVAL_SECONDS if interval is None else interval,
        wait_timeout_seconds=optional_float_env_var(WAIT_TIMEOUT_ENV_VAR),
    )
