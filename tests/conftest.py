from __future__ import annotations

import pytest

from tests.support.clock import ScriptedClock


@pytest.fixture
def calls() -> list[str]:
    return []


@pytest.fixture
def frozen_clock() -> ScriptedClock:
    """Clock that never advances, for loops that must be stopped by another bound."""

    return ScriptedClock([0.0] * 100)


@pytest.fixture(autouse=True)
def _clear_pacekeeper_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PACEKEEPER_LOG_LEVEL",
        "PACEKEEPER_WAIT_INTERVAL_SECONDS",
        "PACEKEEPER_WAIT_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
