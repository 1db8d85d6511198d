from __future__ import annotations

from datetime import timedelta

import pytest

from pacekeeper.domain import TimeBound
from tests.support.clock import ScriptedClock

# (elapsed readings in seconds, timeout in seconds, expected clock reads)
CLOCK_SCENARIOS = [
    ([1], 0, 1),
    ([1], 1, 1),
    ([1, 2], 2, 2),
    ([1, 2, 3], 3, 3),
    ([1, 2, 3], 2, 2),
    ([1, 2, 3, 4], 1, 1),
]


def _policy(readings: list[int], timeout: int) -> tuple[TimeBound, ScriptedClock]:
    clock = ScriptedClock(readings)
    return TimeBound(timedelta(seconds=timeout), clock=clock), clock


@pytest.mark.parametrize(("readings", "timeout", "expected_reads"), CLOCK_SCENARIOS)
def test_map_reads_clock_once_per_completion_check(
    readings: list[int], timeout: int, expected_reads: int
) -> None:
    policy, clock = _policy(readings, timeout)

    for _ in policy.map([0] * len(readings), lambda item: item):
        pass

    assert clock.reads == expected_reads


@pytest.mark.parametrize(("readings", "timeout", "expected_reads"), CLOCK_SCENARIOS)
def test_for_each_reads_clock_once_per_completion_check(
    readings: list[int], timeout: int, expected_reads: int
) -> None:
    policy, clock = _policy(readings, timeout)

    policy.for_each([0] * len(readings), lambda _: None)

    assert clock.reads == expected_reads


@pytest.mark.parametrize(("readings", "timeout", "expected_reads"), CLOCK_SCENARIOS)
def test_generate_reads_clock_once_per_completion_check(
    readings: list[int], timeout: int, expected_reads: int
) -> None:
    policy, clock = _policy(readings, timeout)

    for _ in policy.generate(lambda: 0):
        pass

    assert clock.reads == expected_reads


@pytest.mark.parametrize(("readings", "timeout", "expected_reads"), CLOCK_SCENARIOS)
def test_repeat_reads_clock_once_per_completion_check(
    readings: list[int], timeout: int, expected_reads: int
) -> None:
    policy, clock = _policy(readings, timeout)

    policy.repeat(lambda: None)

    assert clock.reads == expected_reads


def test_stops_at_first_reading_reaching_the_bound() -> None:
    policy, clock = _policy([1, 2, 3], 2)
    performed: list[None] = []

    policy.repeat(lambda: performed.append(None))

    assert clock.reads == 2
    assert len(performed) == 1


def test_clock_is_reset_once_per_loop() -> None:
    policy, clock = _policy([0, 5, 0, 5], 5)

    policy.repeat(lambda: None)
    policy.repeat(lambda: None)

    assert clock.resets == 2
    assert clock.reads == 4


def test_gate_and_mutation_keep_defaults() -> None:
    policy, clock = _policy([], 1)

    assert policy.should_apply() is True
    assert policy.should_apply("item") is True
    policy.mutate()
    assert clock.reads == 0
    assert policy.timeout == timedelta(seconds=1)


def test_negative_timeout_is_rejected() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        TimeBound(timedelta(seconds=-1))


def test_defaults_to_monotonic_clock() -> None:
    policy = TimeBound(timedelta(0))

    assert list(policy.generate(lambda: 1)) == []
