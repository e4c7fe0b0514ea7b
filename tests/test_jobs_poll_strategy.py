"""Tests for poll wait schedule calculation."""

from __future__ import annotations

import pytest

from fetchscribe.jobs import PollRetryStrategy


def test_jobs_poll_wait_uses_exponential_backoff_with_cap_and_jitter() -> None:
    """Calculate exponential backoff wait with deterministic jitter and cap.

    Returns:
        None: Assertions verify wait-seconds calculation contract.

    Raises:
        AssertionError: Raised when computed wait values are incorrect.
    """

    strategy = PollRetryStrategy(
        initial_wait_seconds=0.5,
        backoff_base_seconds=4,
        max_backoff_seconds=10,
        jitter_min_multiplier=1.0,
        jitter_max_multiplier=1.0,
        random_unit_interval_provider=lambda: 0.0,
    )

    assert strategy.strategy_calculate_wait_seconds(poll_index=0) == pytest.approx(4.0)
    assert strategy.strategy_calculate_wait_seconds(poll_index=1) == pytest.approx(8.0)
    assert strategy.strategy_calculate_wait_seconds(poll_index=2) == pytest.approx(10.0)
    assert strategy.strategy_calculate_wait_seconds(poll_index=500) == pytest.approx(10.0)


def test_jobs_poll_wait_respects_initial_wait_floor() -> None:
    """Return initial wait when jittered backoff is lower than configured floor.

    Returns:
        None: Assertions verify initial wait floor behavior.

    Raises:
        AssertionError: Raised when initial wait floor is not applied.
    """

    strategy = PollRetryStrategy(
        initial_wait_seconds=5,
        backoff_base_seconds=1,
        max_backoff_seconds=60,
        jitter_min_multiplier=0.5,
        jitter_max_multiplier=0.5,
        random_unit_interval_provider=lambda: 0.0,
    )

    assert strategy.strategy_calculate_wait_seconds(poll_index=0) == pytest.approx(5.0)


def test_jobs_poll_jitter_spans_configured_bounds() -> None:
    """Scale jitter linearly between min and max multipliers.

    Returns:
        None: Assertions verify jitter interpolation.

    Raises:
        AssertionError: Raised when jitter multiplier is outside bounds.
    """

    low = PollRetryStrategy(jitter_min_multiplier=0.5, jitter_max_multiplier=1.5, random_unit_interval_provider=lambda: 0.0)
    high = PollRetryStrategy(jitter_min_multiplier=0.5, jitter_max_multiplier=1.5, random_unit_interval_provider=lambda: 1.0)

    assert low.strategy_calculate_jitter_multiplier() == pytest.approx(0.5)
    assert high.strategy_calculate_jitter_multiplier() == pytest.approx(1.5)


def test_jobs_poll_jitter_rejects_out_of_range_provider() -> None:
    """Raise RuntimeError when random provider escapes the unit interval.

    Returns:
        None: Assertions verify provider validation.

    Raises:
        AssertionError: Raised when invalid provider output is accepted.
    """

    strategy = PollRetryStrategy(random_unit_interval_provider=lambda: 1.5)

    with pytest.raises(RuntimeError, match="random_unit_interval_provider"):
        strategy.strategy_calculate_wait_seconds(poll_index=0)


@pytest.mark.parametrize(
    "invalid_kwargs",
    [
        {"initial_wait_seconds": -1},
        {"initial_wait_seconds": 0, "backoff_base_seconds": 0},
        {"backoff_base_seconds": -1},
        {"max_backoff_seconds": 0},
        {"jitter_min_multiplier": 0},
        {"jitter_min_multiplier": 1.5, "jitter_max_multiplier": 1.0},
    ],
)
def test_jobs_poll_strategy_rejects_invalid_configuration(invalid_kwargs: dict[str, float]) -> None:
    """Reject negative or inverted schedule parameters at construction.

    Args:
        invalid_kwargs: Invalid constructor arguments.

    Returns:
        None: Assertions verify constructor validation.

    Raises:
        AssertionError: Raised when invalid configuration is accepted.
    """

    with pytest.raises(ValueError):
        PollRetryStrategy(**invalid_kwargs)


def test_jobs_poll_wait_rejects_negative_index() -> None:
    """Reject negative poll indexes.

    Returns:
        None: Assertions verify index validation.

    Raises:
        AssertionError: Raised when negative index is accepted.
    """

    with pytest.raises(ValueError, match="poll_index"):
        PollRetryStrategy().strategy_calculate_wait_seconds(poll_index=-1)


def test_jobs_poll_wait_is_positive_with_zero_backoff_base() -> None:
    """Keep a positive wait between polls even when backoff base is zero.

    Returns:
        None: Assertions verify wait floor prevents back-to-back polling.

    Raises:
        AssertionError: Raised when computed wait is not positive.
    """

    strategy = PollRetryStrategy(
        initial_wait_seconds=0.25,
        backoff_base_seconds=0,
        max_backoff_seconds=1,
        random_unit_interval_provider=lambda: 0.0,
    )

    assert all(strategy.strategy_calculate_wait_seconds(poll_index=index) == pytest.approx(0.25) for index in range(5))
