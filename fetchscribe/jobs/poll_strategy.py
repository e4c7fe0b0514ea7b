"""Bounded poll schedule for remote job status checks."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable


@dataclass(frozen=True)
class PollRetryStrategy:
    """Immutable poll schedule config and calculation helpers.

    Attributes:
        initial_wait_seconds: Delay floor between status polls; always positive so polls never spin.
        backoff_base_seconds: Base delay for exponential backoff.
        max_backoff_seconds: Exponential delay cap before jitter.
        jitter_min_multiplier: Minimum jitter multiplier.
        jitter_max_multiplier: Maximum jitter multiplier.
        random_unit_interval_provider: Provider returning value in [0.0, 1.0].
    """

    initial_wait_seconds: float = 1.0
    backoff_base_seconds: float = 2.0
    max_backoff_seconds: float = 30.0
    jitter_min_multiplier: float = 0.5
    jitter_max_multiplier: float = 1.5
    random_unit_interval_provider: Callable[[], float] = field(default=random.random, compare=False)

    def __post_init__(self) -> None:
        if self.initial_wait_seconds <= 0:
            raise ValueError("initial_wait_seconds must be > 0")
        if self.backoff_base_seconds < 0:
            raise ValueError("backoff_base_seconds must be >= 0")
        if self.max_backoff_seconds <= 0:
            raise ValueError("max_backoff_seconds must be > 0")
        if self.jitter_min_multiplier <= 0:
            raise ValueError("jitter_min_multiplier must be > 0")
        if self.jitter_max_multiplier < self.jitter_min_multiplier:
            raise ValueError("jitter_max_multiplier must be >= jitter_min_multiplier")

    def strategy_calculate_wait_seconds(self, poll_index: int) -> float:
        """Calculate exponential wait with cap, jitter and initial floor.

        Args:
            poll_index: Zero-based index of the poll that just returned RUNNING.

        Returns:
            float: Computed wait seconds before the next poll.

        Raises:
            ValueError: Raised when poll index is negative.
            RuntimeError: Raised when jitter provider returns out-of-range value.
        """

        if poll_index < 0:
            raise ValueError("poll_index must be >= 0")

        # exponent capped so large indexes cannot overflow float math
        backoff_seconds = self.backoff_base_seconds * (2 ** min(poll_index, 32))
        capped_backoff_seconds = min(backoff_seconds, self.max_backoff_seconds)
        jittered_backoff_seconds = capped_backoff_seconds * self.strategy_calculate_jitter_multiplier()
        return max(float(self.initial_wait_seconds), float(jittered_backoff_seconds))

    def strategy_calculate_jitter_multiplier(self) -> float:
        """Return jitter multiplier using configured min/max bounds.

        Returns:
            float: Jitter multiplier value.

        Raises:
            RuntimeError: Raised when jitter source returns value outside [0.0, 1.0].
        """

        random_ratio = float(self.random_unit_interval_provider())
        if random_ratio < 0.0 or random_ratio > 1.0:
            raise RuntimeError("random_unit_interval_provider must return a value in [0.0, 1.0]")

        jitter_span = self.jitter_max_multiplier - self.jitter_min_multiplier
        return self.jitter_min_multiplier + (random_ratio * jitter_span)
