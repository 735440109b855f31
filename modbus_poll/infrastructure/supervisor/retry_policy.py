"""Retry pacing for supervisor setup attempts."""

from __future__ import annotations

from dataclasses import dataclass

from ...const import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_INITIAL_BACKOFF,
    DEFAULT_MAX_BACKOFF,
)
from ...domain.helpers.validators import ValidationError


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff between consecutive failed setup attempts.

    The default policy has no delay: a failed setup is retried right away.
    Setting initial_backoff above zero enables bounded exponential backoff.

    Attributes:
        initial_backoff: Delay before the first retry (seconds)
        max_backoff: Upper bound for any delay (seconds)
        multiplier: Growth factor per consecutive failure

    Example:
        >>> policy = RetryPolicy(initial_backoff=1.0, max_backoff=10.0)
        >>> [policy.delay_for(n) for n in range(1, 6)]
        [1.0, 2.0, 4.0, 8.0, 10.0]
    """

    initial_backoff: float = DEFAULT_INITIAL_BACKOFF
    max_backoff: float = DEFAULT_MAX_BACKOFF
    multiplier: float = DEFAULT_BACKOFF_MULTIPLIER

    def __post_init__(self) -> None:
        """Validate policy values.

        Raises:
            ValidationError: If any value is out of range
        """
        if self.initial_backoff < 0:
            raise ValidationError(
                f"initial_backoff must be >= 0, got {self.initial_backoff}"
            )
        if self.max_backoff < self.initial_backoff:
            raise ValidationError(
                f"max_backoff ({self.max_backoff}) must be >= "
                f"initial_backoff ({self.initial_backoff})"
            )
        if self.multiplier < 1:
            raise ValidationError(f"multiplier must be >= 1, got {self.multiplier}")

    @classmethod
    def immediate(cls) -> "RetryPolicy":
        """Policy that retries without any delay."""
        return cls(initial_backoff=0.0)

    @property
    def enabled(self) -> bool:
        """Whether any delay is ever applied."""
        return self.initial_backoff > 0

    def delay_for(self, consecutive_failures: int) -> float:
        """Delay before the next attempt after N consecutive failures.

        Args:
            consecutive_failures: Failures since the last successful setup

        Returns:
            Delay in seconds (0.0 when no failure happened or backoff is off)
        """
        if consecutive_failures <= 0 or not self.enabled:
            return 0.0
        delay = self.initial_backoff
        if self.multiplier == 1:
            return min(delay, self.max_backoff)
        for _ in range(consecutive_failures - 1):
            delay *= self.multiplier
            if delay >= self.max_backoff:
                return self.max_backoff
        return min(delay, self.max_backoff)
