"""Rate limiter interface and result type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single ``consume`` call.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Max requests per window.
        remaining: Requests still available in the window (0 when blocked).
        reset_at: UNIX epoch seconds when the oldest recorded request leaves
            the window and frees a slot.
        retry_after_seconds: Suggested wait in seconds when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after_seconds: int | None


class AbstractRateLimiter(ABC):
    """Interface for rate limiters."""

    @abstractmethod
    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Consume budget for ``key``.

        Args:
            key: Client identifier (e.g. ``ip:10.0.0.1``).
            cost: Units to consume (default 1).

        Returns:
            RateLimitResult describing whether it was allowed.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Forget all recorded requests."""
        raise NotImplementedError
