"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: one lock guards the whole request history.
"""

from __future__ import annotations

import math
import threading
import time
from collections import deque
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter that remembers the timestamp of every allowed request.

    A request is allowed when fewer than ``limit`` requests were recorded for
    the same key during the last ``window_seconds``. Rejected requests are
    not recorded, so a client that keeps retrying regains access as soon as
    its oldest request slides out of the window.

    Keys whose history has fully expired are dropped when touched, and a
    periodic sweep removes keys of clients that stopped sending requests.
    """

    def __init__(
        self,
        *,
        limit: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
        sweep_interval_seconds: float | None = None,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum number of allowed units per window.
            window_seconds: Length of the sliding window in seconds.
            clock: Time source returning UNIX time in seconds.
            sweep_interval_seconds: How often idle keys are swept; defaults
                to the window length.

        Raises:
            ValueError: If limit or window_seconds are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock
        self._sweep_interval = sweep_interval_seconds or float(window_seconds)
        self._lock = threading.RLock()
        self._history: dict[str, deque[float]] = {}
        self._last_sweep = clock()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    def tracked_keys(self) -> int:
        """Number of keys that currently hold request history."""
        with self._lock:
            return len(self._history)

    def _prune(self, history: deque[float], now: float) -> None:
        cutoff = now - self._window_seconds
        while history and history[0] <= cutoff:
            history.popleft()

    def _sweep_locked(self, now: float) -> None:
        """Drop every key whose history is entirely outside the window."""
        for key in list(self._history):
            history = self._history[key]
            self._prune(history, now)
            if not history:
                del self._history[key]
        self._last_sweep = now

    def sweep(self) -> None:
        """Drop idle keys immediately."""
        with self._lock:
            self._sweep_locked(self._clock())

    def consume(self, key: str, *, cost: int = 1) -> RateLimitResult:
        """Check the key's recent history and record the request if allowed.

        Args:
            key: Unique identifier for rate limiting (e.g. client IP).
            cost: Units to consume (default 1).

        Returns:
            RateLimitResult with allowance decision and metadata.

        Raises:
            ValueError: If key is empty or cost is invalid.
        """
        if cost < 1:
            raise ValueError("cost must be >= 1")
        if not key:
            raise ValueError("key must be a non-empty string")

        now = self._clock()

        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep_locked(now)

            history = self._history.get(key)
            if history is not None:
                self._prune(history, now)

            used = len(history) if history else 0

            if used + cost > self._limit:
                if not history:
                    self._history.pop(key, None)
                oldest = history[0] if history else now
                reset_at = oldest + self._window_seconds
                return RateLimitResult(
                    allowed=False,
                    limit=self._limit,
                    remaining=max(0, self._limit - used),
                    reset_at=int(math.ceil(reset_at)),
                    retry_after_seconds=max(1, int(math.ceil(reset_at - now))),
                )

            if history is None:
                history = deque()
                self._history[key] = history
            history.extend([now] * cost)

            return RateLimitResult(
                allowed=True,
                limit=self._limit,
                remaining=max(0, self._limit - len(history)),
                reset_at=int(math.ceil(history[0] + self._window_seconds)),
                retry_after_seconds=None,
            )

    def reset(self) -> None:
        with self._lock:
            self._history.clear()
            self._last_sweep = self._clock()
