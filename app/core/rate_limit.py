"""Per-client rate limiting middleware.

Wires the rate limiting adapter into the HTTP layer. Every request consumes
one unit from the budget of its client IP; once the budget for the sliding
window is spent the request is answered with 429 before reaching a route.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request, Response, status

from app.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from app.core.config import settings
from app.core.exception_handlers import error_response

logger = logging.getLogger(__name__)


_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return the process-wide rate limiter instance.

    The instance is cached in-module to keep state across requests and is
    rebuilt when the configured limit or window changes.

    Returns:
        AbstractRateLimiter: Configured limiter instance.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_seconds,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemorySlidingWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_seconds=settings.app.rate_limit_window_seconds,
        )
        _limiter_config = config

    return _limiter


def client_key(request: Request) -> str:
    """Build the limiter key (client IP) for the current request."""

    client_host = request.client.host if request.client else "unknown"
    return f"ip:{client_host}"


def _hash_key(key: str) -> str:
    """Hash the limiter key so client addresses stay out of the logs."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def _rate_limit_headers(result: RateLimitResult) -> dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
    }
    if not result.allowed:
        headers["Retry-After"] = str(result.retry_after_seconds or 0)
        headers["X-RateLimit-Reset"] = str(result.reset_at)
    return headers


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """HTTP middleware enforcing the per-client request budget.

    Args:
        request: The incoming HTTP request.
        call_next: The next middleware/route handler in the stack.

    Returns:
        The downstream response, or a 429 error response when the client
        exceeded its budget.
    """

    if not settings.app.rate_limit_enabled:
        return await call_next(request)

    key = client_key(request)
    result = get_rate_limiter().consume(key)
    include_headers = settings.app.rate_limit_include_headers

    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "key_hash": _hash_key(key),
                "limit": result.limit,
                "remaining": result.remaining,
            },
        )
        response = await call_next(request)
        if include_headers:
            response.headers.update(_rate_limit_headers(result))
        return response

    retry_after = result.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": _hash_key(key),
            "limit": result.limit,
            "window_s": settings.app.rate_limit_window_seconds,
            "retry_after_s": retry_after,
            "path": request.url.path,
        },
    )

    return error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        code="rate_limit_exceeded",
        message="Rate limit exceeded. Please try again later.",
        details={"retry_after": retry_after},
        headers=_rate_limit_headers(result) if include_headers else None,
    )
