"""Rate limiting adapters.

The HTTP layer talks to ``AbstractRateLimiter`` only; the in-memory sliding
window implementation can be replaced by a shared store later.
"""
