"""Rate limiting adapters.

A small abstraction layer so the service can start with an in-memory limiter
and later move to a shared store without changing the API layer.
"""

from portfolio_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult
from portfolio_api.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "InMemoryFixedWindowRateLimiter",
    "RateLimitResult",
]
