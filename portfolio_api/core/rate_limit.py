"""Rate limiting dependencies for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Design goals:
- Minimal coupling: routes depend on a dependency function only.
- Injectable: the limiter instance lives on ``app.state`` and is resolved
  through ``get_rate_limiter`` so tests can override it.
- One limiter, several budgets: each endpoint uses its own key namespace and
  its own limit/window from settings.

Caller identity is the first address in ``X-Forwarded-For``, then
``X-Real-IP``, then the shared ``"unknown"`` bucket.
"""

from __future__ import annotations

import logging
from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Request

from portfolio_api.adapters.rate_limit.base import AbstractRateLimiter
from portfolio_api.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from portfolio_api.core.config import RateLimitSettings, settings
from portfolio_api.core.errors import RateLimitAppError
from portfolio_api.core.logging import hash_identifier

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def build_rate_limiter(cfg: RateLimitSettings | None = None) -> AbstractRateLimiter:
    """Create the process-wide limiter stored on ``app.state``."""

    cfg = cfg or settings.rate_limit
    return InMemoryFixedWindowRateLimiter(
        max_entries=cfg.max_keys,
        sweep_interval_seconds=cfg.sweep_interval_seconds,
    )


def get_rate_limiter(request: Request) -> AbstractRateLimiter:
    """Return the limiter owned by the running application."""

    limiter = getattr(request.app.state, "rate_limiter", None)
    if limiter is None:
        limiter = build_rate_limiter()
        request.app.state.rate_limiter = limiter
    return limiter


def client_identity(request: Request) -> str:
    """Derive the rate limit identity of the caller.

    Args:
        request: FastAPI request.

    Returns:
        Client address string, or ``"unknown"`` when no header is present.
    """

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_CLIENT


def _rate_limit_headers(limit: int, remaining: int, reset_at: float, retry_after: int) -> dict[str, str]:
    return {
        "Retry-After": str(retry_after),
        "X-RateLimit-Limit": str(limit),
        "X-RateLimit-Remaining": str(remaining),
        "X-RateLimit-Reset": str(int(reset_at)),
    }


def rate_limit_dependency(
    scope: str,
    *,
    limit: Callable[[RateLimitSettings], int],
    window_seconds: Callable[[RateLimitSettings], float],
    message: str,
) -> Callable[..., Awaitable[None]]:
    """Build a dependency enforcing one endpoint's budget.

    Limits are read from settings on every call so runtime overrides apply.

    Args:
        scope: Key namespace, e.g. ``"chat"``.
        limit: Selector for the request budget in rate limit settings.
        window_seconds: Selector for the window length in rate limit settings.
        message: Client-facing message on denial.

    Returns:
        Async FastAPI dependency raising RateLimitAppError when exhausted.
    """

    async def enforce(
        request: Request,
        limiter: Annotated[AbstractRateLimiter, Depends(get_rate_limiter)],
    ) -> None:
        cfg = settings.rate_limit
        if not cfg.enabled:
            return

        key = f"{scope}:{client_identity(request)}"
        result = limiter.check_and_consume(
            key,
            limit=limit(cfg),
            window_seconds=window_seconds(cfg),
        )
        log_extra = {
            "scope": scope,
            "key_hash": hash_identifier(key),
            "limit": result.limit,
            "remaining": result.remaining,
        }

        if result.allowed:
            logger.debug("rate_limit.allowed", extra=log_extra)
            return

        retry_after = result.retry_after_seconds or 0
        logger.warning("rate_limit.exceeded", extra={**log_extra, "retry_after_s": retry_after})

        raise RateLimitAppError(
            code="rate_limited",
            message=message,
            headers=(
                _rate_limit_headers(result.limit, result.remaining, result.reset_at, retry_after)
                if cfg.include_headers
                else None
            ),
        )

    enforce.__name__ = f"enforce_{scope}_rate_limit"
    return enforce


enforce_chat_rate_limit = rate_limit_dependency(
    "chat",
    limit=lambda cfg: cfg.chat_requests,
    window_seconds=lambda cfg: cfg.chat_window_seconds,
    message="Too many requests. Please try again later.",
)

enforce_contact_rate_limit = rate_limit_dependency(
    "contact",
    limit=lambda cfg: cfg.contact_requests,
    window_seconds=lambda cfg: cfg.contact_window_seconds,
    message="Too many requests. Please wait a minute.",
)
