"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the in-process table can be swapped for a shared store (e.g. Redis) when
the site runs on more than one instance.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single check-and-consume call.

    Attributes:
        allowed: Whether the request may proceed.
        limit: Max requests per window for this call.
        remaining: Requests left in the current window (0 when blocked).
        reset_at: UNIX epoch seconds at which the caller's window ends.
        retry_after_seconds: Whole seconds until the window ends, when blocked.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after_seconds: int | None

    def __bool__(self) -> bool:
        return self.allowed


class AbstractRateLimiter(ABC):
    """Interface for per-key admission control."""

    @abstractmethod
    def check_and_consume(
        self,
        key: str,
        *,
        limit: int,
        window_seconds: float,
    ) -> RateLimitResult:
        """Admit or deny one request for ``key``.

        Args:
            key: Non-empty caller identity (e.g. ``"chat:203.0.113.7"``).
            limit: Maximum admitted requests per window.
            window_seconds: Window length, starting at the first admitted request.

        Returns:
            RateLimitResult describing whether the request was admitted.
        """
        raise NotImplementedError
