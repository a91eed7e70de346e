"""In-memory fixed-window rate limiter.

Notes:
- Per-process only: running multiple workers or instances multiplies the
  effective limit.
- Thread-safe: a lock guards the read-modify-write of each entry.
- Bounded: expired entries are swept when a new key arrives at capacity or
  once per sweep interval. Past ``max_entries`` the least recently used key
  is evicted.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from portfolio_api.adapters.rate_limit.base import AbstractRateLimiter, RateLimitResult

logger = logging.getLogger(__name__)


@dataclass
class _WindowState:
    count: int
    reset_at: float


class InMemoryFixedWindowRateLimiter(AbstractRateLimiter):
    """Fixed-window counter per key.

    A key's window opens on its first admitted request and covers the
    half-open interval ``[opened_at, opened_at + window)``. A request at or
    after ``reset_at`` starts a fresh window with a count of one.
    """

    def __init__(
        self,
        *,
        max_entries: int | None = 10_000,
        sweep_interval_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            max_entries: Maximum tracked keys (None for unbounded).
            sweep_interval_seconds: Minimum time between full sweeps
                triggered by new keys while below capacity.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If max_entries or sweep_interval_seconds is not positive.
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be > 0")

        self._max_entries = max_entries
        self._sweep_interval = sweep_interval_seconds
        self._clock = clock
        self._lock = threading.RLock()
        self._state_by_key: OrderedDict[str, _WindowState] = OrderedDict()
        self._evictions = 0
        self._last_sweep = float("-inf")

    def __len__(self) -> int:
        with self._lock:
            return len(self._state_by_key)

    def check_and_consume(
        self,
        key: str,
        *,
        limit: int,
        window_seconds: float,
    ) -> RateLimitResult:
        """Admit or deny one request for ``key``, mutating state when admitted.

        Raises:
            ValueError: If key is empty or limit/window are invalid.
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")

        now = self._clock()

        with self._lock:
            state = self._state_by_key.get(key)

            if state is None or now >= state.reset_at:
                state = _WindowState(count=1, reset_at=now + window_seconds)
                self._store_locked(key, state, now)
                return RateLimitResult(
                    allowed=True,
                    limit=limit,
                    remaining=limit - 1,
                    reset_at=state.reset_at,
                    retry_after_seconds=None,
                )

            self._state_by_key.move_to_end(key)

            if state.count >= limit:
                return RateLimitResult(
                    allowed=False,
                    limit=limit,
                    remaining=0,
                    reset_at=state.reset_at,
                    retry_after_seconds=max(0, int(math.ceil(state.reset_at - now))),
                )

            state.count += 1
            return RateLimitResult(
                allowed=True,
                limit=limit,
                remaining=max(0, limit - state.count),
                reset_at=state.reset_at,
                retry_after_seconds=None,
            )

    def sweep(self) -> int:
        """Drop every entry whose window has ended.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            return self._sweep_locked(self._clock())

    def stats(self) -> dict[str, int | None]:
        with self._lock:
            return {
                "entries": len(self._state_by_key),
                "max_entries": self._max_entries,
                "evictions": self._evictions,
            }

    def _store_locked(self, key: str, state: _WindowState, now: float) -> None:
        if key not in self._state_by_key and self._sweep_due_locked(now):
            self._sweep_locked(now)
        self._state_by_key[key] = state
        self._state_by_key.move_to_end(key)

        if self._max_entries is None:
            return
        while len(self._state_by_key) > self._max_entries:
            self._state_by_key.popitem(last=False)
            self._evictions += 1
            logger.debug("rate_limit.evicted", extra={"entries": len(self._state_by_key)})

    def _sweep_due_locked(self, now: float) -> bool:
        if self._max_entries is not None and len(self._state_by_key) >= self._max_entries:
            return True
        return now - self._last_sweep >= self._sweep_interval

    def _sweep_locked(self, now: float) -> int:
        self._last_sweep = now
        expired = [k for k, s in self._state_by_key.items() if now >= s.reset_at]
        for key in expired:
            del self._state_by_key[key]
        return len(expired)
