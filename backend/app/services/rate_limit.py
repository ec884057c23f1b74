"""In-memory fixed-window rate limiter

One counter per key (client IP + route group). Single-process only; state is
lost on restart. A window restarts on the first request after it expires;
idle ones are swept every few minutes from check().
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float  # epoch seconds


class RateLimiter:
    """Fixed-window counter store

    Expired windows are swept from check() at most every `purge_interval`
    seconds, so idle keys do not pile up.
    """

    def __init__(self, clock: Callable[[], float] = time.time, purge_interval: float = 300.0) -> None:
        self._clock = clock
        self._windows: dict[str, tuple[int, float]] = {}  # key → (count, reset_at)
        self._lock = threading.Lock()
        self._purge_interval = purge_interval
        self._next_purge = clock() + purge_interval

    def check(self, key: str, max_requests: int, window_seconds: float) -> RateLimitResult:
        """Count one request for `key` and tell whether it is allowed"""
        now = self._clock()
        with self._lock:
            if now >= self._next_purge:
                self._purge_locked(now)
            count, reset_at = self._windows.get(key, (0, 0.0))
            if now > reset_at:
                count, reset_at = 0, now + window_seconds
            if count >= max_requests:
                return RateLimitResult(False, max_requests, 0, reset_at)
            count += 1
            self._windows[key] = (count, reset_at)
            return RateLimitResult(True, max_requests, max_requests - count, reset_at)

    def purge_expired(self) -> int:
        """Drop finished windows; returns how many were removed"""
        with self._lock:
            return self._purge_locked(self._clock())

    def _purge_locked(self, now: float) -> int:
        expired = [k for k, (_, reset_at) in self._windows.items() if now > reset_at]
        for k in expired:
            del self._windows[k]
        self._next_purge = now + self._purge_interval
        if expired:
            logger.debug("Rate limiter purged %d expired windows", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


def client_ip(headers, peer: str | None) -> str:
    """X-Forwarded-For (first hop) → X-Real-IP → socket peer → 'unknown'"""
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return peer or "unknown"
