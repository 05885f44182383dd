"""
Rate limiting dependencies.

Fixed-window counters kept in process memory, keyed by scope and client
address. Limits come from Settings, so they can be tuned (or switched off
with RATE_LIMIT_ENABLED=false) without code changes.

Usage:
    @router.post("/login", dependencies=[Depends(rate_limit("auth"))])
    async def login(...): ...
"""

import time
from typing import Callable

from fastapi import Request

from shared.exceptions import RateLimitError

from ..dependencies import get_container

# scope -> (requests setting, window setting, message)
_RULES: dict[str, tuple[str, str, str]] = {
    "api": (
        "rate_limit_requests",
        "rate_limit_window",
        "Too many requests, please try again later",
    ),
    "auth": (
        "auth_rate_limit_requests",
        "auth_rate_limit_window",
        "Too many authentication attempts, please try again later",
    ),
    "password_reset": (
        "password_reset_rate_limit_requests",
        "password_reset_rate_limit_window",
        "Too many password reset attempts, please try again later",
    ),
}


class RateLimiter:
    """
    Counts hits per key in fixed windows.

    Expired windows are swept once more than ``max_keys`` keys are held,
    so memory stays bounded by the number of clients active in a window.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, max_keys: int = 10_000):
        self._clock = clock
        self._max_keys = max_keys
        # key -> (window start, hits, window length)
        self._windows: dict[str, tuple[float, int, int]] = {}

    def __len__(self) -> int:
        return len(self._windows)

    def hit(self, key: str, limit: int, window_seconds: int) -> bool:
        """
        Record a hit.

        Returns:
            False if the key has exceeded ``limit`` within the current window.
        """
        now = self._clock()
        started, count, _ = self._windows.get(key, (now, 0, window_seconds))
        if now - started >= window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count, window_seconds)
        if len(self._windows) > self._max_keys:
            self._prune(now)
        return count <= limit

    def reset(self) -> None:
        self._windows.clear()

    def _prune(self, now: float) -> None:
        expired = [
            key for key, (started, _, window) in self._windows.items()
            if now - started >= window
        ]
        for key in expired:
            del self._windows[key]


def rate_limit(scope: str) -> Callable:
    """Build a dependency enforcing the named limit."""
    requests_setting, window_setting, message = _RULES[scope]

    async def check(request: Request) -> None:
        container = get_container()
        settings = container.settings
        if not settings.rate_limit_enabled:
            return

        client = request.client.host if request.client else "unknown"
        allowed = container.rate_limiter.hit(
            f"{scope}:{client}",
            getattr(settings, requests_setting),
            getattr(settings, window_setting),
        )
        if not allowed:
            raise RateLimitError(message, code="RATE_LIMITED")

    return check
