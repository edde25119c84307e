"""Sliding-window client-side rate limiting."""

from __future__ import annotations

import math
import time
from collections import deque
from collections.abc import Callable

from .config import RATE_LIMIT_WINDOW_SECONDS
from .errors import AuthErrorType, WordPressError
from .models import RateLimitPolicy


class RateLimiter:
    """Bound outbound requests to ``requests_per_minute`` per trailing window.

    check_limit() prunes, compares and records without awaiting, so under
    asyncio no other task can interleave between the check and the append.
    Callers running real threads must wrap it in a lock.

    Args:
        policy: Request budget.
        window_seconds: Width of the sliding window.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        policy: RateLimitPolicy,
        window_seconds: float = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._policy = policy
        self._window = window_seconds
        self._clock = clock
        self._requests: deque[float] = deque()

    @property
    def limit(self) -> int:
        return self._policy.requests_per_minute

    @property
    def burst_limit(self) -> int:
        return self._policy.burst_limit

    def _prune(self, now: float) -> None:
        window_start = now - self._window
        while self._requests and self._requests[0] <= window_start:
            self._requests.popleft()

    def check_limit(self) -> None:
        """Admit one request or raise.

        Raises:
            WordPressError: RATE_LIMITED, stating the seconds until the
                oldest request leaves the window.
        """
        now = self._clock()
        self._prune(now)

        if len(self._requests) >= self.limit:
            wait = self._window - (now - self._requests[0])
            raise WordPressError(
                AuthErrorType.RATE_LIMITED,
                f"Rate limit exceeded. Please wait {math.ceil(wait)} seconds.",
            )

        self._requests.append(now)

    def remaining(self) -> int:
        """Requests still admissible in the current window."""
        self._prune(self._clock())
        return max(self.limit - len(self._requests), 0)
