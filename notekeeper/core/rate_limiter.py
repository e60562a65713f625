"""
API Rate Limiter.

Per-actor sliding-window rate limiting for the notes API.
Limits come from config/settings/security.yaml (rate_limiting.api).
Counters are in-memory and scoped to one application instance.
"""

import time
from collections import defaultdict
from collections.abc import Callable

from notekeeper.core.logging import get_logger

logger = get_logger(__name__)

WINDOW_SECONDS = 60


class RateLimitResult:
    """Result of a rate limit check."""

    def __init__(self, allowed: bool, retry_after_seconds: int = 0) -> None:
        self.allowed = allowed
        self.retry_after_seconds = retry_after_seconds


class ApiRateLimiter:
    """
    Per-actor rate limiter over a one-minute sliding window.

    Args:
        requests_per_minute: Maximum requests an actor may make per window
        clock: Monotonic time source, replaceable in tests
    """

    def __init__(
        self,
        requests_per_minute: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.requests_per_minute = requests_per_minute
        self._clock = clock
        self._requests: dict[str, list[float]] = defaultdict(list)

    def check(self, actor_id: str) -> RateLimitResult:
        """
        Record a request for this actor if it is within the limit.

        Denied requests are not recorded.
        """
        now = self._clock()
        cutoff = now - WINDOW_SECONDS
        window = [ts for ts in self._requests[actor_id] if ts > cutoff]
        self._requests[actor_id] = window

        if len(window) >= self.requests_per_minute:
            retry_after = int(WINDOW_SECONDS - (now - min(window))) + 1
            logger.warning(
                "Rate limit exceeded",
                extra={"actor_id": actor_id, "limit": self.requests_per_minute},
            )
            return RateLimitResult(allowed=False, retry_after_seconds=retry_after)

        window.append(now)
        return RateLimitResult(allowed=True)
