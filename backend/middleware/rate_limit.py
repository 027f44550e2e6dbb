"""
In-memory rate limiting for login attempts.

Counts live in the process; a multi-instance deployment needs a shared store.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime, timedelta


class RateLimiter:
    """
    Sliding-window request counter.

    Tracks request timestamps per key (usually "login:<ip>").
    """

    def __init__(self):
        self._requests: dict[str, list[datetime]] = defaultdict(list)

    def check_rate_limit(self, key: str, max_requests: int, window_minutes: int = 15) -> bool:
        """
        Record a request for key unless the window is already full.

        Args:
            key: Identifier to rate limit
            max_requests: Maximum requests allowed in the window
            window_minutes: Window length in minutes

        Returns:
            True if under the limit, False if limit exceeded
        """
        now = datetime.now(UTC)
        cutoff = now - timedelta(minutes=window_minutes)

        recent = [ts for ts in self._requests[key] if ts > cutoff]
        if len(recent) >= max_requests:
            self._requests[key] = recent
            return False

        recent.append(now)
        self._requests[key] = recent
        return True

    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when none is given."""
        if key is None:
            self._requests.clear()
        else:
            self._requests.pop(key, None)

    def cleanup_old_entries(self, max_age_hours: int = 2) -> None:
        """Drop timestamps older than max_age_hours and empty keys."""
        cutoff = datetime.now(UTC) - timedelta(hours=max_age_hours)
        for key in list(self._requests.keys()):
            self._requests[key] = [ts for ts in self._requests[key] if ts > cutoff]
            if not self._requests[key]:
                del self._requests[key]


# Global rate limiter instance
rate_limiter = RateLimiter()
