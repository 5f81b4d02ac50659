"""Sliding-window rate limiting for the public auth endpoints, kept in memory."""

import time
from dataclasses import dataclass, field
import logging

from fastapi import HTTPException, Request, status

from app.core.config import settings


logger = logging.getLogger("kupipodaridai.rate_limit")

MAX_ENTRIES = 10000
CLEANUP_INTERVAL = 100


@dataclass
class RateLimitEntry:
    timestamps: list[float] = field(default_factory=list)
    last_access: float = field(default_factory=time.time)


class InMemoryRateLimiter:
    """Per-key sliding window; stale keys are swept every CLEANUP_INTERVAL hits."""

    def __init__(self):
        self._entries: dict[str, RateLimitEntry] = {}
        self._request_count = 0

    def _sweep(self, max_age_seconds: int) -> None:
        cutoff = time.time() - max_age_seconds
        stale_keys = [
            key for key, entry in self._entries.items()
            if entry.last_access < cutoff
        ]
        for key in stale_keys:
            del self._entries[key]

        if len(self._entries) > MAX_ENTRIES:
            oldest = sorted(self._entries.items(), key=lambda x: x[1].last_access)
            overflow = len(self._entries) - MAX_ENTRIES + 100
            for key, _ in oldest[:overflow]:
                del self._entries[key]
            logger.warning("Rate limit entries exceeded %d, dropped %d", MAX_ENTRIES, overflow)

    def is_allowed(self, key: str, max_requests: int, window_seconds: int) -> tuple[bool, int]:
        """
        Check if request is allowed under rate limit.

        Returns:
            tuple[bool, int]: (is_allowed, retry_after_seconds)
        """
        now = time.time()
        entry = self._entries.setdefault(key, RateLimitEntry())
        entry.last_access = now
        entry.timestamps = [ts for ts in entry.timestamps if ts > now - window_seconds]

        if len(entry.timestamps) >= max_requests:
            retry_after = int(min(entry.timestamps) + window_seconds - now) + 1
            return False, max(1, retry_after)

        entry.timestamps.append(now)
        self._request_count += 1
        if self._request_count % CLEANUP_INTERVAL == 0:
            self._sweep(window_seconds * 2)
        return True, 0

    def reset(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)


limiter = InMemoryRateLimiter()


def get_client_identifier(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    if request.client:
        return f"ip:{request.client.host}"
    return f"ua:{hash(request.headers.get('User-Agent', ''))}"


def check_rate_limit(
    request: Request,
    max_requests: int | None = None,
    window_seconds: int | None = None,
    key_suffix: str = "",
) -> None:
    """Raise 429 once the client exceeds the window for this path."""
    if not settings.rate_limit_enabled:
        return

    client_id = get_client_identifier(request)
    path = request.url.path
    allowed, retry_after = limiter.is_allowed(
        f"{client_id}:{path}:{key_suffix}",
        max_requests or settings.rate_limit_requests,
        window_seconds or settings.rate_limit_window_seconds,
    )
    if not allowed:
        logger.warning(
            "Rate limit exceeded for %s on %s, retry_after=%ds",
            client_id,
            path,
            retry_after,
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Слишком много запросов. Повторите через {retry_after} с.",
            headers={"Retry-After": str(retry_after)},
        )
