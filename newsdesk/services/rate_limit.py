from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Protocol

import redis

_LOG = logging.getLogger("newsdesk.rate_limit")


@dataclass
class RateLimitResult:
    allowed: bool
    retry_after_seconds: int
    current_value: int


class RateLimiter(Protocol):
    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        ...


class InMemoryRateLimiter:
    def __init__(self, *, sweep_interval_seconds: float = 1.0, clock: Callable[[], datetime] | None = None):
        self._data: dict[str, tuple[int, datetime]] = {}
        self._lock = Lock()
        self._sweep_interval = timedelta(seconds=max(float(sweep_interval_seconds), 0.0))
        self._next_sweep: datetime | None = None
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _sweep_expired(self, now: datetime) -> None:
        # Caller holds the lock.
        if self._next_sweep is not None and now < self._next_sweep:
            return
        expired = [k for k, (_, expires_at) in self._data.items() if expires_at <= now]
        for k in expired:
            del self._data[k]
        self._next_sweep = now + self._sweep_interval

    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        now = self._clock()
        with self._lock:
            self._sweep_expired(now)
            count, expires_at = self._data.get(key, (0, now))
            if expires_at <= now:
                count = 0
                expires_at = now + timedelta(seconds=max(int(window_seconds), 1))
            count += 1
            self._data[key] = (count, expires_at)
            retry_after = max(0, int((expires_at - now).total_seconds()))
        return RateLimitResult(allowed=count <= limit, retry_after_seconds=retry_after, current_value=count)

    def key_count(self) -> int:
        with self._lock:
            return len(self._data)


class RedisRateLimiter:
    def __init__(self, client: redis.Redis):
        self.client = client

    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitResult:
        count = int(self.client.incr(key))
        if count == 1:
            self.client.expire(key, int(max(window_seconds, 1)))
        ttl = int(self.client.ttl(key))
        if ttl < 0:
            ttl = int(max(window_seconds, 1))
        return RateLimitResult(allowed=count <= limit, retry_after_seconds=ttl, current_value=count)


def build_rate_limiter(redis_url: str | None) -> RateLimiter:
    if not str(redis_url or "").strip():
        return InMemoryRateLimiter()
    try:
        client = redis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=0.4,
            socket_connect_timeout=0.4,
        )
        client.ping()
        return RedisRateLimiter(client)
    except redis.RedisError:
        _LOG.warning("Redis limiter unavailable; fallback to in-memory limiter")
        return InMemoryRateLimiter()
