"""Redis-backed implementation of MemoryServiceClient."""

from __future__ import annotations

from typing import Any

from redis import Redis
from redis.exceptions import RedisError

from swapcache_core.interfaces.memory_service import BackendResponse, ResultCode
from swapcache_infra.serialization import dumps, loads


class RedisClient:
    """Redis driver; values are pickled so any payload round-trips."""

    def __init__(self, redis: Redis) -> None:  # type: ignore[type-arg]
        """Initialize with a redis-py client."""
        self._redis = redis

    @classmethod
    def from_url(cls, url: str, timeout: float | None = None) -> RedisClient:
        """Create a driver from a redis:// URL."""
        return cls(Redis.from_url(url, socket_timeout=timeout, socket_connect_timeout=timeout))

    def fetch(self, key: str) -> BackendResponse:
        """Read a key."""
        try:
            raw = self._redis.get(key)
        except RedisError as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        if raw is None:
            return BackendResponse(ResultCode.NOTFOUND)
        try:
            return BackendResponse(ResultCode.SUCCESS, value=loads(raw))
        except Exception as e:
            return BackendResponse(ResultCode.FAILURE, message=f"undecodable value: {e}")

    def store(self, key: str, value: Any, ttl: int) -> BackendResponse:  # noqa: ANN401
        """Write a key with an expiry in seconds."""
        try:
            stored = self._redis.set(name=key, value=dumps(value), ex=ttl)
        except RedisError as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        if not stored:
            return BackendResponse(ResultCode.NOTSTORED, message="SET returned no reply")
        return BackendResponse(ResultCode.SUCCESS)

    def delete(self, key: str) -> BackendResponse:
        """Delete a key."""
        try:
            count = self._redis.delete(key)
        except RedisError as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        return BackendResponse(ResultCode.SUCCESS if count else ResultCode.NOTFOUND)

    def flush(self) -> BackendResponse:
        """Flush the selected redis database."""
        try:
            self._redis.flushdb()
        except RedisError as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        return BackendResponse(ResultCode.SUCCESS)

    def close(self) -> None:
        """Close the connection pool."""
        self._redis.close()
