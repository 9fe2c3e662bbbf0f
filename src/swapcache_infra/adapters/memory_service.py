"""Memory-service implementation of CacheAdapter (memcached or redis)."""

from __future__ import annotations

import warnings
from collections.abc import Mapping
from types import TracebackType
from typing import Any, Self

from swapcache_core.constants import MEMCACHED_HANDLER, REDIS_HANDLER
from swapcache_core.exceptions import BackendError, CacheConnectionError, InvalidKeyError
from swapcache_core.interfaces.memory_service import (
    BackendResponse,
    MemoryServiceClient,
    ResultCode,
)
from swapcache_core.models.item import CacheItem
from swapcache_core.models.options import CacheOptions
from swapcache_infra.observability.logging import get_logger
from swapcache_infra.serialization import derive_key

logger = get_logger("adapters.memory_service")


def create_memory_client(options: CacheOptions) -> MemoryServiceClient:
    """Build the driver named by ``options.cache_handler``."""
    try:
        if options.cache_handler == MEMCACHED_HANDLER:
            from swapcache_infra.drivers.memcached import MemcachedClient

            return MemcachedClient(
                servers=options.memcached_servers,
                pool=options.memcached_pool,
                compression=options.memcached_compression,
                consistent_hashing=options.memcached_consistent_hashing,
                timeout=options.socket_timeout,
            )
        if options.cache_handler == REDIS_HANDLER:
            from swapcache_infra.drivers.redis_driver import RedisClient

            return RedisClient.from_url(options.redis_url, timeout=options.socket_timeout)
    except (ImportError, ValueError, OSError) as e:
        msg = f"Cache: {options.cache_handler} not supported: {e}"
        raise CacheConnectionError(msg) from e

    msg = f"Cache: handler {options.cache_handler!r} is not a memory service"
    raise CacheConnectionError(msg)


def _driver_config(options: CacheOptions) -> tuple[Any, ...]:
    """Options that determine which backend a driver talks to."""
    return (
        options.cache_handler,
        tuple(options.memcached_servers),
        options.memcached_pool,
        options.memcached_compression,
        options.memcached_consistent_hashing,
        options.redis_url,
        options.socket_timeout,
    )


class MemoryServiceAdapter:
    """Cache stored in an external key-value memory service."""

    def __init__(
        self,
        options: CacheOptions | Mapping[str, Any] | None = None,
        client: MemoryServiceClient | None = None,
    ) -> None:
        """Connect immediately; pass ``client`` to bypass driver construction.

        An injected client is kept across reconnects; the caller owns it.
        """
        self._options = CacheOptions(cache_handler=MEMCACHED_HANDLER)
        self._client: MemoryServiceClient | None = client
        self._injected = client is not None
        self.connect(options)

    @property
    def options(self) -> CacheOptions:
        return self._options

    @property
    def enabled(self) -> bool:
        return self._options.cache_enabled

    @property
    def client(self) -> MemoryServiceClient:
        if self._client is None:
            msg = "MemoryServiceAdapter is not connected"
            raise CacheConnectionError(msg)
        return self._client

    def connect(self, options: CacheOptions | Mapping[str, Any] | None = None) -> Self:
        """Validate options and (re)build the driver when the backend changed."""
        previous = self._options
        if options is not None:
            if isinstance(options, Mapping) and "cache_handler" not in options:
                options = {**options, "cache_handler": MEMCACHED_HANDLER}
            self._options = CacheOptions.from_value(options)
        if (
            self._client is not None
            and not self._injected
            and _driver_config(previous) != _driver_config(self._options)
        ):
            self._client.close()
            self._client = None
        if self._client is None:
            self._client = create_memory_client(self._options)
        logger.debug(
            "memory_cache_connected",
            handler=self._options.cache_handler,
            enabled=self.enabled,
        )
        return self

    def _fail(self, operation: str, key: str | None, response: BackendResponse) -> BackendError:
        message = response.message or f"unexpected result code {response.code}"
        logger.error("cache_backend_error", operation=operation, key=key, error=message)
        return BackendError(operation, key, message)

    def get(self, key: str) -> CacheItem:
        """Fetch ``key`` from the backend."""
        if not key:
            msg = "Key must be a non-empty string"
            raise InvalidKeyError(msg)
        if not self.enabled:
            return CacheItem.miss(key)

        response = self.client.fetch(key)
        if response.ok:
            logger.debug("cache_hit", key=key)
            return CacheItem(key=key, value=response.value, found=True)
        if response.code is ResultCode.NOTFOUND:
            logger.debug("cache_miss", key=key)
            return CacheItem.miss(key)
        raise self._fail("get", key, response)

    def set(self, key: str | None, value: Any, ttl: int = 0) -> bool:  # noqa: ANN401
        """Store ``value`` for ``ttl`` seconds (0 means ``cache_time``).

        A ``None`` key falls back to a key derived from the serialized value.
        That fallback is deprecated.
        """
        if key is not None and not key:
            msg = "Key must be a non-empty string"
            raise InvalidKeyError(msg)
        if not self.enabled:
            return False

        if key is None:
            warnings.warn(
                "Calling set() without a key is deprecated; pass an explicit key",
                DeprecationWarning,
                stacklevel=2,
            )
            key = derive_key(value)

        expire = self._options.resolve_ttl(ttl)
        response = self.client.store(key, value, expire)
        if not response.ok:
            raise self._fail("set", key, response)
        logger.debug("cache_set", key=key, ttl=expire)
        return True

    def remove(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""
        response = self.client.delete(key)
        if response.code not in (ResultCode.SUCCESS, ResultCode.NOTFOUND):
            raise self._fail("remove", key, response)

    def clear(self) -> None:
        """Flush the whole backend."""
        response = self.client.flush()
        if response.code not in (ResultCode.SUCCESS, ResultCode.NOTFOUND):
            raise self._fail("clear", None, response)
        logger.info("cache_cleared", handler=self._options.cache_handler)

    def close(self) -> None:
        """Release the backend client."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._injected = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
