"""pymemcache-backed implementation of MemoryServiceClient."""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from typing import Any

from pymemcache.client.hash import HashClient
from pymemcache.client.rendezvous import RendezvousHash
from pymemcache.exceptions import MemcacheError
from pymemcache.serde import CompressedSerde, pickle_serde

from swapcache_core.interfaces.memory_service import BackendResponse, ResultCode
from swapcache_core.models.options import MemcachedServer
from swapcache_infra.observability.logging import get_logger

logger = get_logger("drivers.memcached")

_MISSING = object()

# Named pools shared by every driver created with the same memcached_pool id
_POOLS: dict[str, HashClient] = {}


class ModuloHash:
    """Non-consistent node picker: ``hash(key) % len(nodes)``.

    Implements the hasher interface HashClient expects
    (add_node / remove_node / get_node).
    """

    def __init__(self) -> None:
        self.nodes: list[str] = []

    def add_node(self, node: str) -> None:
        if node not in self.nodes:
            self.nodes.append(node)

    def remove_node(self, node: str) -> None:
        if node in self.nodes:
            self.nodes.remove(node)

    def get_node(self, key: str | bytes) -> str | None:
        if not self.nodes:
            return None
        raw = key.encode() if isinstance(key, str) else key
        return self.nodes[zlib.crc32(raw) % len(self.nodes)]


def _build_client(
    compression: bool,
    consistent_hashing: bool,
    timeout: float | None,
) -> HashClient:
    serde = CompressedSerde(serde=pickle_serde) if compression else pickle_serde
    hasher = RendezvousHash if consistent_hashing else ModuloHash
    return HashClient(
        [],
        hasher=hasher,
        serde=serde,
        connect_timeout=timeout,
        timeout=timeout,
        default_noreply=False,
        # Every call reaches a server; a failure never comes back as the default value
        retry_attempts=0,
        dead_timeout=0,
    )


class MemcachedClient:
    """Memcached driver translating pymemcache results into result codes."""

    def __init__(
        self,
        servers: Sequence[MemcachedServer] = (),
        pool: str | None = None,
        compression: bool = False,
        consistent_hashing: bool = True,
        timeout: float | None = None,
        client: HashClient | None = None,
    ) -> None:
        """Create or reuse a HashClient and register the server list.

        Servers are only added when the client has none yet, so reconnecting
        to a named pool never duplicates them.
        """
        self._pool = pool
        if client is not None:
            self._client = client
        elif pool is None:
            self._client = _build_client(compression, consistent_hashing, timeout)
        else:
            if pool not in _POOLS:
                _POOLS[pool] = _build_client(compression, consistent_hashing, timeout)
            self._client = _POOLS[pool]

        if not self._client.clients:
            for server in servers:
                self._client.add_server(*server.as_tuple())
                logger.debug("memcached_server_added", host=server.host, port=server.port)

    @property
    def pooled(self) -> bool:
        return self._pool is not None

    @property
    def server_count(self) -> int:
        return len(self._client.clients)

    def fetch(self, key: str) -> BackendResponse:
        """Read a key; a sentinel default distinguishes misses from stored None."""
        try:
            value = self._client.get(key, default=_MISSING)
        except (MemcacheError, OSError) as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        if value is _MISSING:
            return BackendResponse(ResultCode.NOTFOUND)
        return BackendResponse(ResultCode.SUCCESS, value=value)

    def store(self, key: str, value: Any, ttl: int) -> BackendResponse:  # noqa: ANN401
        """Write a key with an expiry in seconds."""
        try:
            stored = self._client.set(key, value, expire=ttl, noreply=False)
        except (MemcacheError, OSError) as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        if not stored:
            return BackendResponse(ResultCode.NOTSTORED, message="item not stored")
        return BackendResponse(ResultCode.SUCCESS)

    def delete(self, key: str) -> BackendResponse:
        """Delete a key."""
        try:
            deleted = self._client.delete(key, noreply=False)
        except (MemcacheError, OSError) as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        return BackendResponse(ResultCode.SUCCESS if deleted else ResultCode.NOTFOUND)

    def flush(self) -> BackendResponse:
        """Flush every server in the pool."""
        try:
            self._client.flush_all(noreply=False)
        except (MemcacheError, OSError) as e:
            return BackendResponse(ResultCode.FAILURE, message=str(e))
        return BackendResponse(ResultCode.SUCCESS)

    def close(self) -> None:
        """Close connections; pooled clients stay open for their other users."""
        if self._pool is None:
            self._client.close()


def reset_pools() -> None:
    """Close and forget every named pool."""
    for client in _POOLS.values():
        client.close()
    _POOLS.clear()
