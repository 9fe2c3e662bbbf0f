"""Integration test fixtures: live memcached and redis on localhost."""

from __future__ import annotations

import socket
import time
from collections.abc import Generator

import pytest

from swapcache_infra.adapters.memory_service import MemoryServiceAdapter
from swapcache_infra.drivers.memcached import reset_pools

# ---------------------------------------------------------------------------
# Service health checks (with retry for CI container start-up)
# ---------------------------------------------------------------------------


def _tcp_reachable(
    host: str,
    port: int,
    timeout: float = 1.0,
    retries: int = 3,
    delay: float = 1.0,
) -> bool:
    """Check if a TCP service is reachable, retrying on failure."""
    for attempt in range(retries):
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            if attempt < retries - 1:
                time.sleep(delay)
    return False


_memcached_up = _tcp_reachable("localhost", 11211)
_redis_up = _tcp_reachable("localhost", 6379)

require_memcached = pytest.mark.skipif(
    not _memcached_up,
    reason="memcached not reachable on localhost:11211",
)
require_redis = pytest.mark.skipif(
    not _redis_up,
    reason="Redis not reachable on localhost:6379",
)


# ---------------------------------------------------------------------------
# Adapter fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def memcached_adapter() -> Generator[MemoryServiceAdapter, None, None]:
    """Enabled memcached adapter, flushed before and after each test."""
    if not _memcached_up:
        pytest.skip("memcached not available")

    adapter = MemoryServiceAdapter(
        {
            "cache_enabled": True,
            "cache_handler": "memcached",
            "memcached_servers": [{"host": "localhost", "port": 11211}],
            "socket_timeout": 2.0,
        }
    )
    adapter.clear()
    yield adapter
    adapter.clear()
    adapter.close()
    reset_pools()


@pytest.fixture
def redis_adapter() -> Generator[MemoryServiceAdapter, None, None]:
    """Enabled redis adapter on test DB 1, flushed before and after each test."""
    if not _redis_up:
        pytest.skip("Redis not available")

    adapter = MemoryServiceAdapter(
        {
            "cache_enabled": True,
            "cache_handler": "redis",
            "redis_url": "redis://localhost:6379/1",
            "socket_timeout": 2.0,
        }
    )
    adapter.clear()
    yield adapter
    adapter.clear()
    adapter.close()
