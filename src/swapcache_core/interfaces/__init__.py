"""Public interface re-exports for swapcache_core."""

from swapcache_core.interfaces.cache import CacheAdapter
from swapcache_core.interfaces.memory_service import (
    BackendResponse,
    MemoryServiceClient,
    ResultCode,
)

__all__ = [
    "BackendResponse",
    "CacheAdapter",
    "MemoryServiceClient",
    "ResultCode",
]
