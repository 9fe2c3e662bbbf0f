"""Abstract cache adapter interface."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, Self, runtime_checkable

from swapcache_core.models.item import CacheItem
from swapcache_core.models.options import CacheOptions


@runtime_checkable
class CacheAdapter(Protocol):
    """Uniform cache contract. Backends are swapped without touching call sites."""

    def connect(self, options: CacheOptions | Mapping[str, Any] | None = None) -> Self:
        """(Re)initialize backend resources from configuration."""
        ...

    def get(self, key: str) -> CacheItem:
        """Look up ``key``; a miss is a CacheItem with found=False."""
        ...

    def set(self, key: str, value: Any, ttl: int = 0) -> bool:  # noqa: ANN401
        """Store ``value`` under ``key``; ttl=0 means the adapter default."""
        ...

    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""
        ...

    def clear(self) -> None:
        """Delete every entry owned by this adapter."""
        ...

    def close(self) -> None:
        """Release backend handles."""
        ...
