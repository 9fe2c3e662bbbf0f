"""Domain models for swapcache."""

from swapcache_core.models.item import CacheItem
from swapcache_core.models.options import CacheHandler, CacheOptions, MemcachedServer

__all__ = [
    "CacheHandler",
    "CacheItem",
    "CacheOptions",
    "MemcachedServer",
]
