"""Shared constants for swapcache."""

from __future__ import annotations

# Default entry lifetime in seconds; a configured cache_time of 0 falls back to this
DEFAULT_CACHE_TIME = 86400

# Permission bits applied to every file written by the file adapter
CACHE_FILE_MODE = 0o644

DEFAULT_MEMCACHED_PORT = 11211
DEFAULT_REDIS_URL = "redis://localhost:6379/0"

# Adapter selectors accepted in the cache_handler option
FILE_HANDLER = "file"
MEMCACHED_HANDLER = "memcached"
REDIS_HANDLER = "redis"
