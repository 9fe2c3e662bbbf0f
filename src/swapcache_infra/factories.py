"""Factory functions for creating cache adapters from configuration."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from swapcache_core.config.settings import CacheSettings
from swapcache_core.constants import FILE_HANDLER
from swapcache_core.interfaces.cache import CacheAdapter
from swapcache_core.models.options import CacheOptions
from swapcache_infra.observability.logging import configure_logging


def create_cache_adapter(
    config: CacheSettings | CacheOptions | Mapping[str, Any],
) -> CacheAdapter:
    """Create the adapter selected by ``cache_handler``.

    Returns ``FileAdapter`` for ``"file"`` and ``MemoryServiceAdapter`` for
    ``"memcached"`` and ``"redis"``. Settings with ``log_enabled`` also get
    swapcache log output configured.
    """
    if isinstance(config, CacheSettings):
        if config.log_enabled:
            configure_logging(config)
        options = config.to_options()
    else:
        options = CacheOptions.from_value(config)

    if options.cache_handler == FILE_HANDLER:
        from swapcache_infra.adapters.file_adapter import FileAdapter

        return FileAdapter(options)

    from swapcache_infra.adapters.memory_service import MemoryServiceAdapter

    return MemoryServiceAdapter(options)
