"""Adapter options shared by every cache backend."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from swapcache_core.constants import (
    DEFAULT_CACHE_TIME,
    DEFAULT_MEMCACHED_PORT,
    DEFAULT_REDIS_URL,
)

CacheHandler = Literal["file", "memcached", "redis"]


class MemcachedServer(BaseModel):
    """One host/port entry of a memcached server list."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1, description="Server hostname or IP")
    port: int = Field(default=DEFAULT_MEMCACHED_PORT, ge=1, le=65535, description="TCP port")

    def as_tuple(self) -> tuple[str, int]:
        return (self.host, self.port)


class CacheOptions(BaseModel):
    """Validated adapter configuration.

    Every adapter composes one of these instead of re-implementing the
    enable flag and TTL fallback. Unknown keys are ignored so a single
    options mapping can be shared between backends.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    cache_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("cache_enabled", "cache_service"),
        description="When False, get/set are no-ops that never touch the backend",
    )
    cache_time: int = Field(
        default=DEFAULT_CACHE_TIME,
        ge=0,
        description="Default entry lifetime in seconds (0 means the built-in default)",
    )
    cache_handler: CacheHandler = Field(
        default="file",
        description="Backend selector: 'file', 'memcached' or 'redis'",
    )

    # --- File backend ---
    cache_folder: Path | None = Field(
        default=None,
        description="Directory holding one file per cache entry",
    )

    # --- Memory service backends ---
    memcached_pool: str | None = Field(
        default=None,
        description="Persistent pool id; adapters naming the same pool share a client",
    )
    memcached_compression: bool = Field(
        default=False,
        description="Compress values before they are sent to memcached",
    )
    memcached_consistent_hashing: bool = Field(
        default=True,
        description="Distribute keys with consistent hashing instead of modulo",
    )
    memcached_servers: list[MemcachedServer] = Field(
        default_factory=list,
        description="Ordered memcached server list",
    )
    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        description="Connection URL for the redis driver",
    )
    socket_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Network I/O timeout in seconds (None blocks until the OS gives up)",
    )

    @field_validator("cache_time")
    @classmethod
    def normalize_cache_time(cls, value: int) -> int:
        """Replace a zero lifetime with the default."""
        return value or DEFAULT_CACHE_TIME

    @field_validator("memcached_servers", mode="before")
    @classmethod
    def coerce_servers(cls, value: Any) -> Any:  # noqa: ANN401
        """Accept ``"host:port"`` strings and ``(host, port)`` pairs."""
        if not isinstance(value, list | tuple):
            return value
        servers: list[Any] = []
        for entry in value:
            if isinstance(entry, str):
                host, _, port = entry.rpartition(":")
                if host and port.isdigit():
                    servers.append({"host": host, "port": int(port)})
                else:
                    servers.append({"host": entry})
            elif isinstance(entry, tuple):
                servers.append({"host": entry[0], "port": entry[1]})
            else:
                servers.append(entry)
        return servers

    @classmethod
    def from_value(cls, options: CacheOptions | Mapping[str, Any] | None) -> CacheOptions:
        """Normalize an options mapping (or an existing instance) into CacheOptions."""
        if options is None:
            return cls()
        if isinstance(options, CacheOptions):
            return options
        return cls.model_validate(dict(options))

    def resolve_ttl(self, ttl: int) -> int:
        """Return ``ttl`` unless it is zero, in which case use ``cache_time``."""
        return int(ttl) or self.cache_time
