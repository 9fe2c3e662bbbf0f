"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from swapcache_core.constants import DEFAULT_CACHE_TIME, DEFAULT_REDIS_URL, FILE_HANDLER
from swapcache_core.models.options import CacheHandler, CacheOptions, MemcachedServer


class CacheSettings(BaseSettings):
    """Environment-driven configuration for swapcache."""

    model_config = SettingsConfigDict(env_prefix="SWC_", env_file=".env", extra="ignore")

    # --- Common ---
    cache_enabled: bool = Field(
        default=False,
        description="Enable the cache; a disabled cache answers every get with a miss",
    )
    cache_time: int = Field(
        default=DEFAULT_CACHE_TIME,
        ge=0,
        description="Default entry lifetime in seconds",
    )
    cache_handler: CacheHandler = Field(
        default="file",
        description="Backend: 'file', 'memcached' or 'redis'",
    )

    # --- File ---
    cache_folder: Path | None = Field(
        default=None,
        description="Directory for the file backend",
    )

    # --- Memcached ---
    memcached_pool: str | None = Field(
        default=None,
        description="Persistent client pool id",
    )
    memcached_compression: bool = Field(
        default=False,
        description="Compress stored values",
    )
    memcached_consistent_hashing: bool = Field(
        default=True,
        description="Use consistent hashing across the server list",
    )
    memcached_servers: list[MemcachedServer] = Field(
        default_factory=list,
        description='JSON list of servers, e.g. [{"host": "localhost", "port": 11211}]',
    )

    # --- Redis ---
    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        description="Redis connection URL",
    )

    socket_timeout: float | None = Field(
        default=None,
        description="Network I/O timeout in seconds",
    )

    # --- Logging ---
    log_enabled: bool = Field(
        default=False,
        description="Attach a stream handler to the swapcache logger when building adapters",
    )
    log_level: str = Field(default="INFO", description="Level for the swapcache logger")
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer",
    )

    @model_validator(mode="after")
    def validate_file_backend(self) -> CacheSettings:
        """The file backend cannot run without a folder."""
        if self.cache_handler == FILE_HANDLER and self.cache_folder is None:
            msg = "cache_folder required when cache_handler=file"
            raise ValueError(msg)
        return self

    def to_options(self) -> CacheOptions:
        """Build adapter options from these settings."""
        return CacheOptions.model_validate(
            self.model_dump(exclude={"log_enabled", "log_level", "log_format"}),
        )
