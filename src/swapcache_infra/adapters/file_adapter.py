"""File-per-key implementation of CacheAdapter."""

from __future__ import annotations

import os
import time
from collections.abc import Mapping
from pathlib import Path
from types import TracebackType
from typing import Any, Self

from swapcache_core.constants import CACHE_FILE_MODE
from swapcache_core.exceptions import BackendError, CacheConnectionError, InvalidKeyError
from swapcache_core.models.item import CacheItem
from swapcache_core.models.options import CacheOptions
from swapcache_infra.observability.logging import get_logger
from swapcache_infra.serialization import dumps, loads

logger = get_logger("adapters.file")


class FileAdapter:
    """Cache that keeps each entry in its own file inside ``cache_folder``.

    Keys are used verbatim as filenames. ``set`` is write-once: an existing
    entry is never overwritten, so callers that need to refresh a value must
    ``remove`` it first. Expiry is not checked on read; call
    :meth:`remove_expired` to sweep entries older than ``cache_time``.
    """

    def __init__(self, options: CacheOptions | Mapping[str, Any] | None = None) -> None:
        self._options = CacheOptions()
        self._folder: Path | None = None
        self.connect(options)

    @property
    def options(self) -> CacheOptions:
        return self._options

    @property
    def enabled(self) -> bool:
        return self._options.cache_enabled

    @property
    def folder(self) -> Path:
        if self._folder is None:
            msg = "FileAdapter is not connected"
            raise CacheConnectionError(msg)
        return self._folder

    def connect(self, options: CacheOptions | Mapping[str, Any] | None = None) -> Self:
        """Validate options and make sure the cache folder exists."""
        if options is not None:
            self._options = CacheOptions.from_value(options)

        folder = self._options.cache_folder
        if folder is None:
            msg = "Cache: cache_folder is required for the file adapter"
            raise CacheConnectionError(msg)

        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("cache_folder_create_failed", folder=str(folder), error=str(e))
            msg = f"Cache: failed creating file adapter folder {folder}: {e}"
            raise CacheConnectionError(msg) from e

        if not folder.is_dir():
            msg = f"Cache: {folder} exists and is not a directory"
            raise CacheConnectionError(msg)

        self._folder = folder
        logger.debug("file_cache_connected", folder=str(folder), enabled=self.enabled)
        return self

    def _path(self, key: str) -> Path:
        """Map a key onto a file inside the cache folder.

        The key is taken as-is; anything that is not a single plain path
        component is refused rather than rewritten.
        """
        if (
            not key
            or key in (".", "..")
            or "\x00" in key
            or "/" in key
            or (os.altsep is not None and os.altsep in key)
            or os.sep in key
        ):
            msg = f"Key {key!r} is not usable as a cache filename"
            raise InvalidKeyError(msg)
        return self.folder / key

    def get(self, key: str) -> CacheItem:
        """Read and deserialize the entry for ``key``."""
        path = self._path(key)
        if not self.enabled:
            return CacheItem.miss(key)

        try:
            data = path.read_bytes()
        except (FileNotFoundError, IsADirectoryError):
            logger.debug("cache_miss", key=key)
            return CacheItem.miss(key)
        except OSError as e:
            logger.error("cache_backend_error", operation="get", key=key, error=str(e))
            raise BackendError("get", key, str(e)) from e

        try:
            value = loads(data)
        except Exception as e:
            logger.error("cache_backend_error", operation="get", key=key, error=str(e))
            raise BackendError("get", key, f"cannot deserialize {path}: {e}") from e

        logger.debug("cache_hit", key=key)
        return CacheItem(key=key, value=value, found=True)

    def set(self, key: str, value: Any, ttl: int = 0) -> bool:  # noqa: ANN401
        """Write ``value`` unless an entry for ``key`` already exists.

        ``ttl`` is accepted for interface parity; file entries age out through
        :meth:`remove_expired` using ``cache_time``. Returns True when a file
        was written.
        """
        path = self._path(key)
        if not self.enabled:
            return False

        payload = dumps(value)
        try:
            with path.open("xb") as fh:
                fh.write(payload)
        except FileExistsError:
            logger.debug("cache_set_skipped", key=key, reason="exists")
            return False
        except OSError as e:
            path.unlink(missing_ok=True)
            logger.error("cache_backend_error", operation="set", key=key, error=str(e))
            raise BackendError("set", key, f"write to {path} failed: {e}") from e

        try:
            path.chmod(CACHE_FILE_MODE)
        except OSError as e:
            logger.error("cache_backend_error", operation="set", key=key, error=str(e))
            raise BackendError("set", key, f"chmod {path} failed: {e}") from e

        logger.debug("cache_set", key=key, bytes=len(payload))
        return True

    def remove(self, key: str) -> None:
        """Delete the entry for ``key``; a missing entry is fine."""
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("cache_backend_error", operation="remove", key=key, error=str(e))
            raise BackendError("remove", key, str(e)) from e

    def _entries(self) -> list[Path]:
        try:
            return [p for p in self.folder.iterdir() if not p.is_dir()]
        except OSError as e:
            raise BackendError("list", None, f"cannot read {self.folder}: {e}") from e

    def clear(self) -> None:
        """Delete every file in the cache folder (subdirectories are left alone)."""
        entries = self._entries()
        for path in entries:
            self.remove(path.name)
        logger.info("cache_cleared", folder=str(self.folder), removed=len(entries))

    def remove_expired(self) -> int:
        """Delete entries whose mtime is at least ``cache_time`` seconds old.

        Returns the number of entries removed.
        """
        cutoff = time.time() - self._options.cache_time
        removed = 0
        for path in self._entries():
            try:
                mtime = path.stat().st_mtime
            except FileNotFoundError:
                continue
            except OSError as e:
                raise BackendError("remove_expired", path.name, str(e)) from e
            if mtime <= cutoff:
                self.remove(path.name)
                removed += 1
        logger.info("cache_expired_removed", folder=str(self.folder), removed=removed)
        return removed

    def close(self) -> None:
        """Nothing to release for plain files."""

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
