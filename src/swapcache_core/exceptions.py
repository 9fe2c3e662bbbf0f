"""Custom exception hierarchy for swapcache."""

from __future__ import annotations


class SwapCacheError(Exception):
    """Base exception for all swapcache errors."""


class CacheConnectionError(SwapCacheError):
    """Raised when a backend cannot be initialized at connect time."""


class InvalidKeyError(SwapCacheError):
    """Raised when a key cannot be mapped onto the backend's key space."""


class BackendError(SwapCacheError):
    """Raised when a single backend operation fails or returns an unexpected status."""

    def __init__(self, operation: str, key: str | None, message: str) -> None:
        self.operation = operation
        self.key = key
        self.message = message
        if key is None:
            super().__init__(f"{operation} failed: {message}")
        else:
            super().__init__(f"{operation} failed for key '{key}': {message}")
