"""Driver interface for networked key-value memory services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable


class ResultCode(StrEnum):
    """Outcome of a single memory-service call."""

    SUCCESS = "success"
    NOTFOUND = "notfound"
    NOTSTORED = "notstored"
    FAILURE = "failure"


@dataclass(frozen=True)
class BackendResponse:
    """Result code, payload and backend message of one driver call."""

    code: ResultCode
    value: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code is ResultCode.SUCCESS


@runtime_checkable
class MemoryServiceClient(Protocol):
    """Thin driver over a memory-service client library.

    Drivers never raise for backend failures; they report them as a
    FAILURE response so the adapter owns the error policy.
    """

    def fetch(self, key: str) -> BackendResponse:
        """Read ``key``."""
        ...

    def store(self, key: str, value: Any, ttl: int) -> BackendResponse:  # noqa: ANN401
        """Write ``value`` under ``key`` for ``ttl`` seconds."""
        ...

    def delete(self, key: str) -> BackendResponse:
        """Delete ``key``."""
        ...

    def flush(self) -> BackendResponse:
        """Delete every key."""
        ...

    def close(self) -> None:
        """Close network connections."""
        ...
