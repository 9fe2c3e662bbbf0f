"""Value serialization shared by the file adapter and the redis driver."""

from __future__ import annotations

import hashlib
import pickle
from typing import Any


def dumps(value: Any) -> bytes:  # noqa: ANN401
    """Serialize an arbitrary value to bytes."""
    return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)


def loads(data: bytes) -> Any:  # noqa: ANN401
    """Inverse of :func:`dumps`."""
    return pickle.loads(data)


def derive_key(value: Any) -> str:  # noqa: ANN401
    """Generate a stable cache key from a value's serialized form."""
    return f"value:{hashlib.sha256(dumps(value)).hexdigest()}"
