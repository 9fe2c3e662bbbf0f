"""Value object returned from cache lookups."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CacheItem(BaseModel):
    """Immutable result of a single ``get`` call."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str = Field(min_length=1, description="Key the lookup was made for")
    value: Any = Field(default=None, description="Stored payload, None on a miss")
    found: bool = Field(default=False, description="True iff the entry existed and was readable")

    @classmethod
    def miss(cls, key: str) -> CacheItem:
        """Build the negative result for ``key``."""
        return cls(key=key, value=None, found=False)

    def __bool__(self) -> bool:
        return self.found
