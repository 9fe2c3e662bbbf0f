"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from swapcache_infra.adapters.file_adapter import FileAdapter
from swapcache_infra.adapters.memory_service import MemoryServiceAdapter
from swapcache_infra.drivers.memcached import reset_pools
from tests.mocks.mock_clients import FakeMemoryClient
from tests.mocks.mock_settings import make_file_options, make_memory_options


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created cache directory."""
    return tmp_path / "cache"


@pytest.fixture
def file_adapter(cache_dir: Path) -> FileAdapter:
    """Return an enabled FileAdapter on a temporary folder."""
    return FileAdapter(make_file_options(cache_dir))


@pytest.fixture
def fake_client() -> FakeMemoryClient:
    """Return a dict-backed memory-service client."""
    return FakeMemoryClient()


@pytest.fixture
def memory_adapter(fake_client: FakeMemoryClient) -> MemoryServiceAdapter:
    """Return an enabled MemoryServiceAdapter over the fake client."""
    return MemoryServiceAdapter(make_memory_options(), client=fake_client)


@pytest.fixture(autouse=True)
def _reset_memcached_pools() -> Generator[None, None, None]:
    """Drop named memcached pools between tests."""
    yield
    reset_pools()
