"""Pytest configuration and fixtures."""

import pytest

from kvalue import MemoryAdapter, SQLiteAdapter


@pytest.fixture
async def memory_adapter():
    """Configured in-memory adapter."""
    adapter = MemoryAdapter()
    await adapter.configure()
    yield adapter
    await adapter.close()


@pytest.fixture
async def sqlite_adapter(tmp_path):
    """Configured SQLite adapter on a throwaway database file."""
    adapter = SQLiteAdapter(str(tmp_path / "kv.db"), table="kv_test")
    await adapter.configure()
    yield adapter
    await adapter.close()


@pytest.fixture(params=["memory", "sqlite"])
async def adapter(request, tmp_path):
    """Every backend, for contract tests that must hold across adapters."""
    if request.param == "memory":
        kv = MemoryAdapter()
    else:
        kv = SQLiteAdapter(str(tmp_path / "contract.db"), table="kv_contract")
    await kv.configure()
    yield kv
    await kv.close()
