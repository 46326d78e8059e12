"""Tests for adapter configuration."""

import pytest
from pydantic import ValidationError

from kvalue.core import CacheOptions, ConfigurationError, SQLAdapterConfig
from kvalue.core.config import DEFAULT_TABLE


def test_cache_options_defaults():
    """Test cache is off with a 30 second expiry by default."""
    options = CacheOptions()
    assert options.cache is False
    assert options.cache_expire == 30000


def test_cache_expire_must_be_positive():
    """Test a zero cache expiry is rejected."""
    with pytest.raises(ValidationError):
        CacheOptions(cache_expire=0)


def test_sql_config_defaults():
    """Test SQLAdapterConfig defaults."""
    config = SQLAdapterConfig(database_url="sqlite+aiosqlite:///:memory:")

    assert config.table == DEFAULT_TABLE
    assert config.pool_size is None
    assert config.echo is False
    assert config.encoder.use is True


@pytest.mark.parametrize("table", ["kv-global", "1kv", "kv global", "kv;drop", ""])
def test_sql_config_rejects_bad_table(table):
    """Test table names must be identifiers."""
    with pytest.raises(ValidationError):
        SQLAdapterConfig(database_url="sqlite:///kv.db", table=table)


def test_from_env(monkeypatch):
    """Test loading the config from KVALUE_* variables."""
    monkeypatch.setenv("KVALUE_DATABASE_URL", "postgresql://u:p@db/kv")
    monkeypatch.setenv("KVALUE_TABLE", "kv_env")
    monkeypatch.setenv("KVALUE_POOL_SIZE", "3")
    monkeypatch.setenv("KVALUE_MAX_OVERFLOW", "0")
    monkeypatch.setenv("KVALUE_ECHO", "false")
    monkeypatch.setenv("KVALUE_CACHE", "true")
    monkeypatch.setenv("KVALUE_CACHE_EXPIRE", "1500")

    config = SQLAdapterConfig.from_env()

    assert config.database_url == "postgresql://u:p@db/kv"
    assert config.table == "kv_env"
    assert config.pool_size == 3
    assert config.max_overflow == 0
    assert config.echo is False
    assert config.cache is True
    assert config.cache_expire == 1500


def test_from_env_custom_prefix(monkeypatch):
    """Test a custom variable prefix."""
    monkeypatch.setenv("APP_KV_DATABASE_URL", "sqlite:///app.db")

    config = SQLAdapterConfig.from_env(prefix="APP_KV_")

    assert config.database_url == "sqlite:///app.db"
    assert config.table == DEFAULT_TABLE


def test_from_env_missing_url(monkeypatch):
    """Test a missing database URL is a configuration error."""
    monkeypatch.delenv("KVALUE_DATABASE_URL", raising=False)

    with pytest.raises(ConfigurationError, match="KVALUE_DATABASE_URL") as exc_info:
        SQLAdapterConfig.from_env()

    assert exc_info.value.namespace == "config"
