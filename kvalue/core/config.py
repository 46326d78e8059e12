"""Adapter configuration."""

import logging
import os
import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from kvalue.core.cache import DEFAULT_CACHE_EXPIRE_MS
from kvalue.core.exceptions import ConfigurationError
from kvalue.core.models import EncoderOptions

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "kv_global"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TRUTHY = {"1", "true", "yes", "on"}


class CacheOptions(BaseModel):
    """Adapter-wide memo cache settings.

    ``cache_expire`` is in milliseconds.
    """

    cache: bool = False
    cache_expire: int = Field(default=DEFAULT_CACHE_EXPIRE_MS, gt=0)


class SQLAdapterConfig(CacheOptions):
    """Configuration for SQL-backed adapters."""

    database_url: str
    table: str = DEFAULT_TABLE
    pool_size: Optional[int] = Field(default=None, ge=1)
    max_overflow: Optional[int] = Field(default=None, ge=0)
    echo: bool = False
    encoder: EncoderOptions = Field(default_factory=EncoderOptions)

    @field_validator("table")
    @classmethod
    def _table_is_identifier(cls, value: str) -> str:
        if not _IDENTIFIER.match(value):
            raise ValueError(f"table name must be a SQL identifier, got {value!r}")
        return value

    @classmethod
    def from_env(cls, prefix: str = "KVALUE_") -> "SQLAdapterConfig":
        """Build a config from environment variables.

        Reads ``{prefix}DATABASE_URL`` (required), ``{prefix}TABLE``,
        ``{prefix}POOL_SIZE``, ``{prefix}MAX_OVERFLOW``, ``{prefix}ECHO``,
        ``{prefix}CACHE`` and ``{prefix}CACHE_EXPIRE``.

        Raises:
            ConfigurationError: If the database URL is not set
        """
        env = os.environ
        database_url = env.get(f"{prefix}DATABASE_URL")
        if not database_url:
            raise ConfigurationError(f"{prefix}DATABASE_URL is not set", namespace="config")

        values: dict = {"database_url": database_url}
        if env.get(f"{prefix}TABLE"):
            values["table"] = env[f"{prefix}TABLE"]
        if env.get(f"{prefix}POOL_SIZE"):
            values["pool_size"] = int(env[f"{prefix}POOL_SIZE"])
        if env.get(f"{prefix}MAX_OVERFLOW"):
            values["max_overflow"] = int(env[f"{prefix}MAX_OVERFLOW"])
        if env.get(f"{prefix}ECHO"):
            values["echo"] = env[f"{prefix}ECHO"].lower() in _TRUTHY
        if env.get(f"{prefix}CACHE"):
            values["cache"] = env[f"{prefix}CACHE"].lower() in _TRUTHY
        if env.get(f"{prefix}CACHE_EXPIRE"):
            values["cache_expire"] = int(env[f"{prefix}CACHE_EXPIRE"])

        logger.debug("Loaded SQL adapter config from environment (table=%s)", values.get("table", DEFAULT_TABLE))
        return cls(**values)
