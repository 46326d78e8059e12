"""Key-value adapter implementations."""

from kvalue.adapters.base import Adapter, AdapterState
from kvalue.adapters.memory import MemoryAdapter
from kvalue.adapters.sql import (
    MySQLAdapter,
    PostgreSQLAdapter,
    SQLAdapter,
    SQLiteAdapter,
    create_sql_adapter,
)

__all__ = [
    "Adapter",
    "AdapterState",
    "MemoryAdapter",
    "SQLAdapter",
    "SQLiteAdapter",  # aiosqlite
    "PostgreSQLAdapter",  # asyncpg
    "MySQLAdapter",  # aiomysql
    "create_sql_adapter",
]
