"""kvalue - Key-value storage over memory and SQL backends."""

from kvalue.adapters import (
    Adapter,
    AdapterState,
    MemoryAdapter,
    MySQLAdapter,
    PostgreSQLAdapter,
    SQLAdapter,
    SQLiteAdapter,
    create_sql_adapter,
)
from kvalue.core import (
    AdapterStateError,
    CacheOptions,
    ConfigurationError,
    EncoderOptions,
    Envelope,
    KeyPresence,
    KeyValue,
    KValueEntry,
    KValueError,
    MemoCache,
    SerializationError,
    SQLAdapterConfig,
    ValidationError,
)
from kvalue.serialize import Codec, SerialType, TypeRegistry, default_registry

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Adapters
    "Adapter",
    "AdapterState",
    "MemoryAdapter",
    "SQLAdapter",
    "SQLiteAdapter",
    "PostgreSQLAdapter",
    "MySQLAdapter",
    "create_sql_adapter",
    # Config
    "CacheOptions",
    "SQLAdapterConfig",
    # Models
    "EncoderOptions",
    "Envelope",
    "KValueEntry",
    "KeyValue",
    "KeyPresence",
    # Cache
    "MemoCache",
    # Serialization
    "Codec",
    "SerialType",
    "TypeRegistry",
    "default_registry",
    # Exceptions
    "KValueError",
    "ValidationError",
    "ConfigurationError",
    "AdapterStateError",
    "SerializationError",
]
