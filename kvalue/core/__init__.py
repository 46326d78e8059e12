"""Core abstractions and models."""

from kvalue.core.cache import MemoCache
from kvalue.core.config import CacheOptions, SQLAdapterConfig
from kvalue.core.exceptions import (
    AdapterStateError,
    ConfigurationError,
    KValueError,
    SerializationError,
    ValidationError,
)
from kvalue.core.expiration import compute_lifetime, is_expired
from kvalue.core.limiter import apply_limits
from kvalue.core.merge import deep_merge
from kvalue.core.models import (
    EncoderOptions,
    Envelope,
    KeyPresence,
    KeyValue,
    KValueEntry,
    LimiterOptions,
)
from kvalue.core.validation import validate_key

__all__ = [
    # Cache
    "MemoCache",
    # Config
    "CacheOptions",
    "SQLAdapterConfig",
    # Exceptions
    "KValueError",
    "ValidationError",
    "ConfigurationError",
    "AdapterStateError",
    "SerializationError",
    # Policies
    "validate_key",
    "compute_lifetime",
    "is_expired",
    "deep_merge",
    "apply_limits",
    # Models
    "EncoderOptions",
    "Envelope",
    "KValueEntry",
    "KeyValue",
    "KeyPresence",
    "LimiterOptions",
]
