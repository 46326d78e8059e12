"""Type registry and envelope codec."""

from kvalue.serialize.codec import Codec, decode, encode
from kvalue.serialize.registry import SerialType, TypeRegistry
from kvalue.serialize.types import create_default_registry, default_registry

__all__ = [
    "Codec",
    "encode",
    "decode",
    "SerialType",
    "TypeRegistry",
    "create_default_registry",
    "default_registry",
]
