"""Built-in serial types."""

import base64
from collections import OrderedDict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from uuid import UUID

from kvalue.serialize.registry import MAP_TAG, SerialType, TypeRegistry


def _pairs(value, project):
    return [[project(key), project(item)] for key, item in value.items()]


def _b64(value, project):
    return base64.b64encode(bytes(value)).decode("ascii")


BUFFER = SerialType(
    tag="bytes",
    python_type=bytes,
    to_intermediate=_b64,
    from_intermediate=lambda payload, restore: base64.b64decode(payload),
)

BYTEARRAY = SerialType(
    tag="bytearray",
    python_type=bytearray,
    to_intermediate=_b64,
    from_intermediate=lambda payload, restore: bytearray(base64.b64decode(payload)),
)

SET = SerialType(
    tag="set",
    python_type=set,
    to_intermediate=lambda value, project: [project(item) for item in value],
    from_intermediate=lambda payload, restore: {restore(item) for item in payload},
)

FROZENSET = SerialType(
    tag="frozenset",
    python_type=frozenset,
    to_intermediate=lambda value, project: [project(item) for item in value],
    from_intermediate=lambda payload, restore: frozenset(restore(item) for item in payload),
)

TUPLE = SerialType(
    tag="tuple",
    python_type=tuple,
    to_intermediate=lambda value, project: [project(item) for item in value],
    from_intermediate=lambda payload, restore: tuple(restore(item) for item in payload),
)

ORDERED_MAP = SerialType(
    tag="ordered_map",
    python_type=OrderedDict,
    to_intermediate=_pairs,
    from_intermediate=lambda payload, restore: OrderedDict(
        (restore(key), restore(item)) for key, item in payload
    ),
)

# Dicts whose keys are not all strings
MAP = SerialType(
    tag=MAP_TAG,
    python_type=dict,
    to_intermediate=_pairs,
    from_intermediate=lambda payload, restore: {
        restore(key): restore(item) for key, item in payload
    },
)

DATETIME = SerialType(
    tag="datetime",
    python_type=datetime,
    to_intermediate=lambda value, project: value.isoformat(),
    from_intermediate=lambda payload, restore: datetime.fromisoformat(payload),
)

DATE = SerialType(
    tag="date",
    python_type=date,
    to_intermediate=lambda value, project: value.isoformat(),
    from_intermediate=lambda payload, restore: date.fromisoformat(payload),
)

TIME = SerialType(
    tag="time",
    python_type=time,
    to_intermediate=lambda value, project: value.isoformat(),
    from_intermediate=lambda payload, restore: time.fromisoformat(payload),
)

TIMEDELTA = SerialType(
    tag="timedelta",
    python_type=timedelta,
    to_intermediate=lambda value, project: [value.days, value.seconds, value.microseconds],
    from_intermediate=lambda payload, restore: timedelta(
        days=payload[0], seconds=payload[1], microseconds=payload[2]
    ),
)

DECIMAL = SerialType(
    tag="decimal",
    python_type=Decimal,
    to_intermediate=lambda value, project: str(value),
    from_intermediate=lambda payload, restore: Decimal(payload),
)

UUID_TYPE = SerialType(
    tag="uuid",
    python_type=UUID,
    to_intermediate=lambda value, project: str(value),
    from_intermediate=lambda payload, restore: UUID(payload),
)

# datetime must precede date: subclass fallback takes the first match
BUILTIN_TYPES = [
    BUFFER,
    BYTEARRAY,
    SET,
    FROZENSET,
    TUPLE,
    ORDERED_MAP,
    MAP,
    DATETIME,
    DATE,
    TIME,
    TIMEDELTA,
    DECIMAL,
    UUID_TYPE,
]


def create_default_registry() -> TypeRegistry:
    """Registry with every built-in serial type."""
    return TypeRegistry(BUILTIN_TYPES)


default_registry = create_default_registry()
