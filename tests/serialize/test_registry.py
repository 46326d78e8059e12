"""Tests for the serial type registry."""

from collections import OrderedDict
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from kvalue.core.exceptions import SerializationError
from kvalue.serialize import SerialType, TypeRegistry, create_default_registry
from kvalue.serialize.registry import PAYLOAD_KEY, TAG_MARKER
from kvalue.serialize.types import BUFFER, SET


@pytest.fixture
def registry():
    return create_default_registry()


def test_builtin_tags(registry):
    """Test every built-in type is registered."""
    assert set(registry.tags) == {
        "bytes",
        "bytearray",
        "set",
        "frozenset",
        "tuple",
        "ordered_map",
        "map",
        "datetime",
        "date",
        "time",
        "timedelta",
        "decimal",
        "uuid",
    }


def test_json_values_pass_through(registry):
    """Test JSON-native values project to themselves."""
    value = {"a": [1, 2.5, "x", None, True], "b": {"c": False}}

    assert registry.project(value) == value
    assert registry.restore(value) == value


def test_bytes_projection(registry):
    """Test bytes become a tagged base64 payload."""
    assert registry.project(b"hi") == {TAG_MARKER: "bytes", PAYLOAD_KEY: "aGk="}


@pytest.mark.parametrize(
    "value",
    [
        b"\x00\xff",
        bytearray(b"abc"),
        {1, 2, 3},
        frozenset({"a"}),
        (1, "two", (3,)),
        OrderedDict([("b", 1), ("a", 2)]),
        {1: "one", (2, 3): "pair"},
        datetime(2024, 5, 17, 8, 30, tzinfo=timezone.utc),
        date(2024, 5, 17),
        time(8, 30, 15),
        timedelta(days=2, seconds=5, microseconds=7),
        Decimal("3.14159265358979323846"),
        UUID("12345678-1234-5678-1234-567812345678"),
    ],
)
def test_builtin_types_restore_with_their_type(registry, value):
    """Test each built-in type restores equal and with the same type."""
    restored = registry.restore(registry.project(value))

    assert restored == value
    assert type(restored) is type(value)


def test_nested_types(registry):
    """Test tagged values nest inside containers and each other."""
    value = {"outer": [{"when": date(2020, 1, 1), "tags": {("a", 1)}}]}

    assert registry.restore(registry.project(value)) == value


def test_ordered_map_keeps_order(registry):
    """Test ordered maps restore in insertion order."""
    value = OrderedDict([("z", 1), ("a", 2), ("m", 3)])

    assert list(registry.restore(registry.project(value))) == ["z", "a", "m"]


def test_dict_containing_marker_is_escaped(registry):
    """Test a user dict that looks tagged survives unchanged."""
    value = {TAG_MARKER: "bytes", PAYLOAD_KEY: "not base64"}

    projected = registry.project(value)

    assert projected[TAG_MARKER] == "map"
    assert registry.restore(projected) == value


def test_date_and_datetime_kept_apart(registry):
    """Test datetime does not collapse into date."""
    stamp = datetime(2024, 1, 1, 12, 0)

    assert registry.project(stamp)[TAG_MARKER] == "datetime"
    assert registry.project(stamp.date())[TAG_MARKER] == "date"


def test_subclass_uses_base_type(registry):
    """Test subclasses of registered types project through their base."""

    class Blob(bytes):
        pass

    assert registry.restore(registry.project(Blob(b"x"))) == b"x"


def test_unregistered_type_stored_as_string(registry):
    """Test values with no serial type fall back to str()."""

    class Point:
        def __str__(self):
            return "Point(1, 2)"

    assert registry.project(Point()) == "Point(1, 2)"


def test_unknown_tag_rejected(registry):
    """Test restoring an unknown tag raises."""
    with pytest.raises(SerializationError, match="complex"):
        registry.restore({TAG_MARKER: "complex", PAYLOAD_KEY: [1, 2]})


def test_duplicate_tag_rejected():
    """Test a tag can only be registered once."""
    registry = TypeRegistry([BUFFER])

    with pytest.raises(ValueError, match="bytes"):
        registry.register(BUFFER)


def test_non_string_keys_need_map_type():
    """Test dicts with non-string keys fail without the map type."""
    registry = TypeRegistry([SET])

    with pytest.raises(SerializationError):
        registry.project({1: "one"})


def test_custom_type_registration():
    """Test registering an application type."""
    registry = create_default_registry()
    registry.register(
        SerialType(
            tag="complex",
            python_type=complex,
            to_intermediate=lambda value, project: [value.real, value.imag],
            from_intermediate=lambda payload, restore: complex(*payload),
        )
    )

    assert registry.restore(registry.project({"z": 1 + 2j})) == {"z": 1 + 2j}
