"""Tagged type registry for JSON-based storage.

Values that JSON cannot represent are projected into a tagged intermediate
form before serialization::

    {"__kvalue__": "<tag>", "i": <payload>}

Restoring dispatches on the tag alone, never on the shape of the payload.
String-keyed dicts pass through structurally unless they contain the tag
marker, in which case they are tagged as a ``map`` like any dict with
non-string keys.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from kvalue.core.exceptions import SerializationError

logger = logging.getLogger(__name__)

TAG_MARKER = "__kvalue__"
PAYLOAD_KEY = "i"
MAP_TAG = "map"

_JSON_SCALARS = (type(None), bool, int, float, str)

Projector = Callable[[Any], Any]


@dataclass(frozen=True)
class SerialType:
    """A registered type and its projection hooks.

    Attributes:
        tag: Discriminant written into the intermediate form
        python_type: The runtime type this entry handles
        to_intermediate: ``(value, project) -> payload``; ``project`` converts
            nested values
        from_intermediate: ``(payload, restore) -> value``; ``restore``
            converts nested payloads
    """

    tag: str
    python_type: type
    to_intermediate: Callable[[Any, Projector], Any]
    from_intermediate: Callable[[Any, Projector], Any]


class TypeRegistry:
    """Closed set of serializable types keyed by tag."""

    def __init__(self, types: Optional[list[SerialType]] = None) -> None:
        self._by_tag: dict[str, SerialType] = {}
        self._by_type: dict[type, SerialType] = {}
        for serial_type in types or []:
            self.register(serial_type)

    def register(self, serial_type: SerialType) -> None:
        """Add a type to the registry.

        Raises:
            ValueError: If the tag is already registered
        """
        if serial_type.tag in self._by_tag:
            raise ValueError(f"Serial type tag '{serial_type.tag}' is already registered")
        self._by_tag[serial_type.tag] = serial_type
        # the map tag is reached through the dict branch of project()
        if serial_type.tag != MAP_TAG:
            self._by_type[serial_type.python_type] = serial_type

    @property
    def tags(self) -> list[str]:
        return list(self._by_tag)

    def _tagged(self, serial_type: SerialType, value: Any) -> dict[str, Any]:
        return {
            TAG_MARKER: serial_type.tag,
            PAYLOAD_KEY: serial_type.to_intermediate(value, self.project),
        }

    def project(self, value: Any) -> Any:
        """Convert a value into its JSON-safe intermediate form."""
        value_type = type(value)
        if value_type in _JSON_SCALARS:
            return value

        serial_type = self._by_type.get(value_type)
        if serial_type is not None:
            return self._tagged(serial_type, value)

        if value_type is list:
            return [self.project(item) for item in value]
        if value_type is dict:
            return self._project_dict(value)

        # subclasses resolve to the first registered base type
        for serial_type in self._by_type.values():
            if isinstance(value, serial_type.python_type):
                return self._tagged(serial_type, value)
        if isinstance(value, Mapping):
            return self._project_dict(dict(value))
        if isinstance(value, list):
            return [self.project(item) for item in value]
        if isinstance(value, _JSON_SCALARS):
            return value

        logger.debug("No serial type for %s, storing str() of the value", value_type.__name__)
        return str(value)

    def _project_dict(self, value: dict) -> dict[str, Any]:
        if TAG_MARKER not in value and all(isinstance(key, str) for key in value):
            return {key: self.project(item) for key, item in value.items()}
        map_type = self._by_tag.get(MAP_TAG)
        if map_type is None:
            raise SerializationError(
                f"dict with non-string keys requires the '{MAP_TAG}' serial type", namespace="codec"
            )
        return self._tagged(map_type, value)

    def restore(self, value: Any) -> Any:
        """Convert an intermediate form back into Python values.

        Raises:
            SerializationError: If a tag is not registered
        """
        if isinstance(value, list):
            return [self.restore(item) for item in value]
        if isinstance(value, dict):
            if TAG_MARKER in value:
                tag = value[TAG_MARKER]
                serial_type = self._by_tag.get(tag)
                if serial_type is None:
                    raise SerializationError(f"Unknown serial type tag '{tag}'", namespace="codec")
                return serial_type.from_intermediate(value.get(PAYLOAD_KEY), self.restore)
            return {key: self.restore(item) for key, item in value.items()}
        return value
