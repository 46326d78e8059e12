"""Recursive merge used by ``set(..., merge=True)``."""

import copy
from collections.abc import Mapping, MutableMapping
from typing import Any, Awaitable, Callable


def deep_merge(current: Mapping, incoming: Mapping) -> Mapping:
    """Recursively merge ``incoming`` into a copy of ``current``.

    Nested mappings merge key-wise; anything else in ``incoming`` replaces
    the value in ``current``. The result keeps the type of ``current`` when
    it is mutable (``OrderedDict`` stays ordered). Neither input is mutated.
    """
    if isinstance(current, MutableMapping):
        merged = copy.deepcopy(current)
    else:
        merged = copy.deepcopy(dict(current))
    for key, value in incoming.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


async def merge(
    enabled: bool,
    current_reader: Callable[[], Awaitable[Any]],
    incoming: Any,
) -> Any:
    """Apply the merge policy to a value about to be written.

    Args:
        enabled: Whether merging was requested
        current_reader: Coroutine factory returning the currently stored value
        incoming: The value being written

    Returns:
        The value to persist
    """
    if not enabled or not isinstance(incoming, Mapping):
        return incoming

    current = await current_reader()
    if current is None:
        current = {}
    if not isinstance(current, Mapping):
        return incoming

    return deep_merge(current, incoming)
