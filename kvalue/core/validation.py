"""Key validation."""

from typing import Any

from kvalue.core.exceptions import ValidationError

MAX_KEY_LENGTH = 192


def is_many(key: Any) -> bool:
    """Whether a key argument addresses several keys at once."""
    return isinstance(key, (list, tuple))


def _validate_one(key: Any, index: int | None = None) -> None:
    if not isinstance(key, str):
        raise ValidationError("key must be a valid string", value=key, index=index)
    if len(key) == 0 or len(key) > MAX_KEY_LENGTH or key.strip() == "":
        raise ValidationError(
            f"key must be 1 through {MAX_KEY_LENGTH} characters in length",
            value=key,
            index=index,
        )


def validate_key(key: Any, allow_empty: bool = False) -> None:
    """Validate a single key or a sequence of keys.

    Args:
        key: A string key, or a list/tuple of string keys
        allow_empty: Accept an empty sequence

    Raises:
        ValidationError: If the key (or any element) is malformed
    """
    if is_many(key):
        if len(key) == 0 and not allow_empty:
            raise ValidationError("key sequence must contain at least one entry", value=key)
        for index, item in enumerate(key):
            _validate_one(item, index=index)
    else:
        _validate_one(key)
