"""Randomize-then-truncate limiter for listings."""

import random
from typing import Optional, TypeVar

from pydantic import ValidationError as PydanticValidationError

from kvalue.core.exceptions import ValidationError
from kvalue.core.models import LimiterOptions

T = TypeVar("T")


def limiter_options(limit: Optional[int] = None, randomize: bool = False) -> LimiterOptions:
    """Build validated limiter options.

    Raises:
        ValidationError: If ``limit`` is negative or not an integer
    """
    try:
        return LimiterOptions(limit=limit, randomize=randomize)
    except PydanticValidationError as e:
        raise ValidationError(
            "limit must be a non-negative integer and randomize a boolean",
            value={"limit": limit, "randomize": randomize},
        ) from e


def apply_limits(
    items: list[T],
    options: Optional[LimiterOptions] = None,
    rng: Optional[random.Random] = None,
) -> list[T]:
    """Shuffle and/or truncate a listing.

    The shuffle runs over the whole list before truncation, so a limited
    random listing is a uniform sample of every key. ``limit=0`` returns an
    empty list; ``limit=None`` leaves the length alone.

    Args:
        items: Listing in backend order
        options: Limiter options (None leaves the listing unchanged)
        rng: Random source (defaults to the module-level generator)

    Returns:
        A new list
    """
    result = list(items)
    if options is None:
        return result

    if options.randomize:
        (rng or random).shuffle(result)
    if options.limit is not None:
        result = result[: options.limit]
    return result
