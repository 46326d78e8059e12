"""Lifetime handling for stored envelopes.

Expiry is checked lazily on access; there is no background sweeper. An
envelope with ``lifetime=None`` never expires.
"""

import math
from datetime import UTC, datetime, timedelta
from typing import Optional

from kvalue.core.exceptions import ValidationError
from kvalue.core.models import Envelope


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def compute_lifetime(
    lifetime_ms: Optional[int | float], now: Optional[datetime] = None
) -> Optional[datetime]:
    """Turn a relative lifetime into an absolute expiry.

    Args:
        lifetime_ms: Lifetime in milliseconds, or None for no expiry
        now: Reference time (defaults to the current UTC time)

    Returns:
        Absolute UTC expiry, or None

    Raises:
        ValidationError: If the lifetime is not a positive number
    """
    if lifetime_ms is None:
        return None
    if isinstance(lifetime_ms, bool) or not isinstance(lifetime_ms, (int, float)):
        raise ValidationError("lifetime must be a number of milliseconds", value=lifetime_ms)
    if (isinstance(lifetime_ms, float) and not math.isfinite(lifetime_ms)) or lifetime_ms <= 0:
        raise ValidationError("lifetime must be a finite number greater than zero", value=lifetime_ms)

    try:
        delta = timedelta(milliseconds=lifetime_ms)
        expiry = (now or utcnow()) + delta
    except OverflowError as e:
        raise ValidationError("lifetime is out of range", value=lifetime_ms) from e
    # below timedelta resolution the entry would expire as it is written
    if delta <= timedelta(0):
        raise ValidationError("lifetime must be at least one microsecond", value=lifetime_ms)
    return expiry


def is_expired(envelope: Optional[Envelope], now: Optional[datetime] = None) -> bool:
    """Check whether an envelope is past its lifetime.

    A missing envelope counts as expired.
    """
    if envelope is None:
        return True
    if envelope.lifetime is None:
        return False
    lifetime = envelope.lifetime
    if lifetime.tzinfo is None:
        lifetime = lifetime.replace(tzinfo=UTC)
    return (now or utcnow()) > lifetime
