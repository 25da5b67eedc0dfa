"""Domain layer utilities."""

from datetime import datetime, timezone

MICROSECONDS_PER_SECOND = 1_000_000


def utc_now() -> datetime:
    """Current time as a tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


def unix_micros(moment: datetime | None = None) -> int:
    """Microseconds since the Unix epoch for `moment` (default: now).

    Args:
        moment: A tz-aware datetime. Naive values are rejected.

    Raises:
        ValueError: If `moment` is naive.
    """
    moment = moment or utc_now()
    if moment.tzinfo is None:
        raise ValueError("moment must be tz-aware.")
    delta = moment - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (
        delta.days * 86_400 + delta.seconds
    ) * MICROSECONDS_PER_SECOND + delta.microseconds
