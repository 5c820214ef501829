"""Helpers shared by the watermark storage adapters."""

from collections.abc import Callable
from datetime import datetime, timedelta

DEFAULT_LOOKBACK = timedelta(days=10)


def default_watermark(clock: Callable[[], datetime] = datetime.now) -> datetime:
    """Watermark used before anything has been saved."""
    return clock() - DEFAULT_LOOKBACK


def parse_watermark(value: str) -> datetime | None:
    """Parse a stored ISO 8601 watermark.

    Args:
        value: Stored string.

    Returns:
        Parsed datetime, or None if the string is not a valid timestamp.
    """
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
