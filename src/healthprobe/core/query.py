"""Structured XML query construction for the system event log."""

from datetime import datetime

from healthprobe.core.errors import ConfigurationError
from healthprobe.core.models import LogFilter

# Added to the watermark hour, modulo 24, to line local time up with the
# UTC SystemTime attribute. Date components are not adjusted.
QUERY_HOUR_OFFSET = 15

_QUERY_OPEN = "<QueryList><Query Id='0' Path='Application'>"
_QUERY_CLOSE = "</Query></QueryList>"
_SELECT = (
    "<Select Path='{source}'>*[System[({levels}) and "
    "TimeCreated[@SystemTime&gt;='{since}.000Z']]]</Select>"
)


def query_lower_bound(watermark: datetime) -> datetime:
    """Return the time filter bound for a watermark.

    The hour is shifted by QUERY_HOUR_OFFSET and wrapped past 23; the date,
    minute and second are kept and sub-second precision is dropped.
    """
    return watermark.replace(
        hour=(watermark.hour + QUERY_HOUR_OFFSET) % 24, microsecond=0
    )


def level_clause(levels: tuple[str, ...]) -> str:
    """Join severity codes into an XPath OR clause, e.g. ``Level=1 or Level=2``."""
    return " or ".join(f"Level={level}" for level in levels)


def build_event_query(watermark: datetime, log_filter: LogFilter) -> str:
    """Build the XML query selecting records at or after the watermark.

    One Select element is emitted per allowed source, all under a single
    Query element.

    Args:
        watermark: Creation time of the newest previously reported record.
        log_filter: Allowed sources and severity codes.

    Returns:
        Query string accepted by the event log reader.

    Raises:
        ConfigurationError: If either allowed list is empty.
    """
    if not log_filter.sources or not log_filter.levels:
        raise ConfigurationError("ALLOWED_LOGTYPE or ALLOWED_ENTRYLEVEL is empty")

    since = query_lower_bound(watermark).strftime("%Y-%m-%dT%H:%M:%S")
    levels = level_clause(log_filter.levels)
    selects = "".join(
        _SELECT.format(source=source, levels=levels, since=since)
        for source in log_filter.sources
    )
    return f"{_QUERY_OPEN}{selects}{_QUERY_CLOSE}"
