"""Report rendering for triggered warnings and event records."""

from collections.abc import Iterable
from datetime import datetime

from healthprobe.core.models import EventRecord, ResourceSample, Thresholds, WarningSet

DEFAULT_RECORD_LIMIT = 100

LINE_END = "\r\n"


def select_recent(
    records: Iterable[EventRecord], limit: int = DEFAULT_RECORD_LIMIT
) -> list[EventRecord]:
    """Return the newest records, newest first.

    Args:
        records: Records in any order.
        limit: Maximum number of records to keep.

    Returns:
        At most ``limit`` records sorted by creation time descending.
    """
    ordered = sorted(records, key=lambda r: r.time_created, reverse=True)
    return ordered[:limit]


def newest_timestamp(records: Iterable[EventRecord]) -> datetime | None:
    """Return the latest creation time, or None for no records."""
    return max((r.time_created for r in records), default=None)


def format_warning_lines(
    warnings: WarningSet, sample: ResourceSample, thresholds: Thresholds
) -> list[str]:
    lines = []
    if warnings.processor:
        lines.append(f"CPU Usage : {sample.cpu:.0%} >= {thresholds.cpu:.0%}")
    if warnings.storage:
        lines.append(f"Disk Usage : {sample.disk:.0%} >= {thresholds.disk:.0%}")
    return lines


def format_record(record: EventRecord) -> str:
    return (
        f"[{record.level}] {record.time_created:%Y/%m/%d %H:%M} "
        f"{record.log_name} {record.provider} {record.event_id}"
    )


def format_report(
    warnings: WarningSet,
    sample: ResourceSample,
    thresholds: Thresholds,
    records: Iterable[EventRecord] = (),
) -> str:
    """Render the report body.

    Args:
        warnings: Triggered flags; one line is written per flag.
        sample: Sampled usage shown as the measured value.
        thresholds: Thresholds shown as the limit.
        records: Records already selected with select_recent.

    Returns:
        Report text, every line terminated with CRLF.
    """
    lines = format_warning_lines(warnings, sample, thresholds)
    lines.extend(format_record(record) for record in records)
    return "".join(line + LINE_END for line in lines)


def format_title(now: datetime) -> str:
    """Render the message title for a report sent at ``now``."""
    return f"CPU, Disk and Log Info at {now:%Y/%m/%d %H:%M:%S}"
