"""Event log adapters implementing EventLogReaderPort."""

from healthprobe.adapters.eventlog.in_memory import InMemoryEventLogReader
from healthprobe.adapters.eventlog.windows import WindowsEventLogReader, parse_event_xml

__all__ = [
    "InMemoryEventLogReader",
    "WindowsEventLogReader",
    "parse_event_xml",
]
