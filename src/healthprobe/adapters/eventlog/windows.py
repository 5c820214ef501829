"""Windows event log adapter built on pywin32.

``win32evtlog`` is imported when a query runs, so this module can be imported
(and parse_event_xml used) on any platform.
"""

import asyncio
import xml.etree.ElementTree as ET
from collections.abc import AsyncIterable
from datetime import datetime, timezone
from typing import Any

from healthprobe.core.errors import EventLogError
from healthprobe.core.models import EventRecord
from healthprobe.logging import get_logger

logger = get_logger(__name__)

_EVENT_NS = {"e": "http://schemas.microsoft.com/win/2004/08/events/event"}

# Display names of the standard Windows event levels
LEVEL_NAMES = {
    0: "Information",
    1: "Critical",
    2: "Error",
    3: "Warning",
    4: "Information",
    5: "Verbose",
}

DEFAULT_BATCH_SIZE = 64


def _parse_system_time(value: str) -> datetime:
    """Parse a SystemTime attribute into a naive local datetime.

    SystemTime carries up to seven fractional digits and a trailing Z.
    """
    text = value.rstrip("Z")
    if "." in text:
        whole, fraction = text.split(".", 1)
        text = f"{whole}.{fraction[:6]}"
    utc = datetime.fromisoformat(text).replace(tzinfo=timezone.utc)
    return utc.astimezone().replace(tzinfo=None)


def level_name(level: int) -> str:
    return LEVEL_NAMES.get(level, f"Level {level}")


def parse_event_xml(xml: str) -> EventRecord:
    """Convert a rendered event into an EventRecord.

    Args:
        xml: Event XML as produced by EvtRender with EvtRenderEventXml.

    Returns:
        EventRecord with the creation time converted to local time.

    Raises:
        EventLogError: If the XML lacks a required System field.
    """
    try:
        root = ET.fromstring(xml)
        system = root.find("e:System", _EVENT_NS)
        if system is None:
            raise EventLogError("event XML has no System element")
        provider = system.find("e:Provider", _EVENT_NS)
        event_id = system.find("e:EventID", _EVENT_NS)
        level = system.find("e:Level", _EVENT_NS)
        created = system.find("e:TimeCreated", _EVENT_NS)
        channel = system.find("e:Channel", _EVENT_NS)
        if created is None or event_id is None or event_id.text is None:
            raise EventLogError("event XML is missing TimeCreated or EventID")
        return EventRecord(
            level=level_name(int(level.text or 0) if level is not None else 0),
            time_created=_parse_system_time(created.attrib["SystemTime"]),
            log_name=(channel.text or "") if channel is not None else "",
            provider=provider.attrib.get("Name", "") if provider is not None else "",
            event_id=int(event_id.text),
        )
    except (ET.ParseError, KeyError, ValueError) as exc:
        raise EventLogError(f"unreadable event record: {exc}") from exc


class WindowsEventLogReader:
    """EventLogReaderPort implementation for the Windows event log.

    Runs the structured XML query with EvtQuery and renders each event to XML.
    Blocking pywin32 calls run in a worker thread.

    Args:
        path: Log path passed to EvtQuery alongside the structured query.
        batch_size: Number of event handles fetched per EvtNext call.
    """

    def __init__(self, path: str = "System", batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self._path = path
        self._batch_size = batch_size

    def _open(self, query: str) -> Any:
        import pywintypes
        import win32evtlog

        try:
            return win32evtlog.EvtQuery(
                self._path, win32evtlog.EvtQueryChannelPath, query
            )
        except pywintypes.error as exc:
            raise EventLogError(f"event query rejected: {exc.strerror}") from exc

    def _next_batch(self, handle: Any) -> list[str]:
        import pywintypes
        import win32evtlog

        try:
            events = win32evtlog.EvtNext(handle, self._batch_size)
            return [
                win32evtlog.EvtRender(event, win32evtlog.EvtRenderEventXml)
                for event in events
            ]
        except pywintypes.error as exc:
            raise EventLogError(f"reading events failed: {exc.strerror}") from exc

    async def read(self, query: str) -> AsyncIterable[EventRecord]:
        """Yield every record matching ``query``, in log order."""
        handle = await asyncio.to_thread(self._open, query)
        while True:
            batch = await asyncio.to_thread(self._next_batch, handle)
            if not batch:
                break
            for xml in batch:
                yield parse_event_xml(xml)
        logger.debug("Event query exhausted", extra={"path": self._path})
