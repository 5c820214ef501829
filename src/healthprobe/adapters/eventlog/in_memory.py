"""In-memory event log adapter."""

from collections.abc import AsyncIterable, Iterable

from healthprobe.core.models import EventRecord


class InMemoryEventLogReader:
    """In-memory implementation of EventLogReaderPort.

    Yields a fixed list of records for every query and remembers the queries
    it was given. Suitable for testing and for replaying captured records.
    """

    def __init__(self, records: Iterable[EventRecord] = ()) -> None:
        self._records: list[EventRecord] = list(records)
        self.queries: list[str] = []

    def add(self, record: EventRecord) -> None:
        """Add a record returned by later reads."""
        self._records.append(record)

    async def read(self, query: str) -> AsyncIterable[EventRecord]:
        """Yield every stored record, in insertion order."""
        self.queries.append(query)
        for record in self._records:
            yield record
