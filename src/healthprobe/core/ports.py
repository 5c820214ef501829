"""Port interfaces for the probe's external collaborators.

These protocols define the contracts that adapters must implement.
The core pipeline depends only on these interfaces, not concrete implementations.
"""

from collections.abc import AsyncIterable
from datetime import datetime
from typing import Protocol, runtime_checkable

from healthprobe.core.models import EventRecord, ResourceSample


@runtime_checkable
class MetricSamplerPort(Protocol):
    """Port for sampling host resource usage.

    Examples: PsutilSampler.
    """

    async def sample(self) -> ResourceSample:
        """Sample processor and storage usage.

        Returns:
            ResourceSample with ratios in [0.0, 1.0].

        Raises:
            SamplingError: If a metric source is unavailable.
        """
        ...


@runtime_checkable
class EventLogReaderPort(Protocol):
    """Port for reading system event-log records.

    Examples: InMemoryEventLogReader, WindowsEventLogReader.
    """

    def read(self, query: str) -> AsyncIterable[EventRecord]:
        """Read all records matching an XML event query.

        Args:
            query: Structured XML query built by build_event_query.

        Returns:
            Async iterable of EventRecord objects, in no guaranteed order.
        """
        ...


@runtime_checkable
class WatermarkStoragePort(Protocol):
    """Port for persisting the newest reported record timestamp.

    Examples: InMemoryWatermarkStorage, SQLiteWatermarkStorage.
    """

    async def load(self) -> datetime:
        """Return the stored watermark, or now minus 10 days if none is stored."""
        ...

    async def save(self, timestamp: datetime) -> None:
        """Replace the stored watermark."""
        ...


@runtime_checkable
class NotifierPort(Protocol):
    """Port for delivering a rendered report.

    Examples: ChatworkNotifier.
    """

    async def send(self, title: str, message: str) -> None:
        """Deliver a titled message.

        Raises:
            DeliveryError: If the message could not be delivered.
        """
        ...
