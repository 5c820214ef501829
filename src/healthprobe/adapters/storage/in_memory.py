"""In-memory storage adapter for the watermark."""

from collections.abc import Callable
from datetime import datetime

from healthprobe.adapters.storage.watermark import default_watermark


class InMemoryWatermarkStorage:
    """In-memory implementation of WatermarkStoragePort.

    Keeps the watermark on the instance. Suitable for testing and one-off
    runs where persistence is not required.
    """

    def __init__(
        self,
        initial: datetime | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._value = initial
        self._clock = clock
        self.saves: list[datetime] = []

    async def load(self) -> datetime:
        """Return the stored watermark, or now minus 10 days if none is stored."""
        if self._value is None:
            return default_watermark(self._clock)
        return self._value

    async def save(self, timestamp: datetime) -> None:
        """Replace the stored watermark."""
        self._value = timestamp
        self.saves.append(timestamp)
