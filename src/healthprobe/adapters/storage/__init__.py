"""Storage adapters implementing WatermarkStoragePort."""

from healthprobe.adapters.storage.in_memory import InMemoryWatermarkStorage
from healthprobe.adapters.storage.sqlite_watermark import SQLiteWatermarkStorage

__all__ = [
    "InMemoryWatermarkStorage",
    "SQLiteWatermarkStorage",
]
