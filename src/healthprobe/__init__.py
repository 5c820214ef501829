"""Scheduled host health probe reporting to Chatwork."""

from healthprobe.adapters.eventlog import InMemoryEventLogReader, WindowsEventLogReader
from healthprobe.adapters.notify import ChatworkNotifier
from healthprobe.adapters.sampling import PsutilSampler
from healthprobe.adapters.storage import InMemoryWatermarkStorage, SQLiteWatermarkStorage
from healthprobe.config import Settings, load_settings
from healthprobe.core.errors import (
    ConfigurationError,
    DeliveryError,
    EventLogError,
    ProbeError,
    RangeError,
    SamplingError,
    StorageError,
)
from healthprobe.core.models import (
    EventRecord,
    LogFilter,
    ProbeResult,
    ProbeState,
    ResourceSample,
    Thresholds,
    WarningSet,
)
from healthprobe.core.probe import HealthProbe
from healthprobe.logging import configure_logging, get_logger

__all__ = [
    "ChatworkNotifier",
    "ConfigurationError",
    "DeliveryError",
    "EventLogError",
    "EventRecord",
    "HealthProbe",
    "InMemoryEventLogReader",
    "InMemoryWatermarkStorage",
    "LogFilter",
    "ProbeError",
    "ProbeResult",
    "ProbeState",
    "PsutilSampler",
    "RangeError",
    "ResourceSample",
    "SQLiteWatermarkStorage",
    "SamplingError",
    "Settings",
    "StorageError",
    "Thresholds",
    "WarningSet",
    "WindowsEventLogReader",
    "configure_logging",
    "get_logger",
    "load_settings",
]
