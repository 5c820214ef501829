"""Shared test fixtures for all test modules."""

import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from healthprobe.core.models import EventRecord, LogFilter, Thresholds
from healthprobe.logging import PACKAGE_LOGGER
from tests.fakes import FIXED_NOW


@pytest.fixture
def watermark_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for watermark storage tests."""
    return str(tmp_path / "watermark.db")


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def thresholds() -> Thresholds:
    return Thresholds(cpu=0.80, disk=0.90)


@pytest.fixture
def log_filter() -> LogFilter:
    return LogFilter(sources=("System", "Application"), levels=("1", "2"))


@pytest.fixture
def make_record() -> Callable[..., EventRecord]:
    """Factory fixture for EventRecord objects.

    Usage:
        record = make_record(minutes=5)  # FIXED_NOW minus 5 minutes
    """

    def _record(
        minutes: int = 0,
        level: str = "Error",
        log_name: str = "System",
        provider: str = "Service Control Manager",
        event_id: int = 7000,
    ) -> EventRecord:
        return EventRecord(
            level=level,
            time_created=FIXED_NOW - timedelta(minutes=minutes),
            log_name=log_name,
            provider=provider,
            event_id=event_id,
        )

    return _record


@pytest.fixture
def settings_env() -> dict[str, str]:
    """A complete, valid settings mapping."""
    return {
        "APIKey": "token-123",
        "RoomId": "42",
        "CPUUsageThreshold": "0.80",
        "DiskUsageThreshold": "0.90",
        "ALLOWED_LOGTYPE": "System,Application",
        "ALLOWED_ENTRYLEVEL": "1,2",
    }


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo handler, level and propagate changes made by configure_logging."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
