"""Settings loaded from the process environment.

Keys keep the names used by existing deployments (``APIKey``, ``RoomId``,
``CPUUsageThreshold``, ...). A ``.env`` file can pre-populate the environment
through python-dotenv before load_settings is called.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from healthprobe.core.errors import ConfigurationError
from healthprobe.core.models import LogFilter, Thresholds

DEFAULT_WATERMARK_DB = "healthprobe.db"
DEFAULT_NOTIFY_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Validated settings for one probe run.

    Attributes:
        api_key: Chatwork API token.
        room_id: Chatwork room receiving the report.
        thresholds: CPU and disk thresholds.
        log_filter: Allowed event log sources and severity codes.
        watermark_db: SQLite file holding the watermark.
        notify_timeout: Timeout in seconds for the Chatwork request.
        log_level: Name of the logging level for the probe's own logs.
    """

    api_key: str
    room_id: str
    thresholds: Thresholds
    log_filter: LogFilter
    watermark_db: str = DEFAULT_WATERMARK_DB
    notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _require(source: Mapping[str, str], key: str) -> str:
    value = source.get(key)
    if value is None or not value.strip():
        raise ConfigurationError(f"{key} is not set")
    return value.strip()


def _parse_float(source: Mapping[str, str], key: str) -> float:
    raw = _require(source, key)
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} is not a number: {raw!r}") from None


def parse_list(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated setting, dropping blank items."""
    if raw is None:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def parse_log_filter(source: Mapping[str, str]) -> LogFilter:
    """Read ALLOWED_LOGTYPE and ALLOWED_ENTRYLEVEL.

    Raises:
        ConfigurationError: If either list is missing or empty.
    """
    sources = parse_list(source.get("ALLOWED_LOGTYPE"))
    levels = parse_list(source.get("ALLOWED_ENTRYLEVEL"))
    if not sources or not levels:
        raise ConfigurationError("ALLOWED_LOGTYPE or ALLOWED_ENTRYLEVEL is empty")
    return LogFilter(sources=sources, levels=levels)


def parse_thresholds(source: Mapping[str, str]) -> Thresholds:
    """Read CPUUsageThreshold and DiskUsageThreshold.

    Raises:
        ConfigurationError: If either value is missing or not a number.
        RangeError: If either value is outside [0, 1].
    """
    return Thresholds(
        cpu=_parse_float(source, "CPUUsageThreshold"),
        disk=_parse_float(source, "DiskUsageThreshold"),
    )


def load_settings(source: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from a key/value source.

    Args:
        source: Mapping to read from. Defaults to os.environ.

    Returns:
        Validated Settings.

    Raises:
        ConfigurationError: If a required key is missing or invalid.
        RangeError: If a threshold is outside [0, 1].
    """
    if source is None:
        source = os.environ

    api_key = _require(source, "APIKey")
    room_id = _require(source, "RoomId")
    thresholds = parse_thresholds(source)
    log_filter = parse_log_filter(source)

    timeout = DEFAULT_NOTIFY_TIMEOUT
    if source.get("NOTIFY_TIMEOUT"):
        timeout = _parse_float(source, "NOTIFY_TIMEOUT")
        if timeout <= 0:
            raise ConfigurationError(f"NOTIFY_TIMEOUT must be positive: {timeout}")

    return Settings(
        api_key=api_key,
        room_id=room_id,
        thresholds=thresholds,
        log_filter=log_filter,
        watermark_db=source.get("WATERMARK_DB") or DEFAULT_WATERMARK_DB,
        notify_timeout=timeout,
        log_level=(source.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )


def load_env_file(path: str | Path) -> None:
    """Load KEY=VALUE pairs from ``path`` into os.environ.

    Variables already present in the environment take precedence.

    Raises:
        ConfigurationError: If the file does not exist.
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise ConfigurationError(f"env file not found: {env_path}")
    load_dotenv(env_path, override=False)
