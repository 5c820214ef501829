"""Tests for settings loading."""

import os
from pathlib import Path

import pytest

from healthprobe.config import (
    DEFAULT_NOTIFY_TIMEOUT,
    DEFAULT_WATERMARK_DB,
    load_env_file,
    load_settings,
    parse_list,
)
from healthprobe.core.errors import ConfigurationError, RangeError
from healthprobe.core.models import LogFilter, Thresholds

pytestmark = [pytest.mark.unit, pytest.mark.tier(1)]


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_valid_settings(self, settings_env: dict[str, str]) -> None:
        settings = load_settings(settings_env)

        assert settings.api_key == "token-123"
        assert settings.room_id == "42"
        assert settings.thresholds == Thresholds(cpu=0.80, disk=0.90)
        assert settings.log_filter == LogFilter(
            sources=("System", "Application"), levels=("1", "2")
        )
        assert settings.watermark_db == DEFAULT_WATERMARK_DB
        assert settings.notify_timeout == DEFAULT_NOTIFY_TIMEOUT
        assert settings.log_level == "INFO"

    def test_optional_keys(self, settings_env: dict[str, str]) -> None:
        settings_env.update(
            {"WATERMARK_DB": "/var/lib/probe.db", "NOTIFY_TIMEOUT": "3.5", "LOG_LEVEL": "debug"}
        )
        settings = load_settings(settings_env)
        assert settings.watermark_db == "/var/lib/probe.db"
        assert settings.notify_timeout == 3.5
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize(
        "key",
        [
            "APIKey",
            "RoomId",
            "CPUUsageThreshold",
            "DiskUsageThreshold",
            "ALLOWED_LOGTYPE",
            "ALLOWED_ENTRYLEVEL",
        ],
    )
    def test_missing_required_key(self, settings_env: dict[str, str], key: str) -> None:
        del settings_env[key]
        with pytest.raises(ConfigurationError):
            load_settings(settings_env)

    def test_unparsable_threshold(self, settings_env: dict[str, str]) -> None:
        settings_env["CPUUsageThreshold"] = "eighty"
        with pytest.raises(ConfigurationError, match="CPUUsageThreshold"):
            load_settings(settings_env)

    @pytest.mark.parametrize(
        "cpu,disk", [("1.5", "0.9"), ("-0.1", "0.9"), ("0.8", "1.5"), ("0.8", "-0.1")]
    )
    def test_out_of_range_threshold(
        self, settings_env: dict[str, str], cpu: str, disk: str
    ) -> None:
        settings_env["CPUUsageThreshold"] = cpu
        settings_env["DiskUsageThreshold"] = disk
        with pytest.raises(RangeError):
            load_settings(settings_env)

    def test_blank_log_filter_list(self, settings_env: dict[str, str]) -> None:
        settings_env["ALLOWED_ENTRYLEVEL"] = " , "
        with pytest.raises(ConfigurationError, match="ALLOWED_ENTRYLEVEL"):
            load_settings(settings_env)

    def test_non_positive_timeout(self, settings_env: dict[str, str]) -> None:
        settings_env["NOTIFY_TIMEOUT"] = "0"
        with pytest.raises(ConfigurationError, match="NOTIFY_TIMEOUT"):
            load_settings(settings_env)

    def test_reads_environment_by_default(
        self, settings_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        for key, value in settings_env.items():
            monkeypatch.setenv(key, value)
        assert load_settings().room_id == "42"


class TestParseList:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("System", ("System",)),
            ("System,Application", ("System", "Application")),
            (" System , Application ,", ("System", "Application")),
            ("", ()),
            (None, ()),
        ],
    )
    def test_parse_list(self, raw: str | None, expected: tuple[str, ...]) -> None:
        assert parse_list(raw) == expected


class TestLoadEnvFile:
    def test_loads_values_without_overriding(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / "probe.env"
        env_file.write_text("RoomId=99\nAPIKey=from-file\n", encoding="utf-8")
        monkeypatch.setenv("RoomId", "placeholder")
        monkeypatch.delenv("RoomId")
        monkeypatch.setenv("APIKey", "from-env")

        load_env_file(env_file)

        assert os.environ["RoomId"] == "99"
        assert os.environ["APIKey"] == "from-env"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="env file not found"):
            load_env_file(tmp_path / "missing.env")
