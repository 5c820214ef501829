"""Command-line entry point: run the probe once and exit.

Run with:
    healthprobe --env-file probe.env

Exit status is 0 when the run completes (with or without a report) and 1 on
a fatal error.
"""

import argparse
import asyncio
from collections.abc import Sequence

from healthprobe.adapters.eventlog import WindowsEventLogReader
from healthprobe.adapters.notify import ChatworkNotifier
from healthprobe.adapters.sampling import PsutilSampler
from healthprobe.adapters.storage import SQLiteWatermarkStorage
from healthprobe.config import Settings, load_env_file, load_settings
from healthprobe.core.errors import ProbeError
from healthprobe.core.models import ProbeResult
from healthprobe.core.probe import HealthProbe
from healthprobe.logging import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="healthprobe",
        description="Sample CPU and disk usage and report breaches to Chatwork.",
    )
    parser.add_argument("--env-file", help="Load settings from this .env file first")
    parser.add_argument("--watermark-db", help="SQLite file holding the watermark")
    parser.add_argument("--log-level", help="Logging level (default from LOG_LEVEL)")
    return parser


def build_probe(settings: Settings, watermark_db: str | None = None) -> HealthProbe:
    """Wire the production adapters for ``settings``."""
    return HealthProbe(
        thresholds=settings.thresholds,
        log_filter=settings.log_filter,
        sampler=PsutilSampler(),
        reader=WindowsEventLogReader(),
        watermark=SQLiteWatermarkStorage(watermark_db or settings.watermark_db),
        notifier=ChatworkNotifier(
            settings.api_key, settings.room_id, timeout=settings.notify_timeout
        ),
    )


async def run_once(settings: Settings, watermark_db: str | None = None) -> ProbeResult:
    probe = build_probe(settings, watermark_db)
    return await probe.run()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or "INFO")

    try:
        if args.env_file:
            load_env_file(args.env_file)
        settings = load_settings()
        if not args.log_level:
            configure_logging(settings.log_level)
        result = asyncio.run(run_once(settings, args.watermark_db))
    except ProbeError:
        logger.exception("Probe run failed")
        return 1

    logger.info(
        "Probe finished in state %s",
        result.state.value,
        extra={"state": result.state.value, "record_count": result.record_count},
    )
    return 0
