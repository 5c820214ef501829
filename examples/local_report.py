"""Run the probe against this host and print the report instead of posting it.

Run with:
    python examples/local_report.py

Event records come from an in-memory reader, so this works on any platform.
Thresholds are set to zero so a report is always produced.
"""

import asyncio
from datetime import datetime, timedelta

from healthprobe import (
    EventRecord,
    HealthProbe,
    InMemoryEventLogReader,
    InMemoryWatermarkStorage,
    LogFilter,
    PsutilSampler,
    Thresholds,
    configure_logging,
)


class PrintNotifier:
    """Notifier writing the message to stdout."""

    async def send(self, title: str, message: str) -> None:
        print(title)
        print(message)


async def main() -> None:
    now = datetime.now()
    reader = InMemoryEventLogReader(
        [
            EventRecord("Error", now - timedelta(minutes=3), "System", "disk", 153),
            EventRecord("Warning", now - timedelta(minutes=1), "System", "Ntfs", 140),
        ]
    )
    watermark = InMemoryWatermarkStorage()
    probe = HealthProbe(
        thresholds=Thresholds(cpu=0.0, disk=0.0),
        log_filter=LogFilter(sources=("System",), levels=("2", "3")),
        sampler=PsutilSampler(sample_count=4),
        reader=reader,
        watermark=watermark,
        notifier=PrintNotifier(),
    )
    result = await probe.run()
    print(f"state={result.state.value} watermark={await watermark.load():%Y-%m-%d %H:%M:%S}")
    print(f"query={reader.queries[0]}")


if __name__ == "__main__":
    configure_logging("DEBUG")
    asyncio.run(main())
