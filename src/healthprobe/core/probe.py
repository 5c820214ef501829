"""Single-pass probe orchestration.

A run moves through IDLE, SAMPLING and EVALUATING, then either stops in
NO_ACTION or goes through REPORTING to DONE.
"""

from collections.abc import Callable
from datetime import datetime

from healthprobe.core.evaluate import evaluate
from healthprobe.core.models import (
    LogFilter,
    ProbeResult,
    ProbeState,
    ResourceSample,
    Thresholds,
    WarningSet,
)
from healthprobe.core.ports import (
    EventLogReaderPort,
    MetricSamplerPort,
    NotifierPort,
    WatermarkStoragePort,
)
from healthprobe.core.query import build_event_query
from healthprobe.core.report import (
    DEFAULT_RECORD_LIMIT,
    format_report,
    format_title,
    newest_timestamp,
    select_recent,
)
from healthprobe.logging import get_logger

logger = get_logger(__name__)


class HealthProbe:
    """Runs one sampling pass and reports breached thresholds.

    Example:
        ```python
        probe = HealthProbe(
            thresholds=settings.thresholds,
            log_filter=settings.log_filter,
            sampler=PsutilSampler(),
            reader=WindowsEventLogReader(),
            watermark=SQLiteWatermarkStorage("healthprobe.db"),
            notifier=ChatworkNotifier(api_key, room_id),
        )
        result = await probe.run()
        ```
    """

    def __init__(
        self,
        thresholds: Thresholds,
        log_filter: LogFilter,
        sampler: MetricSamplerPort,
        reader: EventLogReaderPort,
        watermark: WatermarkStoragePort,
        notifier: NotifierPort,
        record_limit: int = DEFAULT_RECORD_LIMIT,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._thresholds = thresholds
        self._log_filter = log_filter
        self._sampler = sampler
        self._reader = reader
        self._watermark = watermark
        self._notifier = notifier
        self._record_limit = record_limit
        self._clock = clock
        self._state = ProbeState.IDLE
        self._transitions: list[ProbeState] = [ProbeState.IDLE]

    @property
    def state(self) -> ProbeState:
        """Current state of the run."""
        return self._state

    def _enter(self, state: ProbeState) -> None:
        logger.debug(
            "Probe state %s -> %s",
            self._state.value,
            state.value,
            extra={"from_state": self._state.value, "to_state": state.value},
        )
        self._state = state
        self._transitions.append(state)

    async def run(self) -> ProbeResult:
        """Sample, evaluate and report if any threshold was reached.

        Returns:
            ProbeResult describing the run.

        Raises:
            SamplingError: If usage could not be sampled.
            EventLogError: If the event log could not be read.
            StorageError: If the watermark could not be saved.
            DeliveryError: If the report could not be delivered.
        """
        if self._state is not ProbeState.IDLE:
            raise RuntimeError("HealthProbe.run() may only be called once")

        self._enter(ProbeState.SAMPLING)
        sample = await self._sampler.sample()
        logger.info(
            "Sampled cpu=%.3f disk=%.3f",
            sample.cpu,
            sample.disk,
            extra={"cpu": sample.cpu, "disk": sample.disk},
        )

        self._enter(ProbeState.EVALUATING)
        warnings = evaluate(sample, self._thresholds)
        if not warnings:
            self._enter(ProbeState.NO_ACTION)
            logger.info("All resources below thresholds, nothing to report")
            return self._result(sample, warnings)

        logger.warning(
            "Thresholds reached: %s",
            ", ".join(warnings.names),
            extra={"warnings": ",".join(warnings.names)},
        )
        self._enter(ProbeState.REPORTING)
        report, record_count = await self._report(sample, warnings)

        self._enter(ProbeState.DONE)
        return self._result(sample, warnings, report, record_count)

    async def _report(
        self, sample: ResourceSample, warnings: WarningSet
    ) -> tuple[str, int]:
        since = await self._watermark.load()
        query = build_event_query(since, self._log_filter)
        logger.debug("Event query: %s", query, extra={"watermark": since.isoformat()})

        fetched = [record async for record in self._reader.read(query)]
        records = select_recent(fetched, self._record_limit)
        logger.info(
            "Read %d event records since %s",
            len(fetched),
            since.isoformat(),
            extra={"record_count": len(fetched)},
        )

        report = format_report(warnings, sample, self._thresholds, records)

        newest = newest_timestamp(fetched)
        if newest is not None:
            await self._watermark.save(newest)
            logger.debug("Watermark moved to %s", newest.isoformat())

        await self._notifier.send(format_title(self._clock()), report)
        logger.info(
            "Report delivered",
            extra={"record_count": len(fetched), "reported_count": len(records)},
        )
        return report, len(fetched)

    def _result(
        self,
        sample: ResourceSample,
        warnings: WarningSet,
        report: str | None = None,
        record_count: int = 0,
    ) -> ProbeResult:
        return ProbeResult(
            state=self._state,
            sample=sample,
            warnings=warnings,
            report=report,
            record_count=record_count,
            transitions=list(self._transitions),
        )
