"""Step definitions for probe run scenarios."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta

import pytest
from pytest_bdd import given, parsers, then, when

from healthprobe.adapters.eventlog import InMemoryEventLogReader
from healthprobe.adapters.storage import InMemoryWatermarkStorage
from healthprobe.core.models import EventRecord, LogFilter, ProbeResult, Thresholds
from healthprobe.core.probe import HealthProbe
from tests.fakes import FIXED_NOW, RecordingNotifier, StaticSampler


@dataclass
class ProbeScenarioContext:
    """State shared between the steps of one scenario."""

    thresholds: Thresholds | None = None
    sampler: StaticSampler | None = None
    reader: InMemoryEventLogReader = field(default_factory=InMemoryEventLogReader)
    watermark: InMemoryWatermarkStorage | None = None
    initial_watermark: datetime | None = None
    notifier: RecordingNotifier = field(default_factory=RecordingNotifier)
    records: list[EventRecord] = field(default_factory=list)
    result: ProbeResult | None = None


@pytest.fixture
def ctx() -> ProbeScenarioContext:
    return ProbeScenarioContext()


@given(parsers.parse("thresholds cpu={cpu:f} and disk={disk:f}"))
def step_thresholds(ctx: ProbeScenarioContext, cpu: float, disk: float) -> None:
    ctx.thresholds = Thresholds(cpu=cpu, disk=disk)


@given(parsers.parse('a stored watermark of "{stamp}"'))
def step_watermark(ctx: ProbeScenarioContext, stamp: str) -> None:
    ctx.initial_watermark = datetime.fromisoformat(stamp)
    ctx.watermark = InMemoryWatermarkStorage(initial=ctx.initial_watermark)


@given(parsers.parse("the host samples cpu={cpu:f} and disk={disk:f}"))
def step_sampler(ctx: ProbeScenarioContext, cpu: float, disk: float) -> None:
    ctx.sampler = StaticSampler(cpu, disk)


@given(parsers.parse("the event log holds {count:d} records"))
def step_records(ctx: ProbeScenarioContext, count: int) -> None:
    # Oldest first, the order the event log returns them
    ctx.records = [
        EventRecord(
            level="Error",
            time_created=FIXED_NOW - timedelta(minutes=minute),
            log_name="System",
            provider="EventLog",
            event_id=minute,
        )
        for minute in reversed(range(count))
    ]
    ctx.reader = InMemoryEventLogReader(ctx.records)


@when("the probe runs")
def step_run(ctx: ProbeScenarioContext) -> None:
    probe = HealthProbe(
        thresholds=ctx.thresholds,
        log_filter=LogFilter(sources=("System",), levels=("1", "2", "3")),
        sampler=ctx.sampler,
        reader=ctx.reader,
        watermark=ctx.watermark,
        notifier=ctx.notifier,
        clock=lambda: FIXED_NOW,
    )
    ctx.result = asyncio.run(probe.run())


@then(parsers.parse('the run ends in state "{state}"'))
def step_state(ctx: ProbeScenarioContext, state: str) -> None:
    assert ctx.result.state.value == state


@then(parsers.parse('the report contains "{text}"'))
def step_report_contains(ctx: ProbeScenarioContext, text: str) -> None:
    assert text in ctx.result.report


@then(parsers.parse('the report does not contain "{text}"'))
def step_report_lacks(ctx: ProbeScenarioContext, text: str) -> None:
    assert text not in ctx.result.report


@then(parsers.parse('the event query starts at "{stamp}"'))
def step_query_bound(ctx: ProbeScenarioContext, stamp: str) -> None:
    assert len(ctx.reader.queries) == 1
    assert f"@SystemTime&gt;='{stamp}'" in ctx.reader.queries[0]


@then("the watermark is moved to the newest record")
def step_watermark_moved(ctx: ProbeScenarioContext) -> None:
    newest = max(r.time_created for r in ctx.records)
    assert ctx.watermark.saves == [newest]


@then("the watermark is unchanged")
def step_watermark_unchanged(ctx: ProbeScenarioContext) -> None:
    assert ctx.watermark.saves == []
    assert asyncio.run(ctx.watermark.load()) == ctx.initial_watermark


@then("no event query was built")
def step_no_query(ctx: ProbeScenarioContext) -> None:
    assert ctx.reader.queries == []


@then("no message was sent")
def step_no_message(ctx: ProbeScenarioContext) -> None:
    assert ctx.notifier.messages == []


@then("one message was sent")
def step_one_message(ctx: ProbeScenarioContext) -> None:
    assert len(ctx.notifier.messages) == 1


@then(parsers.parse("the report lists {count:d} records newest first"))
def step_report_records(ctx: ProbeScenarioContext, count: int) -> None:
    record_lines = [
        line for line in ctx.result.report.splitlines() if line.startswith("[")
    ]
    assert len(record_lines) == count
    ids = [int(line.rsplit(" ", 1)[1]) for line in record_lines]
    assert ids == list(range(count))
