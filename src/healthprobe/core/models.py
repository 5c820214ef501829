"""Core domain models for the health probe."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from healthprobe.core.errors import RangeError


@dataclass(frozen=True)
class Thresholds:
    """Configured usage ratios at which a resource is reported.

    Attributes:
        cpu: Processor utilisation ratio in [0.0, 1.0].
        disk: Storage usage ratio in [0.0, 1.0].
    """

    cpu: float
    disk: float

    def __post_init__(self) -> None:
        for name, value in (("cpu", self.cpu), ("disk", self.disk)):
            # NaN fails both comparisons
            if not 0.0 <= value <= 1.0:
                raise RangeError(f"{name} threshold {value!r} is outside [0, 1]")


@dataclass(frozen=True)
class ResourceSample:
    """Sampled usage ratios for one probe run.

    Attributes:
        cpu: Averaged processor utilisation ratio.
        disk: Used fraction of all local storage volumes.
    """

    cpu: float
    disk: float


@dataclass(frozen=True)
class WarningSet:
    """Resources whose sampled usage reached their threshold."""

    processor: bool = False
    storage: bool = False

    def __bool__(self) -> bool:
        return self.processor or self.storage

    @property
    def names(self) -> list[str]:
        """Names of the triggered flags, processor first."""
        return [
            name
            for name, flag in (("processor", self.processor), ("storage", self.storage))
            if flag
        ]


@dataclass(frozen=True)
class LogFilter:
    """Log sources and severity codes eligible for the event query.

    Attributes:
        sources: Event log names, e.g. ("System", "Application").
        levels: Severity codes, e.g. ("1", "2").
    """

    sources: tuple[str, ...] = ()
    levels: tuple[str, ...] = ()


@dataclass(frozen=True)
class EventRecord:
    """A single record read from the system event log.

    Attributes:
        level: Severity display label (e.g., Error, Warning).
        time_created: Naive local creation time.
        log_name: Name of the log the record belongs to.
        provider: Name of the provider that raised the event.
        event_id: Numeric event identifier.
    """

    level: str
    time_created: datetime
    log_name: str
    provider: str
    event_id: int


class ProbeState(Enum):
    """States a probe run passes through."""

    IDLE = "idle"
    SAMPLING = "sampling"
    EVALUATING = "evaluating"
    NO_ACTION = "no_action"
    REPORTING = "reporting"
    DONE = "done"


@dataclass
class ProbeResult:
    """Outcome of a single probe run.

    Attributes:
        state: Last state reached (NO_ACTION or DONE).
        sample: The sampled resource usage.
        warnings: Triggered warning flags.
        report: Rendered report body, None when nothing was reported.
        record_count: Number of event records retrieved by the query.
        transitions: States visited, in order.
    """

    state: ProbeState
    sample: ResourceSample
    warnings: WarningSet
    report: str | None = None
    record_count: int = 0
    transitions: list[ProbeState] = field(default_factory=list)
