"""Timeline events, summaries and filter descriptions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from perfmodel.costs import Unit
from perfmodel.symbols import Symbol

INVALID_CPU_ID = (1 << 32) - 1
INVALID_TID = -1
INVALID_PID = -1
MAX_TIME = (1 << 64) - 1


@dataclass
class Event:
    """A single sample on the timeline."""

    time: int = 0
    cost: int = 0
    type: int = -1
    stack_id: int = -1
    cpu_id: int = INVALID_CPU_ID


@dataclass(frozen=True)
class TimeRange:
    """A closed range of timestamps."""

    start: int = 0
    end: int = 0

    def is_valid(self) -> bool:
        """Whether either bound is set."""
        return self.start > 0 or self.end > 0

    def is_empty(self) -> bool:
        """Whether start and end coincide."""
        return self.start == self.end

    def delta(self) -> int:
        """Length of the range."""
        return self.end - self.start

    def contains(self, time: int) -> bool:
        """Whether ``time`` lies within the range, bounds included."""
        return self.start <= time <= self.end

    def normalized(self) -> TimeRange:
        """The range with start and end in ascending order."""
        if self.end < self.start:
            return TimeRange(self.end, self.start)
        return self


MAX_TIME_RANGE = TimeRange(0, MAX_TIME)


class ThreadState(enum.Enum):
    """Scheduling state of a thread."""

    UNKNOWN = enum.auto()
    ON_CPU = enum.auto()
    OFF_CPU = enum.auto()


@dataclass
class ThreadEvents:
    """The events and lifetime of one thread."""

    pid: int = INVALID_PID
    tid: int = INVALID_TID
    time: TimeRange = MAX_TIME_RANGE
    events: list[Event] = field(default_factory=list)
    name: str = ""
    last_switch_time: int = MAX_TIME
    off_cpu_time: int = 0
    state: ThreadState = ThreadState.UNKNOWN


@dataclass
class CpuEvents:
    """The events that occurred on one CPU."""

    cpu_id: int = INVALID_CPU_ID
    events: list[Event] = field(default_factory=list)


@dataclass
class CostSummary:
    """Sample count and total period of one cost type; the unit is not compared."""

    label: str = ""
    sample_count: int = 0
    total_period: int = 0
    unit: Unit = field(default=Unit.UNKNOWN, compare=False)

    def __str__(self) -> str:
        return (
            f"CostSummary{{label = {self.label}, sampleCount = {self.sample_count}, "
            f"totalPeriod = {self.total_period}}}"
        )


@dataclass
class Summary:
    """General information about a recording."""

    application_running_time: int = 0
    thread_count: int = 0
    process_count: int = 0
    command: str = ""
    lost_chunks: int = 0
    host_name: str = ""
    linux_kernel_version: str = ""
    perf_version: str = ""
    cpu_description: str = ""
    cpu_id: str = ""
    cpu_architecture: str = ""
    cpus_online: int = 0
    cpus_available: int = 0
    cpu_sibling_cores: str = ""
    cpu_sibling_threads: str = ""
    total_memory_in_kib: int = 0
    # only non-zero when context switch events were recorded
    on_cpu_time: int = 0
    off_cpu_time: int = 0
    sample_count: int = 0
    costs: list[CostSummary] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class EventResults:
    """All timeline data of a recording."""

    threads: list[ThreadEvents] = field(default_factory=list)
    cpus: list[CpuEvents] = field(default_factory=list)
    stacks: list[list[int]] = field(default_factory=list)
    total_costs: list[CostSummary] = field(default_factory=list)
    off_cpu_time_cost_id: int = -1

    def find_thread(self, pid: int, tid: int) -> ThreadEvents | None:
        """Return the most recently added thread with ``pid`` and ``tid``, or None."""
        return next(
            (t for t in reversed(self.threads) if t.pid == pid and t.tid == tid),
            None,
        )


@dataclass
class FilterAction:
    """Restrictions on which events to keep."""

    time: TimeRange = field(default_factory=TimeRange)
    process_id: int = INVALID_PID
    thread_id: int = INVALID_PID
    cpu_id: int = INVALID_CPU_ID
    exclude_process_ids: list[int] = field(default_factory=list)
    exclude_thread_ids: list[int] = field(default_factory=list)
    exclude_cpu_ids: list[int] = field(default_factory=list)
    include_symbols: set[Symbol] = field(default_factory=set)
    exclude_symbols: set[Symbol] = field(default_factory=set)

    def is_valid(self) -> bool:
        """Whether any restriction is set."""
        return bool(
            self.time.is_valid()
            or self.process_id != INVALID_PID
            or self.thread_id != INVALID_PID
            or self.cpu_id != INVALID_CPU_ID
            or self.exclude_process_ids
            or self.exclude_thread_ids
            or self.exclude_cpu_ids
            or self.include_symbols
            or self.exclude_symbols
        )


@dataclass
class ZoomAction:
    """A time range to zoom into."""

    time: TimeRange = field(default_factory=TimeRange)

    def is_valid(self) -> bool:
        """Whether the time range is set."""
        return self.time.is_valid()