from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0  # lower value = more urgent


@dataclass
class ProcessState:
    """
    Mutable bookkeeping for one process during a single scheduling run.
    """

    process: Process
    remaining: int = field(init=False)
    start_time: Optional[int] = None
    completion_time: Optional[int] = None

    def __post_init__(self) -> None:
        self.remaining = self.process.burst_time

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def finished(self) -> bool:
        return self.completion_time is not None

    def dispatch(self, tick: int) -> None:
        # Only the first dispatch counts.
        if self.start_time is None:
            self.start_time = tick

    def run(self, ticks: int) -> None:
        if ticks <= 0 or ticks > self.remaining:
            raise RuntimeError(f"P{self.pid} cannot run for {ticks} ticks ({self.remaining} remaining)")
        self.remaining -= ticks

    def finish(self, tick: int) -> None:
        if self.finished:
            raise RuntimeError(f"P{self.pid} already completed at {self.completion_time}")
        if self.remaining:
            raise RuntimeError(f"P{self.pid} still has {self.remaining} ticks of work")
        self.completion_time = tick

    @property
    def turnaround_time(self) -> Optional[int]:
        if self.completion_time is None:
            return None
        return self.completion_time - self.process.arrival_time

    @property
    def waiting_time(self) -> Optional[int]:
        turnaround = self.turnaround_time
        if turnaround is None:
            return None
        return turnaround - self.process.burst_time

    @property
    def response_time(self) -> Optional[int]:
        if self.start_time is None:
            return None
        return self.start_time - self.process.arrival_time


@dataclass(frozen=True)
class Interval:
    """
    One contiguous span of the timeline. ``pid`` is None for an idle span.
    """

    start: int
    end: int
    pid: Optional[int] = None

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def label(self) -> str:
        return "idle" if self.pid is None else f"P{self.pid}"


@dataclass
class SystemMetrics:
    avg_waiting: float
    avg_turnaround: float
    avg_response: float
    cpu_busy_time: int
    makespan: int
    cpu_utilization: float  # percentage, 0-100
    throughput: float
    context_switches: int


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessState] = field(default_factory=list)
    timeline: List[Interval] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
