from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

from .errors import InvalidInput
from .metrics import compute_system_metrics
from .models import Interval, Process, ProcessState, ScheduleResult
from .timeline import TimelineBuilder

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2

Schedule = Tuple[List[Interval], List[ProcessState]]


def validate_processes(processes: List[Process]) -> None:
    """
    Reject process sets that cannot be simulated.
    """
    if not processes:
        raise InvalidInput("at least one process is required")

    for p in processes:
        for name in ("pid", "arrival_time", "burst_time", "priority"):
            value = getattr(p, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInput(f"{name} must be an integer, got {value!r}")

    seen: set[int] = set()
    for p in processes:
        if p.pid <= 0:
            raise InvalidInput(f"process id must be a positive integer, got {p.pid}")
        if p.pid in seen:
            raise InvalidInput(f"duplicate process id {p.pid}")
        seen.add(p.pid)
        if p.arrival_time < 0:
            raise InvalidInput(f"P{p.pid}: arrival time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise InvalidInput(f"P{p.pid}: burst time must be > 0, got {p.burst_time}")


def _validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidInput(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    return quantum


def _finalize(state: ProcessState, tick: int) -> None:
    state.finish(tick)
    logger.debug(
        "P%d completed at %d (turnaround=%d, waiting=%d)",
        state.pid,
        tick,
        state.turnaround_time,
        state.waiting_time,
    )


def run_round_robin(processes: List[Process], quantum: int) -> Schedule:
    """
    Round Robin scheduling with a fixed time quantum.

    Arrivals are admitted in (arrival, pid) order. A process whose slice ends
    while it still has work goes to the tail of the queue, behind anything
    that arrived during (or exactly at the end of) that slice.
    """
    quantum = _validate_quantum(quantum)
    validate_processes(processes)

    # Fresh state per run so the same descriptors can be simulated again.
    states: Dict[int, ProcessState] = {p.pid: ProcessState(p) for p in processes}
    pending = sorted(processes, key=lambda p: (p.arrival_time, p.pid))
    next_idx = 0

    builder = TimelineBuilder()
    ready: Deque[int] = deque()

    def admit_arrivals(current_time: int) -> None:
        nonlocal next_idx
        while next_idx < len(pending) and pending[next_idx].arrival_time <= current_time:
            ready.append(pending[next_idx].pid)
            next_idx += 1

    admit_arrivals(builder.clock)

    while True:
        if not ready:
            if next_idx >= len(pending):
                break
            # CPU is idle until the next arrival.
            builder.idle_until(pending[next_idx].arrival_time)
            logger.debug("idle until %d", builder.clock)
            admit_arrivals(builder.clock)
            continue

        pid = ready.popleft()
        state = states[pid]
        state.dispatch(builder.clock)

        run_time = min(quantum, state.remaining)
        interval = builder.execute(pid, run_time)
        state.run(run_time)
        logger.debug("P%d ran [%d, %d), %d remaining", pid, interval.start, interval.end, state.remaining)

        # Arrivals during this slice are queued ahead of the preempted process.
        admit_arrivals(builder.clock)

        if state.remaining > 0:
            ready.append(pid)
        else:
            _finalize(state, builder.clock)

    logger.info("Round Robin (q=%d): %d processes, makespan %d", quantum, len(states), builder.clock)
    return builder.intervals, [states[p.pid] for p in processes]


def run_preemptive_priority(processes: List[Process]) -> Schedule:
    """
    Preemptive priority scheduling, re-evaluated every tick.

    Lower numeric priority is more urgent. The ready heap is ordered by
    (priority, arrival, pid), which is a total order, so the choice at every
    tick is unambiguous. A process pushed back after its tick keeps its key
    and competes with same-tick arrivals on equal terms.
    """
    validate_processes(processes)

    states: Dict[int, ProcessState] = {p.pid: ProcessState(p) for p in processes}
    pending = sorted(processes, key=lambda p: (p.arrival_time, p.pid))
    next_idx = 0

    builder = TimelineBuilder()
    ready: List[Tuple[int, int, int]] = []

    def admit_arrivals(current_time: int) -> None:
        nonlocal next_idx
        while next_idx < len(pending) and pending[next_idx].arrival_time <= current_time:
            p = pending[next_idx]
            heapq.heappush(ready, (p.priority, p.arrival_time, p.pid))
            next_idx += 1

    while True:
        admit_arrivals(builder.clock)

        if not ready:
            if next_idx >= len(pending):
                break
            builder.idle_until(pending[next_idx].arrival_time)
            logger.debug("idle until %d", builder.clock)
            continue

        key = heapq.heappop(ready)
        pid = key[2]
        state = states[pid]
        state.dispatch(builder.clock)

        # One tick at a time so a new arrival can preempt at any boundary.
        builder.execute(pid, 1)
        state.run(1)

        admit_arrivals(builder.clock)

        if state.remaining > 0:
            heapq.heappush(ready, key)
        else:
            _finalize(state, builder.clock)

    logger.info("Preemptive Priority: %d processes, makespan %d", len(states), builder.clock)
    return builder.intervals, [states[p.pid] for p in processes]


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    if quantum is None:
        quantum = DEFAULT_QUANTUM
    timeline, states = run_round_robin(processes, quantum)
    result = ScheduleResult(algorithm="Round Robin", quantum=quantum, processes=states, timeline=timeline)
    result.system = compute_system_metrics(states, timeline)
    return result


def schedule_pps(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Preemptive priority has no quantum; the argument is accepted and ignored
    so every entry in ALGORITHMS shares one signature.
    """
    timeline, states = run_preemptive_priority(processes)
    result = ScheduleResult(algorithm="Preemptive Priority", quantum=None, processes=states, timeline=timeline)
    result.system = compute_system_metrics(states, timeline)
    return result


ALGORITHMS: Dict[str, Callable[..., ScheduleResult]] = {
    "rr": schedule_rr,
    "pps": schedule_pps,
}

ALIASES = {
    "round-robin": "rr",
    "priority": "pps",
}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm and attach system metrics.
    """
    key = name.lower()
    key = ALIASES.get(key, key)
    if key not in ALGORITHMS:
        raise InvalidInput(f"Unknown algorithm '{name}' (choose from: {', '.join(ALGORITHMS)})")

    return ALGORITHMS[key](processes, quantum=quantum)
