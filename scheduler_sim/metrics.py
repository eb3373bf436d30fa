from __future__ import annotations

from typing import List, Sequence

from .models import Interval, ProcessState, SystemMetrics


def compute_system_metrics(processes: Sequence[ProcessState], timeline: Sequence[Interval]) -> SystemMetrics:
    """
    Derive system-wide metrics from finalized process states and the timeline.

    Utilization is a percentage of the makespan spent executing. Context
    switches count every change of occupant between adjacent intervals,
    with idle treated as an occupant of its own.
    """
    makespan = timeline[-1].end if timeline else 0
    cpu_busy_time = sum(iv.duration for iv in timeline if not iv.is_idle)

    cpu_utilization = 100.0 * cpu_busy_time / makespan if makespan > 0 else 0.0
    throughput = len(processes) / makespan if makespan > 0 else 0.0

    context_switches = sum(1 for prev, cur in zip(timeline, timeline[1:]) if prev.pid != cur.pid)

    summary = summarize_process_metrics(processes)
    return SystemMetrics(
        avg_waiting=summary["avg_waiting"],
        avg_turnaround=summary["avg_turnaround"],
        avg_response=summary["avg_response"],
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        cpu_utilization=cpu_utilization,
        throughput=throughput,
        context_switches=context_switches,
    )


def summarize_process_metrics(processes: Sequence[ProcessState]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    unfinished = [p.pid for p in processes if not p.finished]
    if unfinished:
        raise ValueError(f"cannot summarize unfinished processes: {unfinished}")

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }

