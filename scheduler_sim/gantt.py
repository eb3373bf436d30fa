from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Interval


def coalesce(intervals: Sequence[Interval]) -> List[Interval]:
    """
    Merge adjacent intervals with the same occupant.

    Preemptive priority emits one interval per tick; for display a process
    that keeps the CPU for several ticks reads better as a single bar.
    """
    merged: List[Interval] = []
    for iv in intervals:
        if merged and merged[-1].pid == iv.pid and merged[-1].end == iv.start:
            merged[-1] = Interval(start=merged[-1].start, end=iv.end, pid=iv.pid)
        else:
            merged.append(iv)
    return merged


def render_gantt(intervals: Sequence[Interval]) -> str:
    """
    Plain-text Gantt chart, one ``label : [start -> end]`` entry per bar.
    """
    if not intervals:
        return "(no execution)"

    entries = [f"{iv.label} : [{iv.start} -> {iv.end}]" for iv in coalesce(intervals)]
    return "\n".join(["Gantt Chart (pid : [start -> end])", "  ".join(entries)])


def build_rich_gantt(intervals: Sequence[Interval]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not intervals:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"

    for iv in coalesce(intervals):
        # Each tick is drawn three cells wide so the time marks line up.
        width = iv.duration * 3
        if iv.is_idle:
            timeline.append("·" * width, style="dim")
            labels.append(iv.label[:width].ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(iv.pid)}")
            labels.append(iv.label[:width].ljust(width), style="bold")

        time_marks += f"{iv.end:>{width}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
