from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, run_algorithm
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import Process, ScheduleResult
from .workload_io import load_workload, parse_plain_workload, sample_processes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-sim",
        description=(
            "CPU scheduling simulator (Round Robin, Preemptive Priority). "
            "Without a command, runs the built-in sample through both algorithms."
        ),
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every dispatch, idle period and completion.",
    )

    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (rr, pps).",
    )
    _add_workload_args(run_parser)
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the Gantt chart as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run both algorithms on the same workload and compare average metrics.",
    )
    _add_workload_args(compare_parser)

    return parser


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to a JSON, CSV or plain-text workload, or '-' to read the plain format "
        "from stdin (default: built-in sample).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for Round Robin (ignored by pps, default: {DEFAULT_QUANTUM}).",
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _read_processes(workload: Optional[str]) -> List[Process]:
    if workload is None:
        logger.info("No workload given; using the built-in sample")
        return sample_processes()
    if workload == "-":
        return parse_plain_workload(sys.stdin.read())
    return load_workload(Path(workload))


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False, soft_wrap=True)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for st in sorted(result.processes, key=lambda s: s.pid):
        p = st.process
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(st.start_time),
            str(st.completion_time),
            str(st.waiting_time),
            str(st.turnaround_time),
            str(st.response_time),
        )

    console.print(proc_table)
    console.print()

    if result.system:
        sys_metrics = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Total time (makespan)", str(sys_metrics.makespan))
        sys_table.add_row("Avg waiting", f"{sys_metrics.avg_waiting:.2f}")
        sys_table.add_row("Avg turnaround", f"{sys_metrics.avg_turnaround:.2f}")
        sys_table.add_row("Avg response", f"{sys_metrics.avg_response:.2f}")
        sys_table.add_row("CPU utilization", f"{sys_metrics.cpu_utilization:.2f}%")
        sys_table.add_row("Throughput (proc/time)", f"{sys_metrics.throughput:.3f}")
        sys_table.add_row("Context switches", str(sys_metrics.context_switches))

        console.print(sys_table)


def _print_comparison(processes: List[Process], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Context switches", justify="right")

    for alg in ALGORITHMS:
        result = run_algorithm(alg, processes, quantum=quantum)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
            str(result.system.context_switches),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            processes = _read_processes(args.workload)
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            processes = _read_processes(args.workload)
            _print_comparison(processes, args.quantum, console)
            return 0

        # No command: the sample set through every algorithm.
        processes = sample_processes()
        for alg in ALGORITHMS:
            _print_result(run_algorithm(alg, processes, quantum=DEFAULT_QUANTUM), console)
            console.print()
        return 0
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
