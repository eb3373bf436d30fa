"""
Scheduler simulator package.

Deterministic simulation of Round Robin and Preemptive Priority CPU
scheduling over a known set of processes, with timeline and metrics output.
"""

from .algorithms import run_algorithm, run_preemptive_priority, run_round_robin
from .errors import InvalidInput
from .models import Interval, Process, ProcessState

__all__ = [
    "InvalidInput",
    "Interval",
    "Process",
    "ProcessState",
    "run_algorithm",
    "run_preemptive_priority",
    "run_round_robin",
]
