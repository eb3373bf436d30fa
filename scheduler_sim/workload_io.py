from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List

from .models import Process


def sample_processes() -> List[Process]:
    """
    Built-in process set used when no workload is given.
    """
    return [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=1),
        Process(3, arrival_time=2, burst_time=8, priority=4),
        Process(4, arrival_time=3, burst_time=6, priority=3),
    ]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON, CSV or plain-text file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    return parse_plain_workload(path.read_text(encoding="utf-8"))


def parse_plain_workload(text: str) -> List[Process]:
    """
    Parse the plain whitespace format::

        n
        pid arrival burst priority
        ...

    Tokens may be split across lines arbitrarily; only their order matters.
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("Expected the number of processes followed by 'pid arrival burst priority' records")

    try:
        count = int(tokens[0])
    except ValueError as exc:
        raise ValueError(f"Invalid process count: {tokens[0]!r}") from exc
    if count < 0:
        raise ValueError(f"Invalid process count: {count}")

    fields = tokens[1:]
    if len(fields) < count * 4:
        raise ValueError(f"Expected {count} records of 4 fields, got {len(fields)} fields")

    processes: List[Process] = []
    for i in range(count):
        record = fields[i * 4 : i * 4 + 4]
        try:
            pid, arrival_time, burst_time, priority = (int(v) for v in record)
        except ValueError as exc:
            raise ValueError(f"Invalid process record {i + 1}: {' '.join(record)!r}") from exc
        processes.append(
            Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)
        )

    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise ValueError("JSON workload must be a list of process objects")

    processes: List[Process] = []
    for entry in raw:
        processes.append(_process_from_mapping(entry))

    return processes


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _parse_pid(mapping["pid"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def _parse_pid(value) -> int:
    # Accept both 3 and "P3".
    if isinstance(value, str) and value[:1] in ("P", "p"):
        value = value[1:]
    return int(value)
