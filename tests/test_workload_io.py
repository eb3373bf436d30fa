from pathlib import Path

import pytest

from scheduler_sim.workload_io import load_workload, parse_plain_workload, sample_processes
from scheduler_sim.models import Process


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"P2","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].pid == 2
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\n1,0,3,1\n2,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == 1
    assert procs[0].priority == 1
    assert procs[1].priority == 0


def test_load_plain_text(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("2\n1 0 5 2\n2 1 3 1\n")
    assert load_workload(p) == [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=1),
    ]


def test_plain_format_errors():
    with pytest.raises(ValueError):
        parse_plain_workload("")
    with pytest.raises(ValueError):
        parse_plain_workload("two\n1 0 5 2\n")
    with pytest.raises(ValueError):
        parse_plain_workload("2\n1 0 5 2\n")
    with pytest.raises(ValueError):
        parse_plain_workload("1\n1 zero 5 2\n")


def test_bad_json_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"burst_time":3}]')
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)


def test_sample_processes():
    procs = sample_processes()
    assert [(p.pid, p.arrival_time, p.burst_time, p.priority) for p in procs] == [
        (1, 0, 5, 2),
        (2, 1, 3, 1),
        (3, 2, 8, 4),
        (4, 3, 6, 3),
    ]
