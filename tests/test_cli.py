import io
from pathlib import Path

from scheduler_sim.cli import main
from scheduler_sim.gantt import coalesce, render_gantt
from scheduler_sim.models import Interval


def test_no_command_runs_sample_through_both(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "Preemptive Priority" in out


def test_run_plain_gantt(capsys):
    assert main(["run", "-a", "pps", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "P1 : [0 -> 1]  P2 : [1 -> 4]  P1 : [4 -> 8]" in out


def test_run_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n1 2 3 0\n"))
    assert main(["run", "-a", "rr", "-w", "-", "-q", "4", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "idle : [0 -> 2]  P1 : [2 -> 5]" in out


def test_compare_table(tmp_path: Path, capsys):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\n1,0,3,1\n2,1,2,0\n")
    assert main(["compare", "-w", str(p)]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out


def test_invalid_input_exits_1(capsys):
    assert main(["run", "-a", "rr", "-q", "0"]) == 1
    assert "Error" in capsys.readouterr().out


def test_missing_workload_exits_1(tmp_path: Path, capsys):
    assert main(["run", "-a", "pps", "-w", str(tmp_path / "nope.json")]) == 1


def test_unknown_algorithm_exits_1(capsys):
    assert main(["run", "-a", "sjf"]) == 1


def test_coalesce_and_render():
    ivs = [Interval(0, 1), Interval(1, 2, pid=1), Interval(2, 3, pid=1), Interval(3, 4, pid=2)]
    assert coalesce(ivs) == [Interval(0, 1), Interval(1, 3, pid=1), Interval(3, 4, pid=2)]
    assert render_gantt(ivs).splitlines()[1] == "idle : [0 -> 1]  P1 : [1 -> 3]  P2 : [3 -> 4]"
    assert render_gantt([]) == "(no execution)"
