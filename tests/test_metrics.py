import pytest

from scheduler_sim.metrics import compute_system_metrics, summarize_process_metrics
from scheduler_sim.models import Interval, Process, ProcessState


def _finished(pid, arrival, burst, start, completion):
    st = ProcessState(Process(pid, arrival_time=arrival, burst_time=burst))
    st.dispatch(start)
    st.run(burst)
    st.finish(completion)
    return st


def test_idle_time_lowers_utilization_and_counts_as_switch():
    states = [_finished(1, 2, 3, start=2, completion=5)]
    timeline = [Interval(0, 2), Interval(2, 5, pid=1)]
    sysm = compute_system_metrics(states, timeline)
    assert sysm.makespan == 5
    assert sysm.cpu_busy_time == 3
    assert sysm.cpu_utilization == pytest.approx(60.0)
    assert sysm.throughput == pytest.approx(0.2)
    assert sysm.context_switches == 1
    assert sysm.avg_waiting == 0
    assert sysm.avg_turnaround == 3


def test_adjacent_slices_of_same_process_are_not_switches():
    states = [_finished(1, 0, 2, start=0, completion=2), _finished(2, 0, 1, start=2, completion=3)]
    timeline = [Interval(0, 1, pid=1), Interval(1, 2, pid=1), Interval(2, 3, pid=2)]
    assert compute_system_metrics(states, timeline).context_switches == 1


def test_empty_timeline_is_guarded():
    sysm = compute_system_metrics([], [])
    assert sysm.makespan == 0
    assert sysm.cpu_utilization == 0.0
    assert sysm.throughput == 0.0
    assert sysm.context_switches == 0
    assert sysm.avg_waiting == 0.0


def test_summarize_averages():
    states = [
        _finished(1, 0, 2, start=0, completion=2),
        _finished(2, 1, 2, start=2, completion=4),
    ]
    summary = summarize_process_metrics(states)
    assert summary["avg_waiting"] == pytest.approx(0.5)
    assert summary["avg_turnaround"] == pytest.approx(2.5)
    assert summary["avg_response"] == pytest.approx(0.5)


def test_summarize_rejects_unfinished_states():
    done = _finished(1, 0, 2, start=0, completion=2)
    pending = ProcessState(Process(2, arrival_time=0, burst_time=3))
    with pytest.raises(ValueError, match="unfinished"):
        summarize_process_metrics([done, pending])
