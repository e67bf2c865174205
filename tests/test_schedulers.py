import dataclasses

import pytest

from schedsim.algorithms import (
    ALGORITHMS,
    DEFAULT_QUANTUM,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from schedsim.errors import EmptyWorkloadError
from schedsim.models import ProcessSpec


def _procs():
    return [
        ProcessSpec(1, arrival_time=0, burst_duration=5, priority=2),
        ProcessSpec(2, arrival_time=1, burst_duration=3, priority=1),
        ProcessSpec(3, arrival_time=2, burst_duration=8, priority=3),
    ]


def _mixed():
    # Last process arrives after the CPU would otherwise be idle.
    return [
        ProcessSpec(1, arrival_time=0, burst_duration=7, priority=3),
        ProcessSpec(2, arrival_time=2, burst_duration=4, priority=1),
        ProcessSpec(3, arrival_time=4, burst_duration=1, priority=4),
        ProcessSpec(4, arrival_time=5, burst_duration=4, priority=2),
        ProcessSpec(5, arrival_time=20, burst_duration=3, priority=0),
    ]


def _segments(result):
    return [(s.pid, s.start_time, s.stop_time) for s in result.timeline]


def test_fcfs_single_process():
    res = schedule_fcfs([ProcessSpec(1, arrival_time=0, burst_duration=5)])
    p = res.processes[0]
    assert (p.waiting_time, p.turnaround_time, p.completion_time) == (0, 5, 5)
    assert _segments(res) == [(1, 0, 5)]


def test_fcfs_two_processes():
    res = schedule_fcfs([
        ProcessSpec(1, arrival_time=0, burst_duration=5),
        ProcessSpec(2, arrival_time=1, burst_duration=3),
    ])
    first, second = res.processes
    assert (first.waiting_time, first.completion_time) == (0, 5)
    assert (second.waiting_time, second.completion_time) == (4, 8)
    assert res.summary.average_waiting_time == pytest.approx(2.0)
    assert res.summary.average_turnaround_time == pytest.approx(6.0)
    assert res.summary.throughput == pytest.approx(0.25)


def test_fcfs_order():
    res = schedule_fcfs(_procs())
    assert [s.pid for s in res.timeline] == [1, 2, 3]
    assert [p.waiting_time for p in res.processes] == [0, 4, 6]
    for prev, nxt in zip(res.timeline, res.timeline[1:]):
        assert nxt.start_time == prev.stop_time


def test_fcfs_idle_gap_before_late_arrival():
    res = schedule_fcfs([
        ProcessSpec(1, arrival_time=0, burst_duration=2),
        ProcessSpec(2, arrival_time=5, burst_duration=3),
    ])
    assert _segments(res) == [(1, 0, 2), (2, 5, 8)]
    assert res.processes[1].waiting_time == 0
    assert res.processes[1].completion_time == 8


def test_sjf_preempts_for_shorter_job():
    res = schedule_sjf([
        ProcessSpec(1, arrival_time=0, burst_duration=6),
        ProcessSpec(2, arrival_time=1, burst_duration=2),
        ProcessSpec(3, arrival_time=2, burst_duration=8),
    ])
    assert _segments(res) == [(1, 0, 1), (2, 1, 3), (1, 3, 8), (3, 8, 16)]
    assert [p.completion_time for p in res.processes] == [8, 3, 16]
    assert [p.waiting_time for p in res.processes] == [2, 0, 6]
    assert res.summary.average_waiting_time == pytest.approx(8 / 3)


def test_sjf_keeps_running_process_on_tie():
    res = schedule_sjf([
        ProcessSpec(1, arrival_time=1, burst_duration=3),
        ProcessSpec(2, arrival_time=0, burst_duration=4),
    ])
    assert _segments(res) == [(2, 0, 4), (1, 4, 7)]


def test_sjf_tie_without_running_process_uses_input_order():
    res = schedule_sjf([
        ProcessSpec(1, arrival_time=0, burst_duration=1),
        ProcessSpec(2, arrival_time=0, burst_duration=3),
        ProcessSpec(3, arrival_time=0, burst_duration=3),
    ])
    assert _segments(res) == [(1, 0, 1), (2, 1, 4), (3, 4, 7)]


def test_sjf_idles_until_first_arrival():
    res = schedule_sjf([ProcessSpec(1, arrival_time=3, burst_duration=2)])
    assert _segments(res) == [(1, 3, 5)]
    assert res.processes[0].waiting_time == 0
    assert res.processes[0].completion_time == 5


def test_priority_breaks_ties_by_shorter_burst():
    res = schedule_priority([
        ProcessSpec(1, arrival_time=0, burst_duration=5, priority=1),
        ProcessSpec(2, arrival_time=1, burst_duration=2, priority=1),
    ])
    assert _segments(res) == [(1, 0, 1), (2, 1, 3), (1, 3, 7)]
    assert [p.waiting_time for p in res.processes] == [2, 0]


def test_priority_preempts_on_higher_priority_arrival():
    res = schedule_priority([
        ProcessSpec(1, arrival_time=0, burst_duration=4, priority=3),
        ProcessSpec(2, arrival_time=2, burst_duration=3, priority=1),
    ])
    assert _segments(res) == [(1, 0, 2), (2, 2, 5), (1, 5, 7)]
    assert [p.waiting_time for p in res.processes] == [3, 0]


def test_priority_order():
    res = schedule_priority(_procs())
    assert [s.pid for s in res.timeline] == [1, 2, 1, 3]
    assert [p.waiting_time for p in res.processes] == [3, 0, 6]
    assert [p.completion_time for p in res.processes] == [8, 4, 16]


def test_rr_default_quantum():
    res = schedule_rr([
        ProcessSpec(1, arrival_time=0, burst_duration=10),
        ProcessSpec(2, arrival_time=0, burst_duration=5),
    ])
    assert res.quantum == DEFAULT_QUANTUM == 5
    assert _segments(res) == [(1, 0, 5), (2, 5, 10), (1, 10, 15)]
    assert [p.completion_time for p in res.processes] == [15, 10]


def test_rr_new_arrivals_queue_ahead_of_preempted_process():
    res = schedule_rr([
        ProcessSpec(1, arrival_time=0, burst_duration=7),
        ProcessSpec(2, arrival_time=0, burst_duration=7),
        ProcessSpec(3, arrival_time=6, burst_duration=2),
    ])
    assert _segments(res) == [(1, 0, 5), (2, 5, 10), (1, 10, 12), (3, 12, 14), (2, 14, 16)]
    assert [p.waiting_time for p in res.processes] == [5, 9, 6]


def test_rr_idle_gap():
    res = schedule_rr([
        ProcessSpec(1, arrival_time=0, burst_duration=2),
        ProcessSpec(2, arrival_time=10, burst_duration=3),
    ])
    assert _segments(res) == [(1, 0, 2), (2, 10, 13)]
    assert res.processes[1].waiting_time == 0
    assert res.summary.throughput == pytest.approx(2 / 13)


@pytest.mark.parametrize("quantum", [0, -3])
def test_rr_rejects_non_positive_quantum(quantum):
    with pytest.raises(ValueError):
        schedule_rr(_procs(), quantum=quantum)


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_empty_workload_is_rejected(name):
    with pytest.raises(EmptyWorkloadError):
        run_algorithm(name, [])


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_timing_identities_hold(name):
    procs = _mixed()
    res = run_algorithm(name, procs)

    assert [p.pid for p in res.processes] == [p.pid for p in procs]
    total_burst = sum(p.burst_duration for p in procs)
    assert sum(p.turnaround_time for p in res.processes) == (
        sum(p.waiting_time for p in res.processes) + total_burst
    )
    for row in res.processes:
        assert row.waiting_time >= 0
        assert row.turnaround_time == row.burst_duration + row.waiting_time
        assert row.completion_time == row.arrival_time + row.turnaround_time

    assert all(s.stop_time >= s.start_time for s in res.timeline)
    assert sum(s.stop_time - s.start_time for s in res.timeline) == total_burst
    assert res.timeline[-1].stop_time == max(p.completion_time for p in res.processes)


@pytest.mark.parametrize("name", list(ALGORITHMS))
def test_runs_are_independent(name):
    procs = _mixed()
    for other in ALGORITHMS:
        run_algorithm(other, procs)
    assert run_algorithm(name, procs) == run_algorithm(name, _mixed())
    assert procs == _mixed()


def test_run_algorithm_dispatch():
    assert run_algorithm("FCFS", _procs()).algorithm == "First-come, first-serve"
    with pytest.raises(ValueError):
        run_algorithm("mlfq", _procs())


def test_process_spec_is_read_only_and_validated():
    spec = ProcessSpec(1, arrival_time=0, burst_duration=5)
    assert spec.priority == 0
    with pytest.raises(dataclasses.FrozenInstanceError):
        spec.burst_duration = 1
    with pytest.raises(ValueError):
        ProcessSpec(1, arrival_time=0, burst_duration=0)
    with pytest.raises(ValueError):
        ProcessSpec(0, arrival_time=0, burst_duration=1)
    with pytest.raises(ValueError):
        ProcessSpec(1, arrival_time=-1, burst_duration=1)
