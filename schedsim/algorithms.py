from __future__ import annotations

import logging
from typing import Callable, List, Optional, Set, Tuple

from .errors import EmptyWorkloadError
from .metrics import make_result, summarize_run
from .models import ProcessResult, ProcessSpec, ScheduleResult, TimelineSegment

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 5

FCFS_TITLE = "First-come, first-serve"
SJF_TITLE = "Shortest-job-first"
PRIORITY_TITLE = "Priority"
RR_TITLE = "Round-robin"

SelectKey = Callable[[ProcessSpec, int], Tuple[int, ...]]


def schedule_fcfs(processes: List[ProcessSpec]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes are serviced in the order given; the list is expected to be
    sorted by arrival time already and is not re-sorted here.
    """
    if not processes:
        raise EmptyWorkloadError(FCFS_TITLE)

    clock = 0
    total_waiting = 0
    total_turnaround = 0
    last_completion = 0
    timeline: List[TimelineSegment] = []
    results: List[ProcessResult] = []

    for p in processes:
        waiting_time = max(0, clock - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        clock = start_time + p.burst_duration

        timeline.append(TimelineSegment(pid=p.pid, start_time=start_time, stop_time=clock))

        row = make_result(p, clock)
        total_waiting += row.waiting_time
        total_turnaround += row.turnaround_time
        last_completion = row.completion_time
        results.append(row)
        logger.debug("%s: process %d runs %d-%d", FCFS_TITLE, p.pid, start_time, clock)

    summary = summarize_run(FCFS_TITLE, len(processes), total_waiting, total_turnaround, last_completion)
    return ScheduleResult(algorithm=FCFS_TITLE, quantum=None, processes=results, timeline=timeline, summary=summary)


def _schedule_preemptive(processes: List[ProcessSpec], algorithm: str, select_key: SelectKey) -> ScheduleResult:
    """
    Unit-tick preemptive simulation shared by SJF and Priority.

    On every tick the ready process with the smallest ``select_key`` runs for
    one time unit. The process that ran on the previous tick keeps the CPU
    when its key ties the minimum; otherwise the earliest process in input
    order wins the tie.
    """
    if not processes:
        raise EmptyWorkloadError(algorithm)

    n = len(processes)
    remaining = [p.burst_duration for p in processes]
    results: List[Optional[ProcessResult]] = [None] * n
    timeline: List[TimelineSegment] = []

    time = 0
    completed = 0
    current: Optional[int] = None
    total_waiting = 0
    total_turnaround = 0
    last_completion = 0

    def key(i: int) -> Tuple[int, ...]:
        return select_key(processes[i], remaining[i])

    while completed < n:
        ready = [i for i, p in enumerate(processes) if p.arrival_time <= time and remaining[i] > 0]
        if not ready:
            # CPU idle until the next arrival.
            time = min(p.arrival_time for i, p in enumerate(processes) if remaining[i] > 0)
            current = None
            continue

        chosen = min(ready, key=key)
        if current in ready and key(current) == key(chosen):
            chosen = current

        spec = processes[chosen]
        if chosen == current:
            timeline[-1].stop_time = time + 1
        else:
            if current is not None:
                logger.debug("%s: t=%d process %d preempts %d", algorithm, time, spec.pid, processes[current].pid)
            timeline.append(TimelineSegment(pid=spec.pid, start_time=time, stop_time=time + 1))

        remaining[chosen] -= 1
        time += 1
        current = chosen

        if remaining[chosen] == 0:
            row = make_result(spec, time)
            results[chosen] = row
            completed += 1
            total_waiting += row.waiting_time
            total_turnaround += row.turnaround_time
            last_completion = row.completion_time
            current = None
            logger.debug("%s: process %d completes at t=%d", algorithm, spec.pid, time)

    summary = summarize_run(algorithm, n, total_waiting, total_turnaround, last_completion)
    return ScheduleResult(
        algorithm=algorithm,
        quantum=None,
        processes=[r for r in results if r is not None],
        timeline=timeline,
        summary=summary,
    )


def schedule_sjf(processes: List[ProcessSpec]) -> ScheduleResult:
    """
    Shortest Job First, preemptive (shortest remaining time first).
    """
    return _schedule_preemptive(processes, SJF_TITLE, lambda p, remaining: (remaining,))


def schedule_priority(processes: List[ProcessSpec]) -> ScheduleResult:
    """
    Preemptive priority scheduling.

    Lower numeric priority value means higher priority. Among processes of
    equal priority the one with the shorter total burst is chosen.
    """
    return _schedule_preemptive(processes, PRIORITY_TITLE, lambda p, remaining: (p.priority, p.burst_duration))


def schedule_rr(processes: List[ProcessSpec], quantum: int = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive during a slice join the ready queue ahead of the
    process that was just preempted.
    """
    if quantum <= 0:
        raise ValueError(f"Round Robin requires a positive quantum, got {quantum}")
    if not processes:
        raise EmptyWorkloadError(RR_TITLE)

    n = len(processes)
    remaining = [p.burst_duration for p in processes]
    results: List[Optional[ProcessResult]] = [None] * n
    timeline: List[TimelineSegment] = []

    # Ready queue of process indices
    ready: List[int] = [0]
    queued: Set[int] = {0}

    time = 0
    completed = 0
    total_waiting = 0
    total_turnaround = 0
    last_completion = 0

    while completed < n:
        idx = ready.pop(0)
        spec = processes[idx]

        # First dispatch: wait for the process to arrive if the CPU is early.
        if remaining[idx] == spec.burst_duration:
            time = max(time, spec.arrival_time)

        slice_start = time
        if remaining[idx] > quantum:
            remaining[idx] -= quantum
            time += quantum
        else:
            time += remaining[idx]
            remaining[idx] = 0
            completed += 1

            row = make_result(spec, time)
            results[idx] = row
            total_waiting += row.waiting_time
            total_turnaround += row.turnaround_time
            last_completion = row.completion_time
            logger.debug("%s: process %d completes at t=%d", RR_TITLE, spec.pid, time)

        for i, p in enumerate(processes):
            if remaining[i] > 0 and p.arrival_time <= time and i not in queued:
                queued.add(i)
                ready.append(i)

        if remaining[idx] > 0:
            ready.append(idx)

        if not ready and completed < n:
            for i in range(n):
                if remaining[i] > 0:
                    queued.add(i)
                    ready.append(i)
                    break

        timeline.append(TimelineSegment(pid=spec.pid, start_time=slice_start, stop_time=time))

    summary = summarize_run(RR_TITLE, n, total_waiting, total_turnaround, last_completion)
    return ScheduleResult(
        algorithm=RR_TITLE,
        quantum=quantum,
        processes=[r for r in results if r is not None],
        timeline=timeline,
        summary=summary,
    )


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: List[ProcessSpec]) -> ScheduleResult:
    """
    Dispatch to the requested algorithm by its short name.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes)
