from __future__ import annotations

from .errors import EmptyWorkloadError
from .models import ProcessSpec, ProcessResult, RunSummary


def summarize_run(
    algorithm: str,
    count: int,
    total_waiting: int,
    total_turnaround: int,
    last_completion: int,
) -> RunSummary:
    """
    Turn the totals a scheduler accumulated during one run into averages
    and throughput (processes per time unit up to the last completion).
    """
    if count == 0 or last_completion <= 0:
        raise EmptyWorkloadError(algorithm)

    return RunSummary(
        average_waiting_time=total_waiting / count,
        average_turnaround_time=total_turnaround / count,
        throughput=count / last_completion,
    )


def make_result(spec: ProcessSpec, completion_time: int) -> ProcessResult:
    """
    Build the report row for a process that finished at ``completion_time``.

    Waiting time is clamped at zero; turnaround and completion are derived
    from it so that turnaround == burst + wait and completion == arrival +
    turnaround always hold.
    """
    waiting_time = max(0, completion_time - spec.burst_duration - spec.arrival_time)
    turnaround_time = spec.burst_duration + waiting_time
    return ProcessResult(
        pid=spec.pid,
        priority=spec.priority,
        burst_duration=spec.burst_duration,
        arrival_time=spec.arrival_time,
        waiting_time=waiting_time,
        turnaround_time=turnaround_time,
        completion_time=spec.arrival_time + turnaround_time,
    )
