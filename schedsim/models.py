from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ProcessSpec:
    """
    Static description of one process. Schedulers never mutate it; all
    per-run state lives inside the scheduler call.
    """

    pid: int
    arrival_time: int
    burst_duration: int
    priority: int = 0

    def __post_init__(self) -> None:
        if self.pid <= 0:
            raise ValueError(f"Process id must be positive, got {self.pid}")
        if self.arrival_time < 0:
            raise ValueError(f"Process {self.pid}: arrival time must be >= 0, got {self.arrival_time}")
        if self.burst_duration <= 0:
            raise ValueError(f"Process {self.pid}: burst duration must be > 0, got {self.burst_duration}")


@dataclass
class TimelineSegment:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    stop_time: int


@dataclass
class ProcessResult:
    pid: int
    priority: int
    burst_duration: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class RunSummary:
    average_waiting_time: float
    average_turnaround_time: float
    throughput: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessResult] = field(default_factory=list)
    timeline: List[TimelineSegment] = field(default_factory=list)
    summary: Optional[RunSummary] = None
