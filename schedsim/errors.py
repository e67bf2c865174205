from __future__ import annotations


class SchedulerError(Exception):
    """Base class for errors raised by schedsim."""


class WorkloadError(SchedulerError, ValueError):
    """A workload record is malformed or out of range."""


class EmptyWorkloadError(SchedulerError, ValueError):
    """A scheduler was asked to run with no processes."""

    def __init__(self, algorithm: str) -> None:
        super().__init__(f"{algorithm}: cannot schedule an empty process list")
        self.algorithm = algorithm
