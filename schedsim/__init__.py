"""
schedsim package.

Simulates classic CPU scheduling disciplines (FCFS, SJF, Priority and
Round-robin) over a fixed workload and reports per-process timings.
"""

__all__ = ["algorithms", "cli"]
