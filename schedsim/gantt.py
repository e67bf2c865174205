from __future__ import annotations

from typing import Dict, List

from rich.text import Text

from .models import TimelineSegment

CELL_WIDTH = 8
COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def render_title(title: str) -> str:
    """
    Banner printed above each algorithm's report.
    """
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, " " * (len(title) // 2) + " " + title, rule])


def build_gantt(segments: List[TimelineSegment]) -> Text:
    """
    Build a Gantt chart: process ids centred in fixed-width cells, with the
    start time of every segment (and the final stop time) underneath.
    """
    if not segments:
        return Text("Gantt schedule\n(no execution)")

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    chart = Text("Gantt schedule\n|")
    for seg in segments:
        label = str(seg.pid)
        padding = " " * ((CELL_WIDTH - len(label)) // 2)
        chart.append(padding)
        chart.append(label, style=f"bold {pid_color(seg.pid)}")
        chart.append(padding + "|")

    chart.append("\n")
    chart.append("\t".join(str(seg.start_time) for seg in segments))
    chart.append(f"\t{segments[-1].stop_time}")
    return chart


def render_gantt(segments: List[TimelineSegment]) -> str:
    """
    Plain-text form of :func:`build_gantt`.
    """
    return build_gantt(segments).plain
