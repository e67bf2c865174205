from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .gantt import build_gantt, render_title
from .models import ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round-robin).",
    )
    parser.add_argument(
        "workload",
        help="Path to a CSV (id,burst,arrival[,priority]) or JSON workload file.",
    )
    parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to run (default: fcfs sjf priority rr).",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Print a single comparison table instead of per-algorithm reports.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling events (dispatch, preemption, completion).",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(render_title(result.algorithm), markup=False, highlight=False)
    console.print(build_gantt(result.timeline), highlight=False)
    console.print()

    summary = result.summary
    footers = {
        "Wait": f"Average\n{summary.average_waiting_time:.2f}" if summary else "",
        "Turnaround": f"Average\n{summary.average_turnaround_time:.2f}" if summary else "",
        "Exit": f"Throughput\n{summary.throughput:.2f}/t" if summary else "",
    }

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for h in ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]:
        justify = "center" if h in {"ID", "Priority"} else "right"
        table.add_column(h, footer=footers.get(h, ""), justify=justify)

    for p in result.processes:
        table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_duration),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    console.print(table)
    console.print()


def _print_comparison(results: List[ScheduleResult], console: Console) -> None:
    table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    table.add_column("Algorithm")
    table.add_column("Quantum", justify="right")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Throughput", justify="right")

    for result in results:
        summary = result.summary
        table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary.average_waiting_time:.2f}" if summary else "",
            f"{summary.average_turnaround_time:.2f}" if summary else "",
            f"{summary.throughput:.2f}/t" if summary else "",
        )

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console(no_color=args.no_color)
    err_console = Console(stderr=True)

    try:
        processes = load_workload(args.workload)
        logger.debug("Running %s over %d processes", ", ".join(args.algorithms), len(processes))
        results = [run_algorithm(name, processes) for name in args.algorithms]
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] cannot read workload: {escape(str(exc))}", soft_wrap=True)
        return 1
    except (SchedulerError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        return 1

    if args.compare:
        _print_comparison(results, console)
        return 0

    for result in results:
        _print_result(result, console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
