from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from .errors import WorkloadError
from .models import ProcessSpec

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[ProcessSpec]:
    """
    Load a workload file into a list of ProcessSpec objects.

    ``.json`` files hold a list of process objects; anything else is read as
    a header-less CSV of ``id, burst, arrival[, priority]`` records.
    """
    path = Path(path)

    if path.suffix.lower() == ".json":
        processes = _load_json(path)
    else:
        processes = _load_csv(path)

    logger.debug("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_csv(path: Path) -> List[ProcessSpec]:
    with path.open("r", encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    return parse_rows(rows, source=str(path))


def _load_json(path: Path) -> List[ProcessSpec]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: invalid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError(f"{path}: JSON workload must be a list of process objects")

    rows = []
    for line, entry in enumerate(raw, start=1):
        if not isinstance(entry, dict):
            raise WorkloadError(f"{path}:{line}: expected a process object, got {entry!r}")
        try:
            row = [entry["pid"], entry["burst_duration"], entry["arrival_time"]]
        except KeyError as exc:
            raise WorkloadError(f"{path}:{line}: missing field {exc}") from exc
        if entry.get("priority") is not None:
            row.append(entry["priority"])
        rows.append(row)

    return parse_rows(rows, source=str(path))


def parse_rows(rows: Iterable[Sequence], source: str = "<input>") -> List[ProcessSpec]:
    """
    Convert raw ``id, burst, arrival[, priority]`` records into processes.

    Blank records are skipped. Any other record must have 3 or 4 base-10
    integer fields; priority defaults to 0 when absent.
    """
    processes: List[ProcessSpec] = []
    seen: set[int] = set()

    for line, row in enumerate(rows, start=1):
        if not row:
            continue
        if len(row) not in (3, 4):
            raise WorkloadError(f"{source}:{line}: expected 3 or 4 fields, got {len(row)}")

        values = [_parse_int(field, source, line) for field in row]
        pid, burst_duration, arrival_time = values[:3]
        priority = values[3] if len(values) == 4 else 0

        if pid in seen:
            raise WorkloadError(f"{source}:{line}: duplicate process id {pid}")
        seen.add(pid)

        try:
            processes.append(
                ProcessSpec(
                    pid=pid,
                    arrival_time=arrival_time,
                    burst_duration=burst_duration,
                    priority=priority,
                )
            )
        except ValueError as exc:
            raise WorkloadError(f"{source}:{line}: {exc}") from exc

    return processes


def _parse_int(value, source: str, line: int) -> int:
    if isinstance(value, bool):
        raise WorkloadError(f"{source}:{line}: invalid integer {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip(), 10)
    except ValueError as exc:
        raise WorkloadError(f"{source}:{line}: invalid integer {value!r}") from exc
