from __future__ import annotations

import csv
import json
import random
from pathlib import Path
from typing import Iterable, List, Optional

from .models import Process

ARRIVAL_RANGE = (0, 4)
BURST_RANGE = (1, 10)
PRIORITY_RANGE = (1, 5)


def sample_processes() -> List[Process]:
    """
    The fixed five-process demo batch.
    """
    return [
        Process("P1", arrival_time=0, burst_time=8, priority=3),
        Process("P2", arrival_time=1, burst_time=4, priority=2),
        Process("P3", arrival_time=2, burst_time=9, priority=4),
        Process("P4", arrival_time=3, burst_time=5, priority=1),
        Process("P5", arrival_time=4, burst_time=2, priority=5),
    ]


def random_processes(count: int = 5, seed: Optional[int] = None) -> List[Process]:
    """
    Generate ``count`` processes named P1..Pn with random arrival, burst and
    priority values. Pass ``seed`` for a reproducible batch.
    """
    rng = random.Random(seed)
    return [
        Process(
            f"P{i}",
            arrival_time=rng.randint(*ARRIVAL_RANGE),
            burst_time=rng.randint(*BURST_RANGE),
            priority=rng.randint(*PRIORITY_RANGE),
        )
        for i in range(1, count + 1)
    ]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def workload_records(processes: Iterable[Process]) -> List[dict]:
    return [
        {
            "pid": p.pid,
            "arrival_time": p.arrival_time,
            "burst_time": p.burst_time,
            "priority": p.priority,
        }
        for p in processes
    ]


def dump_workload(processes: Iterable[Process], path: str | Path) -> Path:
    """
    Write processes to a JSON workload file readable by load_workload.
    """
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(workload_records(processes), f, indent=2)
    return path


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    try:
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid priority in process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
