from __future__ import annotations

import logging
from typing import Dict, List

from .algorithms import DEFAULT_QUANTUM, schedule_fcfs, schedule_priority, schedule_rr, schedule_sjf
from .models import Comparison, Process, RankedAlgorithm, ScheduleResult

logger = logging.getLogger(__name__)

# Declaration order doubles as the tie-break when waiting times are equal.
COMPARED = [
    ("fcfs", "FCFS"),
    ("sjf", "SJF"),
    ("round_robin", "Round Robin"),
    ("priority", "Priority"),
]


def run_all(processes: List[Process], quantum: int = DEFAULT_QUANTUM) -> Comparison:
    """
    Run every algorithm on the same workload and rank them by average
    waiting time. Each run works on its own copies of the processes.
    """
    results: Dict[str, ScheduleResult] = {
        "fcfs": schedule_fcfs(processes),
        "sjf": schedule_sjf(processes),
        "round_robin": schedule_rr(processes, quantum=quantum),
        "priority": schedule_priority(processes),
    }

    ranking = sorted(
        (
            RankedAlgorithm(name=label, average_waiting_time=results[key].average_waiting_time)
            for key, label in COMPARED
        ),
        key=lambda r: r.average_waiting_time,
    )

    comparison = Comparison(results=results, ranking=ranking)
    logger.info(
        "Best algorithm: %s (avg waiting %.2f)",
        comparison.best_algorithm,
        comparison.best_waiting_time,
    )
    return comparison
