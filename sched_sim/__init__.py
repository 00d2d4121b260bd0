"""
CPU scheduling simulator.

Computes the Gantt chart and waiting/turnaround metrics that FCFS, SJF,
Round Robin and Priority scheduling produce for a batch of processes, and
compares the four on the same workload.
"""

from .algorithms import UnknownAlgorithmError, schedule
from .compare import run_all
from .models import Comparison, GanttSegment, Process, ScheduleResult

__all__ = [
    "Comparison",
    "GanttSegment",
    "Process",
    "ScheduleResult",
    "UnknownAlgorithmError",
    "run_all",
    "schedule",
]
