from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

IDLE = "Idle"


@dataclass
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0
    remaining_time: Optional[int] = None
    start_time: Optional[int] = None  # None until first dispatch
    completion_time: int = 0
    turnaround_time: int = 0
    waiting_time: int = 0

    def __post_init__(self) -> None:
        if self.remaining_time is None:
            self.remaining_time = self.burst_time

    @property
    def is_completed(self) -> bool:
        return self.completion_time > 0

    def fresh_copy(self) -> "Process":
        """
        Return an independent copy of this process with all simulation
        outputs reset, ready to be owned by a single scheduling run.
        """
        return replace(
            self,
            remaining_time=self.burst_time,
            start_time=None,
            completion_time=0,
            turnaround_time=0,
            waiting_time=0,
        )

    def finish(self, completion_time: int) -> None:
        self.completion_time = completion_time
        self.turnaround_time = completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time


@dataclass
class GanttSegment:
    """
    One contiguous interval [start_time, end_time) of the Gantt chart,
    attributed to a process or to the idle marker.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: List[GanttSegment] = field(default_factory=list)
    total_time: int = 0
    average_waiting_time: float = 0.0
    average_turnaround_time: float = 0.0
    throughput: float = 0.0

    def metrics(self) -> Dict[str, object]:
        return {
            "algorithm": self.algorithm,
            "quantum": self.quantum,
            "average_waiting_time": self.average_waiting_time,
            "average_turnaround_time": self.average_turnaround_time,
            "throughput": self.throughput,
            "total_time": self.total_time,
        }

    def process_details(self) -> List[Dict[str, object]]:
        return [
            {
                "pid": p.pid,
                "arrival_time": p.arrival_time,
                "burst_time": p.burst_time,
                "priority": p.priority,
                "start_time": p.start_time,
                "completion_time": p.completion_time,
                "turnaround_time": p.turnaround_time,
                "waiting_time": p.waiting_time,
            }
            for p in self.processes
        ]


@dataclass
class RankedAlgorithm:
    name: str
    average_waiting_time: float


@dataclass
class Comparison:
    """
    Results of running every algorithm on the same workload, ranked by
    average waiting time (lowest first).
    """

    results: Dict[str, ScheduleResult]
    ranking: List[RankedAlgorithm]

    @property
    def best_algorithm(self) -> str:
        return self.ranking[0].name

    @property
    def best_waiting_time(self) -> float:
        return self.ranking[0].average_waiting_time
