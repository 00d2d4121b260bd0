from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

from .gantt import fill_idle_gaps, merge_adjacent
from .metrics import compute_result_metrics
from .models import GanttSegment, Process, ScheduleResult

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


class UnknownAlgorithmError(ValueError):
    """Raised when a scheduling algorithm name is not recognised."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown algorithm: {name}")
        self.name = name


def _working_copies(processes: List[Process]) -> List[Process]:
    # sorted() is stable, so equal arrivals keep input order
    return sorted((p.fresh_copy() for p in processes), key=lambda p: p.arrival_time)


def _finalize(
    algorithm: str,
    quantum: Optional[int],
    processes: List[Process],
    busy: List[GanttSegment],
    end_time: int,
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=processes,
        timeline=fill_idle_gaps(busy),
        total_time=end_time,
    )
    compute_result_metrics(result)
    logger.debug(
        "%s finished at t=%d: avg waiting %.2f, avg turnaround %.2f",
        algorithm,
        end_time,
        result.average_waiting_time,
        result.average_turnaround_time,
    )
    return result


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    procs = _working_copies(processes)

    time = 0
    busy: List[GanttSegment] = []

    for p in procs:
        if time < p.arrival_time:
            logger.debug("FCFS: CPU idle from t=%d to t=%d", time, p.arrival_time)
            time = p.arrival_time

        p.start_time = time
        p.finish(time + p.burst_time)
        busy.append(GanttSegment(pid=p.pid, start_time=time, end_time=p.completion_time))
        logger.debug("FCFS: dispatch %s at t=%d", p.pid, time)

        time = p.completion_time

    return _finalize("FCFS (First Come First Served)", None, procs, busy, time)


SelectionKey = Callable[[Process], Tuple[int, ...]]


def _schedule_non_preemptive(
    processes: List[Process], key: SelectionKey, algorithm: str, label: str
) -> ScheduleResult:
    """
    Shared loop for SJF and Priority: whenever the CPU is free, run the
    arrived process with the smallest ``key`` to completion.
    """
    procs = _working_copies(processes)

    time = 0
    busy: List[GanttSegment] = []
    ready: List[Tuple[Tuple[int, ...], int, Process]] = []
    cursor = 0
    done = 0

    while done < len(procs):
        while cursor < len(procs) and procs[cursor].arrival_time <= time:
            p = procs[cursor]
            # cursor is the stable arrival rank, so equal keys fall back to input order
            heapq.heappush(ready, (key(p), cursor, p))
            cursor += 1

        if not ready:
            next_arrival = procs[cursor].arrival_time
            logger.debug("%s: CPU idle from t=%d to t=%d", label, time, next_arrival)
            time = next_arrival
            continue

        _, _, p = heapq.heappop(ready)

        p.start_time = time
        p.finish(time + p.burst_time)
        busy.append(GanttSegment(pid=p.pid, start_time=time, end_time=p.completion_time))
        logger.debug("%s: dispatch %s at t=%d", label, p.pid, time)

        time = p.completion_time
        done += 1

    return _finalize(algorithm, None, procs, busy, time)


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time; break ties by
    earlier arrival, then input order.
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda p: (p.burst_time, p.arrival_time),
        algorithm="SJF (Shortest Job First) - Non-preemptive",
        label="SJF",
    )


def schedule_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then input order.
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda p: (p.priority, p.arrival_time),
        algorithm="Priority Scheduling - Non-preemptive",
        label="Priority",
    )


def schedule_rr(processes: List[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive during a slice join the queue before the
    preempted process is put back at the tail.
    """
    if quantum is None or quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum")

    procs = _working_copies(processes)
    n = len(procs)

    time = 0
    busy: List[GanttSegment] = []
    ready: Deque[Process] = deque()
    cursor = 0
    done = 0

    def enqueue_arrivals(upto: int) -> None:
        nonlocal cursor
        while cursor < n and procs[cursor].arrival_time <= upto:
            p = procs[cursor]
            if p not in ready and p.remaining_time > 0:
                ready.append(p)
            cursor += 1

    enqueue_arrivals(time)

    while done < n:
        if not ready:
            next_arrival = procs[cursor].arrival_time
            logger.debug("RR: CPU idle from t=%d to t=%d", time, next_arrival)
            time = next_arrival
            enqueue_arrivals(time)

        p = ready.popleft()
        if p.start_time is None:
            p.start_time = time

        run_time = min(quantum, p.remaining_time)
        busy.append(GanttSegment(pid=p.pid, start_time=time, end_time=time + run_time))
        logger.debug("RR: run %s for %d at t=%d", p.pid, run_time, time)

        p.remaining_time -= run_time
        time += run_time

        enqueue_arrivals(time)

        if p.remaining_time > 0:
            ready.append(p)
        else:
            p.finish(time)
            done += 1

    return _finalize("Round Robin", quantum, procs, merge_adjacent(busy), time)


ALGORITHMS: Dict[str, Callable[..., ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "rr": schedule_rr,
    "roundrobin": schedule_rr,
    "priority": schedule_priority,
}


def schedule(name: str, processes: List[Process], quantum: int = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Dispatch to the requested algorithm by case-insensitive name. The
    quantum is only used by round-robin.
    """
    func = ALGORITHMS.get(name.lower())
    if func is None:
        raise UnknownAlgorithmError(name)

    return func(processes, quantum=quantum)
