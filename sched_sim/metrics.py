from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .models import ScheduleResult

_TWO_PLACES = Decimal("0.01")


def round2(numerator: int, denominator: int) -> float:
    """
    Divide and round to two decimal places, half away from zero.

    The quotient is computed in Decimal so values such as 2.675 round the
    way they read instead of the way their binary float does.
    """
    if denominator == 0:
        return 0.0
    quotient = Decimal(numerator) / Decimal(denominator)
    return float(quotient.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def compute_result_metrics(result: ScheduleResult) -> ScheduleResult:
    """
    Fill in averages and throughput from the completed processes of a
    simulated result. ``total_time`` must already be set.
    """
    completed = [p for p in result.processes if p.is_completed]
    count = len(completed)

    if count:
        result.average_waiting_time = round2(sum(p.waiting_time for p in completed), count)
        result.average_turnaround_time = round2(sum(p.turnaround_time for p in completed), count)

    result.throughput = round2(count, result.total_time)
    return result


def cpu_busy_time(result: ScheduleResult) -> int:
    return sum(s.duration for s in result.timeline if not s.is_idle)


def cpu_utilization(result: ScheduleResult) -> float:
    if result.total_time <= 0:
        return 0.0
    return cpu_busy_time(result) / result.total_time
