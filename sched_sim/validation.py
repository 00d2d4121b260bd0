"""
Input checks run before any scheduler is invoked.

The schedulers assume valid input and do not re-check it; a negative burst
or a duplicate id can make a simulation loop forever or report nonsense.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .models import Process


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def validate_processes(processes: Optional[Sequence[Process]]) -> ValidationResult:
    if not processes:
        return ValidationResult(is_valid=False, errors=["Process list must be non-empty"])

    errors: List[str] = []
    seen: set[str] = set()

    for idx, p in enumerate(processes):
        if not p.pid:
            errors.append(f"Process {idx}: ID is required")
        if p.arrival_time is None or p.arrival_time < 0:
            errors.append(f"Process {p.pid}: Arrival time must be >= 0")
        if not p.burst_time or p.burst_time <= 0:
            errors.append(f"Process {p.pid}: Burst time must be > 0")

        if p.pid in seen:
            errors.append(f"Duplicate process ID: {p.pid}")
        seen.add(p.pid)

    return ValidationResult(is_valid=not errors, errors=errors)


def validate_quantum(quantum: Optional[int]) -> ValidationResult:
    if quantum is None or quantum <= 0:
        return ValidationResult(is_valid=False, errors=["Time quantum must be greater than 0"])
    return ValidationResult(is_valid=True)
