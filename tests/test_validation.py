from sched_sim.models import Process
from sched_sim.validation import validate_processes, validate_quantum
from sched_sim.workload_io import sample_processes


def test_valid_sample():
    res = validate_processes(sample_processes())
    assert res.is_valid
    assert res.errors == []


def test_empty_list_rejected():
    assert not validate_processes([]).is_valid
    assert not validate_processes(None).is_valid


def test_bad_fields_reported():
    res = validate_processes(
        [
            Process("", 0, 3),
            Process("P2", -1, 3),
            Process("P3", 0, 0),
            Process("P3", 0, 2),
        ]
    )
    assert not res.is_valid
    assert "Process 0: ID is required" in res.errors
    assert "Process P2: Arrival time must be >= 0" in res.errors
    assert "Process P3: Burst time must be > 0" in res.errors
    assert "Duplicate process ID: P3" in res.errors


def test_quantum():
    assert validate_quantum(1).is_valid
    assert not validate_quantum(0).is_valid
    assert not validate_quantum(-2).is_valid
