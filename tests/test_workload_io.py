from pathlib import Path

import pytest

from sched_sim.models import Process
from sched_sim.workload_io import dump_workload, load_workload, random_processes, sample_processes


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority == 0
    assert procs[1].remaining_time == 2


def test_load_rejects_bad_entries(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","burst_time":3}]')
    with pytest.raises(ValueError, match="Invalid process entry"):
        load_workload(p)

    with pytest.raises(ValueError, match="Unsupported workload format"):
        load_workload(tmp_path / "w.txt")


def test_dump_then_load(tmp_path: Path):
    path = dump_workload(sample_processes(), tmp_path / "sample.json")
    assert load_workload(path) == sample_processes()


def test_sample_batch():
    procs = sample_processes()
    assert [(p.pid, p.arrival_time, p.burst_time, p.priority) for p in procs] == [
        ("P1", 0, 8, 3),
        ("P2", 1, 4, 2),
        ("P3", 2, 9, 4),
        ("P4", 3, 5, 1),
        ("P5", 4, 2, 5),
    ]


def test_random_batch_ranges():
    procs = random_processes(50, seed=3)
    assert [p.pid for p in procs] == [f"P{i}" for i in range(1, 51)]
    assert all(0 <= p.arrival_time <= 4 for p in procs)
    assert all(1 <= p.burst_time <= 10 for p in procs)
    assert all(1 <= p.priority <= 5 for p in procs)
    assert random_processes(5, seed=9) == random_processes(5, seed=9)
