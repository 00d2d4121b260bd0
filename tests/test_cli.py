import json
from pathlib import Path

from sched_sim.cli import main


def test_run_sample(capsys):
    assert main(["run", "-a", "fcfs", "--sample"]) == 0
    out = capsys.readouterr().out
    assert "FCFS (First Come First Served)" in out
    assert "11.40" in out


def test_run_round_robin_shows_quantum(capsys):
    assert main(["run", "-a", "rr", "--random", "4", "--seed", "1", "-q", "3"]) == 0
    out = capsys.readouterr().out
    assert "Quantum:" in out


def test_run_unknown_algorithm(capsys):
    assert main(["run", "-a", "lottery", "--sample"]) == 1
    assert "Unknown algorithm: lottery" in capsys.readouterr().out


def test_compare_sample(capsys):
    assert main(["compare", "--sample"]) == 0
    out = capsys.readouterr().out
    assert "Best algorithm:" in out
    assert "SJF (avg waiting 8.20)" in out


def test_invalid_workload_reports_errors(tmp_path: Path, capsys):
    p = tmp_path / "dup.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3},'
                 '{"pid":"A","arrival_time":1,"burst_time":2}]')
    assert main(["compare", "-w", str(p)]) == 1
    assert "Duplicate process ID: A" in capsys.readouterr().out


def test_invalid_quantum(capsys):
    assert main(["run", "-a", "rr", "--sample", "-q", "0"]) == 1
    assert "Time quantum must be greater than 0" in capsys.readouterr().out


def test_sample_writes_file(tmp_path: Path):
    target = tmp_path / "batch.json"
    assert main(["sample", "--random", "3", "--seed", "5", "-o", str(target)]) == 0
    data = json.loads(target.read_text())
    assert [row["pid"] for row in data] == ["P1", "P2", "P3"]


def test_run_json_output(capsys):
    assert main(["run", "-a", "sjf", "--sample", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["algorithm"] == "SJF (Shortest Job First) - Non-preemptive"
    assert data["quantum"] is None
    assert data["average_waiting_time"] == 8.2
    assert data["average_turnaround_time"] == 13.8
    assert data["total_time"] == 28
    assert [row["pid"] for row in data["processes"]] == ["P1", "P2", "P3", "P4", "P5"]
    assert data["timeline"][0] == {"pid": "P1", "start_time": 0, "end_time": 8}


def test_compare_json_output(capsys):
    assert main(["compare", "--sample", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["best_algorithm"] == "SJF"
    assert data["ranking"] == ["SJF", "Priority", "FCFS", "Round Robin"]
    assert data["results"]["round_robin"]["quantum"] == 2
    assert data["results"]["fcfs"]["average_waiting_time"] == 11.4


def test_missing_workload_file(tmp_path: Path, capsys):
    missing = tmp_path / "missing.json"
    assert main(["run", "-a", "fcfs", "-w", str(missing)]) == 1
    assert "Error:" in capsys.readouterr().out
