from sched_sim import run_all
from sched_sim.models import Process
from sched_sim.workload_io import sample_processes


def test_run_all_picks_sjf_on_sample():
    comparison = run_all(sample_processes(), quantum=2)

    assert set(comparison.results) == {"fcfs", "sjf", "round_robin", "priority"}
    assert comparison.best_algorithm == "SJF"
    assert comparison.best_waiting_time == 8.2
    assert [r.name for r in comparison.ranking] == ["SJF", "Priority", "FCFS", "Round Robin"]


def test_run_all_tie_goes_to_declaration_order():
    comparison = run_all([Process("P1", 0, 3)])
    assert comparison.best_algorithm == "FCFS"
    assert [r.name for r in comparison.ranking] == ["FCFS", "SJF", "Round Robin", "Priority"]


def test_run_all_uses_quantum_for_round_robin_only():
    comparison = run_all(sample_processes(), quantum=4)
    assert comparison.results["round_robin"].quantum == 4
    assert comparison.results["fcfs"].quantum is None


def test_run_all_leaves_input_untouched():
    procs = sample_processes()
    run_all(procs)
    assert procs == sample_processes()
