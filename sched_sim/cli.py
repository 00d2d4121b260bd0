from __future__ import annotations

import argparse
import logging
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, schedule
from .compare import run_all
from .gantt import build_rich_gantt
from .metrics import cpu_utilization
from .models import Comparison, Process, ScheduleResult
from .validation import validate_processes, validate_quantum
from .workload_io import dump_workload, load_workload, random_processes, sample_processes, workload_records

logger = logging.getLogger(__name__)


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in five-process sample batch.",
    )
    source.add_argument(
        "--random",
        type=int,
        metavar="N",
        help="Generate N random processes.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for --random (default: unseeded).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print metrics as JSON instead of tables.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sched-sim",
        description="CPU scheduling simulator (FCFS, SJF, Round Robin, Priority).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for every dispatch).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    _add_workload_args(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run all algorithms on the same workload and rank them by average waiting time.",
    )
    _add_workload_args(compare_parser)

    sample_parser = subparsers.add_parser("sample", help="Print or save a workload as JSON.")
    sample_parser.add_argument(
        "--random",
        type=int,
        metavar="N",
        default=None,
        help="Generate N random processes instead of the fixed sample.",
    )
    sample_parser.add_argument("--seed", type=int, default=None, help="Seed for --random.")
    sample_parser.add_argument("--output", "-o", default=None, help="Write the workload to this JSON file.")

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _load_processes(args: argparse.Namespace) -> List[Process]:
    if args.workload:
        return load_workload(args.workload)
    if args.random is not None:
        return random_processes(args.random, seed=args.seed)
    return sample_processes()


def _check_input(processes: List[Process], quantum: int) -> List[str]:
    errors = list(validate_processes(processes).errors)
    errors.extend(validate_quantum(quantum).errors)
    return errors


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Turnaround",
        "Wait",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for row in result.process_details():
        proc_table.add_row(
            str(row["pid"]),
            str(row["arrival_time"]),
            str(row["burst_time"]),
            str(row["priority"]),
            "" if row["start_time"] is None else str(row["start_time"]),
            str(row["completion_time"]),
            str(row["turnaround_time"]),
            str(row["waiting_time"]),
        )

    console.print(proc_table)
    console.print()

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{result.average_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{result.average_turnaround_time:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{result.throughput:.2f}")
    sys_table.add_row("Total time", str(result.total_time))
    sys_table.add_row("CPU utilization", f"{cpu_utilization(result)*100:.1f}%")

    console.print(sys_table)


def _print_comparison(comparison: Comparison, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Rank", justify="right")
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")

    for rank, entry in enumerate(comparison.ranking, start=1):
        summary_table.add_row(str(rank), entry.name, f"{entry.average_waiting_time:.2f}")

    console.print(summary_table)

    detail_table = Table(box=box.SIMPLE_HEAVY)
    detail_table.add_column("Algorithm")
    detail_table.add_column("Quantum", justify="right")
    detail_table.add_column("Avg turnaround", justify="right")
    detail_table.add_column("Throughput", justify="right")
    detail_table.add_column("Total time", justify="right")

    for result in comparison.results.values():
        detail_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{result.average_turnaround_time:.2f}",
            f"{result.throughput:.2f}",
            str(result.total_time),
        )

    console.print(detail_table)
    console.print(
        f"[bold green]Best algorithm:[/bold green] {comparison.best_algorithm} "
        f"(avg waiting {comparison.best_waiting_time:.2f})"
    )


def _result_json(result: ScheduleResult) -> dict:
    data = result.metrics()
    data["processes"] = result.process_details()
    data["timeline"] = [
        {"pid": s.pid, "start_time": s.start_time, "end_time": s.end_time} for s in result.timeline
    ]
    return data


def _comparison_json(comparison: Comparison) -> dict:
    return {
        "best_algorithm": comparison.best_algorithm,
        "best_waiting_time": comparison.best_waiting_time,
        "ranking": [r.name for r in comparison.ranking],
        "results": {key: r.metrics() for key, r in comparison.results.items()},
    }


def _print_errors(errors: List[str], console: Console) -> None:
    for err in errors:
        console.print(f"[red]Error: {escape(err)}[/red]")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "sample":
            if args.random is not None:
                processes = random_processes(args.random, seed=args.seed)
            else:
                processes = sample_processes()

            if args.output:
                path = dump_workload(processes, args.output)
                logger.info("Wrote %d processes to %s", len(processes), path)
                console.print(f"Wrote {len(processes)} processes to {path}")
            else:
                console.print_json(data=workload_records(processes))
            return 0

        processes = _load_processes(args)
        errors = _check_input(processes, args.quantum)
        if errors:
            _print_errors(errors, console)
            return 1

        if args.command == "run":
            result = schedule(args.algorithm, processes, quantum=args.quantum)
            if args.json:
                console.print_json(data=_result_json(result))
            else:
                _print_result(result, console)
            return 0

        if args.command == "compare":
            comparison = run_all(processes, quantum=args.quantum)
            if args.json:
                console.print_json(data=_comparison_json(comparison))
            else:
                _print_comparison(comparison, console)
            return 0
    except (ValueError, OSError) as exc:
        _print_errors([str(exc)], console)
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
