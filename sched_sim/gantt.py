from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import IDLE, GanttSegment


def merge_adjacent(segments: List[GanttSegment]) -> List[GanttSegment]:
    """
    Collapse consecutive segments of the same process that touch end to
    start into one. Input segments are not modified.
    """
    merged: List[GanttSegment] = []
    for seg in segments:
        if merged and merged[-1].pid == seg.pid and merged[-1].end_time == seg.start_time:
            last = merged[-1]
            merged[-1] = GanttSegment(pid=last.pid, start_time=last.start_time, end_time=seg.end_time)
        else:
            merged.append(GanttSegment(pid=seg.pid, start_time=seg.start_time, end_time=seg.end_time))
    return merged


def fill_idle_gaps(busy: List[GanttSegment]) -> List[GanttSegment]:
    """
    Return the full timeline for a list of busy segments: segments in start
    order with an idle segment covering every gap, counting from time 0.
    """
    timeline: List[GanttSegment] = []
    last_end = 0

    for seg in sorted(busy, key=lambda s: (s.start_time, s.end_time)):
        if seg.start_time > last_end:
            timeline.append(GanttSegment(pid=IDLE, start_time=last_end, end_time=seg.start_time))
        timeline.append(seg)
        last_end = seg.end_time

    return timeline


def render_gantt(segments: List[GanttSegment]) -> str:
    """
    Plain-text Gantt chart, one character per time unit.
    """
    if not segments:
        return "(no execution)"

    segments = sorted(segments, key=lambda s: (s.start_time, s.end_time))

    line = "|"
    labels = ""
    time_marks = str(segments[0].start_time)

    for seg in segments:
        width = max(1, seg.duration)
        line += ("." if seg.is_idle else "=") * width
        labels += ("" if seg.is_idle else seg.pid[:width]).ljust(width)
        time_marks += f"{seg.end_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(segments: List[GanttSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    segments = sorted(segments, key=lambda s: (s.start_time, s.end_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    bar = Text()
    labels = Text()
    time_marks = str(segments[0].start_time)

    for seg in segments:
        width = max(1, seg.duration)

        if seg.is_idle:
            bar.append("." * width, style="dim")
            labels.append(" " * width)
        else:
            bar.append(" " * width, style=f"on {pid_color(seg.pid)}")
            labels.append(seg.pid[:width].ljust(width), style="bold")

        time_marks += f"{seg.end_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(bar)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
