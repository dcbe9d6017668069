"""UI components for finished task history."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.base import BaseUIComponent
from ...core.types import FinishedTaskSummary
from ...core.utils import print_warning
from ..task.ui import format_datetime

console = Console()


def format_duration(duration_sec: int | None) -> str:
    if duration_sec is None:
        return "-"
    minutes, seconds = divmod(duration_sec, 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


class HistoryUI(BaseUIComponent):
    """UI component for finished one-off task runs."""

    def display_finished_tasks(self, finished_tasks: list[FinishedTaskSummary], skipped_events: int = 0) -> None:
        console.print(f"\nFinished tasks ({len(finished_tasks)})", style="bold cyan")
        if skipped_events:
            print_warning(f"{skipped_events} log lines were not task state change events and were skipped")
        if not finished_tasks:
            console.print("No finished tasks in the history window", style="dim")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Task ID", style="yellow")
        table.add_column("Family", style="green")
        table.add_column("Command")
        table.add_column("Started", style="blue")
        table.add_column("Stopped", style="blue")
        table.add_column("Duration", justify="right")

        for task in finished_tasks:
            table.add_row(
                task["task_id"],
                escape(task["family"]),
                escape(task["main_command"] or "-"),
                format_datetime(task["started_at"]),
                format_datetime(task["stopped_at"]),
                format_duration(task["duration_sec"]),
            )

        console.print(table)
