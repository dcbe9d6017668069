"""UI components for container logs."""

from __future__ import annotations

from rich.console import Console

from ...core.base import BaseUIComponent
from ...core.utils import print_warning
from .models import RecentLogLines

console = Console()

SEPARATOR_WIDTH = 80


class ContainerUI(BaseUIComponent):
    """UI component for container log display."""

    def display_logs(self, lines: RecentLogLines | None, container_name: str) -> None:
        if lines is None:
            print_warning(f"Container '{container_name}' does not log to CloudWatch (awslogs)")
            return

        console.print(f"\nLogs for '{lines.container_name}'", style="bold cyan")
        console.print(f"{lines.log_group} / {lines.log_stream}", style="dim")
        console.print("=" * SEPARATOR_WIDTH, style="dim")

        if lines.possibly_delayed:
            print_warning("No log events returned. The stream may be empty or delivery may still be delayed.")
        for event in lines.events:
            console.print(event.format(), markup=False, highlight=False)

        console.print("=" * SEPARATOR_WIDTH, style="dim")
