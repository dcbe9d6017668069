"""UI components for task listing and details."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...core.base import BaseUIComponent
from ...core.navigation import NAV_BACK
from ...core.types import TaskDefinitionDetails, TaskDetails, TaskSummary

console = Console()

SEPARATOR_WIDTH = 80

_STATUS_STYLES = {"RUNNING": "green", "STOPPED": "red"}


def format_datetime(value: datetime | None) -> str:
    """Local wall-clock time, whichever zone the value carries."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S") if value else "-"


def format_status(status: str) -> str:
    style = _STATUS_STYLES.get(status, "yellow")
    return f"[{style}]{status}[/{style}]"


def format_commands(task: TaskSummary) -> str:
    commands = [escape(f"{c['name']}: {' '.join(c['command'])}") for c in task["containers"] if c["command"]]
    return "\n".join(commands) if commands else "-"


class TaskUI(BaseUIComponent):
    """UI component for task tables and the task detail view."""

    def display_tasks(self, cluster_name: str, tasks: list[TaskSummary]) -> None:
        console.print(f"\nECS tasks in '{cluster_name}' ({len(tasks)})", style="bold cyan")
        if not tasks:
            console.print("No tasks found", style="dim")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Cluster", style="cyan")
        table.add_column("Task ID", style="yellow")
        table.add_column("Started", style="blue")
        table.add_column("Status")
        table.add_column("Task Definition", style="green")
        table.add_column("Command overrides")

        for task in tasks:
            table.add_row(
                task["cluster_name"],
                task["task_id"],
                format_datetime(task["started_at"]),
                format_status(task["last_status"]),
                task["task_definition"],
                format_commands(task),
            )

        console.print(table)

    def select_task(self, choices: list[dict[str, str]]) -> str | None:
        if not choices:
            return NAV_BACK
        return self.select_from_list("Select a task:", choices, "Back to main menu")

    def display_task_details(
        self, task: TaskDetails, task_definition: TaskDefinitionDetails | None, from_history: bool = False
    ) -> None:
        source = " (from event history)" if from_history else ""
        console.print(f"\nTask {task['task_id']}{source}", style="bold cyan")
        console.print("=" * SEPARATOR_WIDTH, style="dim")

        console.print(f"Cluster: {task['cluster_name']}", style="white")
        task_definition_name = f"{task['family']}:{task['revision']}" if task["family"] else "-"
        console.print(f"Task Definition: {task_definition_name}", style="white")
        console.print(f"Status: {format_status(task['last_status'])} (desired {task['desired_status']})")
        console.print(f"CPU / Memory: {task['cpu'] or '-'} / {task['memory'] or '-'}", style="white")
        console.print(f"Created: {format_datetime(task['created_at'])}", style="white")
        console.print(f"Started: {format_datetime(task['started_at'])}", style="white")
        if task["stopped_at"]:
            console.print(f"Stopped: {format_datetime(task['stopped_at'])}", style="white")

        if task["containers"]:
            console.print(f"\nContainers ({len(task['containers'])}):", style="bold cyan")
            table = Table(show_header=True, header_style="bold magenta")
            table.add_column("Name", style="cyan")
            table.add_column("Status")
            table.add_column("Image", style="yellow")
            table.add_column("CPU", style="green")
            table.add_column("Memory", style="blue")
            for container in task["containers"]:
                table.add_row(
                    container["name"],
                    container["last_status"] or "-",
                    escape(container["image"] or "-"),
                    container["cpu"] or "-",
                    container["memory"] or "-",
                )
            console.print(table)

        if task_definition:
            self.display_task_definition(task_definition)

        console.print("=" * SEPARATOR_WIDTH, style="dim")

    def display_task_definition(self, task_definition: TaskDefinitionDetails) -> None:
        status = escape(f"[{task_definition['status']}]")
        console.print(
            f"\nTask definition {task_definition['family']}:{task_definition['revision']} {status}",
            style="bold cyan",
        )
        compatibilities = ", ".join(task_definition["requires_compatibilities"]) or "-"
        console.print(f"Network mode: {task_definition['network_mode'] or '-'}", style="white")
        console.print(f"Compatibilities: {compatibilities}", style="white")

        for container_def in task_definition["container_definitions"]:
            essential = "essential" if container_def["essential"] else "non-essential"
            console.print(f"\n  {container_def['name']} ({essential})", style="bold")
            console.print(f"    Image: {escape(container_def['image'])}", style="yellow")

            memory = str(container_def["memory"] or "-")
            if container_def["memory_reservation"]:
                memory += f" (soft {container_def['memory_reservation']})"
            console.print(f"    CPU / Memory: {container_def['cpu'] or '-'} / {memory}", style="white")

            for mapping in container_def["port_mappings"]:
                console.print(
                    f"    Port: {mapping.get('containerPort')} → {mapping.get('hostPort')}"
                    f" ({mapping.get('protocol', 'tcp')})",
                    style="white",
                )
            for name, value in container_def["environment"].items():
                console.print(escape(f"    {name}={value}"), style="dim")

            log_config = container_def["log_configuration"]
            if log_config:
                options = log_config.get("options", {})
                console.print(escape(f"    Logs: {log_config.get('logDriver')} {options}"), style="dim")

    def select_task_action(self, task: TaskDetails) -> str | None:
        choices = [{"name": "📜 Show logs for all containers", "value": "task_action:all_logs"}]
        for container in task["containers"]:
            name = container["name"]
            choices.append({"name": f"Show logs for container '{name}'", "value": f"container:logs:{name}"})
        return self.select_with_nav("Select an action for this task:", choices, "Back to task list")
