"""Tests for feature UI components and formatters."""

import io
from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import patch

from rich.console import Console

from ecs_viewer.features.container.models import LogEvent, RecentLogLines
from ecs_viewer.features.container.ui import ContainerUI
from ecs_viewer.features.environment.ui import EnvironmentUI
from ecs_viewer.features.history.ui import HistoryUI, format_duration
from ecs_viewer.features.task.ui import TaskUI, format_commands, format_datetime, format_status


def test_format_duration():
    assert format_duration(None) == "-"
    assert format_duration(42) == "42s"
    assert format_duration(270) == "4m 30s"
    assert format_duration(3725) == "1h 2m 5s"


def test_format_datetime():
    assert format_datetime(None) == "-"
    assert format_datetime(datetime(2024, 1, 15, 10, 30)) == "2024-01-15 10:30:00"


def test_format_status():
    assert format_status("RUNNING") == "[green]RUNNING[/green]"
    assert format_status("PROVISIONING") == "[yellow]PROVISIONING[/yellow]"


def test_format_commands():
    task = {
        "containers": [
            {"name": "app", "command": ["rake", "db:migrate"]},
            {"name": "sidecar", "command": None},
        ]
    }

    assert format_commands(task) == "app: rake db:migrate"
    assert format_commands({"containers": []}) == "-"


@patch("ecs_viewer.features.task.ui.console")
def test_display_tasks_empty(mock_console):
    TaskUI().display_tasks("production", [])

    mock_console.print.assert_any_call("No tasks found", style="dim")


def test_select_task_action_lists_containers():
    task = {"containers": [{"name": "app"}, {"name": "worker"}]}
    ui = TaskUI()

    with patch.object(ui, "select_with_nav", return_value="container:logs:worker") as mock_select:
        assert ui.select_task_action(task) == "container:logs:worker"

    values = [choice["value"] for choice in mock_select.call_args.args[1]]
    assert values == ["task_action:all_logs", "container:logs:app", "container:logs:worker"]


@patch("ecs_viewer.features.history.ui.print_warning")
@patch("ecs_viewer.features.history.ui.console")
def test_display_finished_tasks_reports_skipped_lines(mock_console, mock_print_warning):
    HistoryUI().display_finished_tasks([], skipped_events=3)

    assert "3" in mock_print_warning.call_args.args[0]
    mock_console.print.assert_any_call("No finished tasks in the history window", style="dim")


@patch("ecs_viewer.features.container.ui.print_warning")
def test_display_logs_without_cloudwatch(mock_print_warning):
    ContainerUI().display_logs(None, "sidecar")

    assert "sidecar" in mock_print_warning.call_args.args[0]


@patch("ecs_viewer.features.container.ui.print_warning")
@patch("ecs_viewer.features.container.ui.console")
def test_display_logs_warns_when_possibly_delayed(mock_console, mock_print_warning):
    ContainerUI().display_logs(RecentLogLines("/ecs/web", "app/web/abc123", "web", []), "web")

    mock_print_warning.assert_called_once()


@patch("ecs_viewer.features.container.ui.print_warning")
@patch("ecs_viewer.features.container.ui.console")
def test_display_logs_prints_events(mock_console, mock_print_warning):
    lines = RecentLogLines("/ecs/web", "app/web/abc123", "web", [LogEvent(None, "hello [world]")])

    ContainerUI().display_logs(lines, "web")

    mock_print_warning.assert_not_called()
    mock_console.print.assert_any_call("hello [world]", markup=False, highlight=False)


def test_select_environment_returns_name():
    ui = EnvironmentUI()

    with patch.object(ui, "select_with_nav", return_value="environment:production") as mock_select:
        assert ui.select_environment(["staging", "production"], "staging") == "production"

    names = [choice["name"] for choice in mock_select.call_args.args[1]]
    assert names == ["● staging", "  production"]


def test_select_environment_back_returns_none():
    ui = EnvironmentUI()

    with patch.object(ui, "select_with_nav", return_value="navigation:back"):
        assert ui.select_environment(["staging"], "staging") is None


def test_format_datetime_uses_local_time_for_any_zone():
    utc_value = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
    shifted = utc_value.astimezone(timezone(timedelta(hours=5)))

    assert format_datetime(utc_value) == format_datetime(shifted)
    assert format_datetime(utc_value) == utc_value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def test_format_commands_escapes_markup():
    task = {"containers": [{"name": "app", "command": ["echo", "[/bold]"]}]}

    assert format_commands(task) == r"app: echo \[/bold]"


def test_task_screens_render_markup_like_values_literally():
    output = io.StringIO()
    task = {
        "cluster_name": "production",
        "task_id": "abc123",
        "started_at": None,
        "last_status": "RUNNING",
        "task_definition": "web:3",
        "containers": [{"name": "app", "command": ["grep", "[/x]"]}],
    }
    task_definition = {
        "family": "web",
        "revision": 3,
        "status": "ACTIVE",
        "network_mode": None,
        "requires_compatibilities": [],
        "container_definitions": [
            {
                "name": "app",
                "image": "repo/app:[/tag]",
                "cpu": None,
                "memory": None,
                "memory_reservation": None,
                "essential": True,
                "port_mappings": [],
                "environment": {"PATTERN": "[/red]"},
                "log_configuration": {"logDriver": "awslogs", "options": {"awslogs-group": "[/g]"}},
            }
        ],
    }

    with patch("ecs_viewer.features.task.ui.console", Console(file=output, width=200)):
        TaskUI().display_tasks("production", [task])
        TaskUI().display_task_definition(task_definition)

    rendered = output.getvalue()
    assert "grep [/x]" in rendered
    assert "[ACTIVE]" in rendered
    assert "PATTERN=[/red]" in rendered
    assert "repo/app:[/tag]" in rendered


def test_finished_tasks_render_markup_like_commands_literally():
    output = io.StringIO()
    finished = [
        {
            "task_id": "def456",
            "family": "family:batch-job",
            "main_command": "echo [/oops]",
            "started_at": None,
            "stopped_at": None,
            "duration_sec": None,
        }
    ]

    with patch("ecs_viewer.features.history.ui.console", Console(file=output, width=200)):
        HistoryUI().display_finished_tasks(finished)

    assert "echo [/oops]" in output.getvalue()
