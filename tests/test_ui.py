"""Tests for ECSNavigator orchestration layer."""

from unittest.mock import Mock, patch

import pytest

from ecs_viewer.aws_service import Dashboard, TaskView
from ecs_viewer.features.container.models import RecentLogLines
from ecs_viewer.ui import ECSNavigator


@pytest.fixture
def mock_viewer_service(viewer_context) -> Mock:
    service = Mock()
    service.context = viewer_context
    service.cluster_name = "staging-cluster"
    return service


@pytest.fixture
def navigator(mock_viewer_service) -> ECSNavigator:
    return ECSNavigator(mock_viewer_service, log_lines=20)


def test_navigator_initialization(navigator) -> None:
    assert navigator._task_ui is not None
    assert navigator._history_ui is not None
    assert navigator._container_ui is not None
    assert navigator._environment_ui is not None


def test_select_main_action_shows_active_environment(navigator) -> None:
    with patch("ecs_viewer.core.base.select_with_navigation", return_value="menu:dashboard") as mock_select:
        result = navigator.select_main_action()

    assert result == "menu:dashboard"
    prompt, choices, _ = mock_select.call_args.args
    assert prompt.startswith("[staging]")
    assert [choice["value"] for choice in choices] == ["menu:dashboard", "menu:environment"]


def test_show_dashboard_displays_both_tables(navigator, mock_viewer_service) -> None:
    dashboard = Dashboard("staging", tasks=[], finished_tasks=[], skipped_events=2)
    mock_viewer_service.get_dashboard.return_value = dashboard
    navigator._task_ui.display_tasks = Mock()
    navigator._history_ui.display_finished_tasks = Mock()

    assert navigator.show_dashboard() is dashboard
    navigator._task_ui.display_tasks.assert_called_once_with("staging-cluster", [])
    navigator._history_ui.display_finished_tasks.assert_called_once_with([], 2)


def test_select_task_offers_live_and_finished_tasks(navigator) -> None:
    dashboard = Dashboard(
        "staging",
        tasks=[{"task_id": "abc123", "last_status": "RUNNING", "task_definition": "web:3"}],
        finished_tasks=[{"task_id": "def456", "family": "family:batch-job"}],
        skipped_events=0,
    )
    navigator._task_ui.select_task = Mock(return_value="task:def456")

    assert navigator.select_task(dashboard) == "task:def456"
    choices = navigator._task_ui.select_task.call_args.args[0]
    assert [choice["value"] for choice in choices] == ["task:abc123", "task:def456"]


def test_select_task_without_tasks_goes_back(navigator) -> None:
    assert navigator.select_task(Dashboard("staging", [], [], 0)) == "navigation:back"


def test_show_task_delegates_to_task_ui(navigator, mock_viewer_service) -> None:
    view = TaskView(task={"task_id": "abc123"}, task_definition=None, from_history=True)
    mock_viewer_service.get_task_view.return_value = view
    navigator._task_ui.display_task_details = Mock()

    assert navigator.show_task("abc123") is view
    navigator._task_ui.display_task_details.assert_called_once_with({"task_id": "abc123"}, None, True)


def test_show_container_logs_uses_configured_line_count(navigator, mock_viewer_service) -> None:
    lines = RecentLogLines("/ecs/web", "app/web/abc123", "web", [])
    mock_viewer_service.get_container_logs.return_value = lines
    navigator._container_ui.display_logs = Mock()

    navigator.show_container_logs("abc123", "web")

    mock_viewer_service.get_container_logs.assert_called_once_with("abc123", "web", 20)
    navigator._container_ui.display_logs.assert_called_once_with(lines, "web")


@patch("ecs_viewer.ui.print_error")
def test_show_all_container_logs_without_cloudwatch_containers(mock_print_error, navigator, mock_viewer_service):
    mock_viewer_service.get_all_container_logs.return_value = []
    navigator._container_ui.display_logs = Mock()

    navigator.show_all_container_logs("abc123")

    mock_print_error.assert_called_once()
    navigator._container_ui.display_logs.assert_not_called()


def test_show_all_container_logs_displays_each_container(navigator, mock_viewer_service) -> None:
    app = RecentLogLines("/ecs/web", "app/app/abc123", "app", [])
    worker = RecentLogLines("/ecs/web", "app/worker/abc123", "worker", [])
    mock_viewer_service.get_all_container_logs.return_value = [app, worker]
    navigator._container_ui.display_logs = Mock()

    navigator.show_all_container_logs("abc123")

    assert [c.args[1] for c in navigator._container_ui.display_logs.call_args_list] == ["app", "worker"]


@patch("ecs_viewer.ui.print_success")
def test_switch_environment(mock_print_success, navigator, mock_viewer_service) -> None:
    mock_viewer_service.get_available_environments.return_value = ["staging", "production"]
    navigator._environment_ui.select_environment = Mock(return_value="production")

    navigator.switch_environment()

    mock_viewer_service.switch_environment.assert_called_once_with("production")
    mock_print_success.assert_called_once()


def test_switch_environment_to_current_does_nothing(navigator, mock_viewer_service) -> None:
    navigator._environment_ui.select_environment = Mock(return_value="staging")

    navigator.switch_environment()

    mock_viewer_service.switch_environment.assert_not_called()
