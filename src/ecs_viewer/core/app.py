"""Main application logic for the ecs-viewer CLI."""

from __future__ import annotations

from ..core.errors import TaskNotFoundError, UpstreamUnavailableError
from ..core.navigation import handle_navigation, parse_selection
from ..core.utils import print_error
from ..ui import ECSNavigator


def run_dashboard(navigator: ECSNavigator) -> None:
    """Main menu loop. Returns when the user exits."""
    while True:
        selection = navigator.select_main_action()

        should_continue, _should_exit = handle_navigation(selection)
        if not should_continue:
            return

        _, action, _ = parse_selection(selection)
        if action == "environment":
            navigator.switch_environment()
            continue

        try:
            if not navigate_tasks(navigator):
                return
        except UpstreamUnavailableError as e:
            print_error(str(e))


def navigate_tasks(navigator: ECSNavigator) -> bool:
    """Dashboard and task selection. Returns True if back was chosen, False if exit."""
    dashboard = navigator.show_dashboard()

    while True:
        selection = navigator.select_task(dashboard)

        should_continue, should_exit = handle_navigation(selection)
        if not should_continue:
            return not should_exit

        selection_type, task_id, _ = parse_selection(selection)
        if selection_type != "task":
            continue

        try:
            if not navigate_task(navigator, task_id):
                return False
        except TaskNotFoundError as e:
            print_error(f"{e}. Open the task list again if it finished recently.")


def navigate_task(navigator: ECSNavigator, task_id: str) -> bool:
    """Task detail actions. Returns True if back was chosen, False if exit."""
    view = navigator.show_task(task_id)

    while True:
        selection = navigator.select_task_action(view)

        should_continue, should_exit = handle_navigation(selection)
        if not should_continue:
            return not should_exit

        selection_type, action, container_name = parse_selection(selection)
        if selection_type == "task_action" and action == "all_logs":
            navigator.show_all_container_logs(task_id)
        elif selection_type == "container" and action == "logs":
            navigator.show_container_logs(task_id, container_name)
