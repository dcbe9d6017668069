"""UI layer - handles all user interaction and display logic."""

from __future__ import annotations

from .aws_service import Dashboard, ECSViewerService, TaskView
from .core.base import BaseUIComponent
from .core.utils import print_error, print_success, show_spinner
from .features.container.ui import ContainerUI
from .features.environment.ui import EnvironmentUI
from .features.history.ui import HistoryUI
from .features.task.ui import TaskUI


class ECSNavigator(BaseUIComponent):
    """Navigator for the interactive task dashboard."""

    def __init__(self, viewer_service: ECSViewerService, log_lines: int = 100) -> None:
        self.viewer_service = viewer_service
        self.log_lines = log_lines
        self._task_ui = TaskUI()
        self._history_ui = HistoryUI()
        self._container_ui = ContainerUI()
        self._environment_ui = EnvironmentUI()

    def select_main_action(self) -> str | None:
        environment = self.viewer_service.context.active_name
        choices = [
            {"name": "📋 Task list", "value": "menu:dashboard"},
            {"name": f"🌐 Switch environment (current: {environment})", "value": "menu:environment"},
        ]
        return self.select_with_nav(f"[{environment}] What do you want to see?", choices, None)

    def show_dashboard(self) -> Dashboard:
        with show_spinner():
            dashboard = self.viewer_service.get_dashboard()

        self._task_ui.display_tasks(self.viewer_service.cluster_name, dashboard.tasks)
        self._history_ui.display_finished_tasks(dashboard.finished_tasks, dashboard.skipped_events)
        return dashboard

    def select_task(self, dashboard: Dashboard) -> str | None:
        choices = [
            {
                "name": f"{task['task_id']} {task['last_status']} {task['task_definition']}",
                "value": f"task:{task['task_id']}",
            }
            for task in dashboard.tasks
        ]
        choices.extend(
            {"name": f"{task['task_id']} FINISHED {task['family']}", "value": f"task:{task['task_id']}"}
            for task in dashboard.finished_tasks
        )
        return self._task_ui.select_task(choices)

    def show_task(self, task_id: str) -> TaskView:
        with show_spinner():
            view = self.viewer_service.get_task_view(task_id)
        self._task_ui.display_task_details(view.task, view.task_definition, view.from_history)
        return view

    def select_task_action(self, view: TaskView) -> str | None:
        return self._task_ui.select_task_action(view.task)

    def show_container_logs(self, task_id: str, container_name: str) -> None:
        with show_spinner():
            lines = self.viewer_service.get_container_logs(task_id, container_name, self.log_lines)
        self._container_ui.display_logs(lines, container_name)

    def show_all_container_logs(self, task_id: str) -> None:
        with show_spinner():
            all_lines = self.viewer_service.get_all_container_logs(task_id, self.log_lines)
        if not all_lines:
            print_error("No container of this task logs to CloudWatch")
            return
        for lines in all_lines:
            self._container_ui.display_logs(lines, lines.container_name)

    def switch_environment(self) -> None:
        current = self.viewer_service.context.active_name
        selected = self._environment_ui.select_environment(self.viewer_service.get_available_environments(), current)
        if not selected or selected == current:
            return
        self.viewer_service.switch_environment(selected)
        print_success(f"Switched to environment '{selected}'")
