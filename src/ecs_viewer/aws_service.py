"""AWS service layer - resolves tasks and their logs across live ECS state and event history."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from .core.errors import TaskNotFoundError
from .core.types import FinishedTaskSummary, TaskDefinitionDetails, TaskDetails, TaskSummary
from .core.utils import extract_name_from_arn, gather, run_concurrently
from .features.container.container import LogService, resolve_log_stream
from .features.history.events import DEFAULT_WINDOW, HistoryService
from .features.task.definition import TaskDefinitionResolver, build_task_definition_details
from .features.task.task import TaskService, build_task_details, build_task_summary

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient
    from mypy_boto3_ecs.type_defs import TaskDefinitionTypeDef, TaskTypeDef
    from mypy_boto3_logs.client import CloudWatchLogsClient

    from .core.context import ViewerContext
    from .features.container.models import RecentLogLines

logger = logging.getLogger(__name__)


@dataclass
class Dashboard:
    environment: str
    tasks: list[TaskSummary]
    finished_tasks: list[FinishedTaskSummary]
    skipped_events: int


@dataclass
class TaskView:
    task: TaskDetails
    task_definition: TaskDefinitionDetails | None
    from_history: bool


class ECSViewerService:
    """Entry point for everything the dashboard shows."""

    def __init__(
        self,
        ecs_client: ECSClient,
        logs_client: CloudWatchLogsClient,
        context: ViewerContext,
        history_window: timedelta = DEFAULT_WINDOW,
    ) -> None:
        self.ecs_client = ecs_client
        self.logs_client = logs_client
        self.context = context
        self.history_window = history_window
        self._task = TaskService(ecs_client)
        self._task_definitions = TaskDefinitionResolver(self._task)
        self._logs = LogService(logs_client)
        self._history = HistoryService(self._logs, context)

    @property
    def cluster_name(self) -> str:
        return self.context.active_config.cluster_name

    def list_live_tasks(self) -> list[TaskSummary]:
        task_arns = self._task.list_task_arns(self.cluster_name)
        tasks = self._task.describe_all_tasks(task_arns)
        return [build_task_summary(task) for task in tasks]

    def list_finished_tasks(self) -> tuple[list[FinishedTaskSummary], int]:
        """Read the event history window and cache its tasks for the active environment."""
        return self._history.refresh(self.history_window)

    def get_dashboard(self) -> Dashboard:
        """Live tasks and finished tasks, fetched in parallel."""
        environment = self.context.active_name
        tasks, (finished_tasks, skipped) = gather(self.list_live_tasks, self.list_finished_tasks)
        return Dashboard(environment=environment, tasks=tasks, finished_tasks=finished_tasks, skipped_events=skipped)

    def resolve_task(self, task_id: str) -> TaskTypeDef:
        """Find a task by ID in the finished task cache, then in the live cluster listing."""
        cached = self._history.get_finished_task(task_id)
        if cached is not None:
            logger.debug("Task %s served from history cache", task_id)
            return cached

        task_arns = self._task.list_task_arns(self.cluster_name)
        task_arn = next((arn for arn in task_arns if extract_name_from_arn(arn) == task_id), None)
        if task_arn is None:
            raise TaskNotFoundError(task_id)

        tasks = self._task.describe_tasks([task_arn])
        if not tasks:
            # stopped tasks age out between ListTasks and DescribeTasks
            raise TaskNotFoundError(task_id)
        return tasks[0]

    def _resolve_task_and_definition(self, task_id: str) -> tuple[TaskTypeDef, TaskDefinitionTypeDef | None]:
        task = self.resolve_task(task_id)
        # state change events may omit the task definition
        task_def_arn = task.get("taskDefinitionArn")
        if not task_def_arn:
            return task, None
        return task, self._task_definitions.get_task_definition(task_def_arn)

    def get_task_view(self, task_id: str) -> TaskView:
        task, task_definition = self._resolve_task_and_definition(task_id)
        return TaskView(
            task=build_task_details(task),
            task_definition=build_task_definition_details(task_definition) if task_definition else None,
            from_history=self._history.get_finished_task(task_id) is not None,
        )

    def get_container_logs(self, task_id: str, container_name: str, limit: int = 100) -> RecentLogLines | None:
        """Recent log lines of one container, or None when it does not log to CloudWatch."""
        task, task_definition = self._resolve_task_and_definition(task_id)
        if not task_definition:
            return None
        task_id = extract_name_from_arn(task["taskArn"])
        return self._fetch_container_logs(task_definition, task_id, container_name, limit)

    def get_all_container_logs(self, task_id: str, limit: int = 100) -> list[RecentLogLines]:
        """Recent log lines of every CloudWatch-logging container in a task, fetched in parallel."""
        task, task_definition = self._resolve_task_and_definition(task_id)
        if not task_definition:
            return []

        task_id = extract_name_from_arn(task["taskArn"])
        container_names = [container["name"] for container in task_definition.get("containerDefinitions", [])]
        results = run_concurrently(
            lambda name: self._fetch_container_logs(task_definition, task_id, name, limit), container_names
        )
        return [result for result in results if result is not None]

    def _fetch_container_logs(
        self, task_definition: TaskDefinitionTypeDef, task_id: str, container_name: str, limit: int
    ) -> RecentLogLines | None:
        log_config = resolve_log_stream(task_definition, task_id, container_name)
        if not log_config:
            logger.debug("Container %s of %s has no awslogs stream", container_name, task_id)
            return None
        return self._logs.get_recent_log_lines(log_config["log_group"], log_config["log_stream"], container_name, limit)

    def get_available_environments(self) -> list[str]:
        return self.context.available_environments()

    def switch_environment(self, name: str) -> None:
        self.context.switch_environment(name)
