"""Live task queries against the ECS API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...core.base import BaseAWSService
from ...core.errors import aws_errors
from ...core.types import TaskDetails, TaskSummary
from ...core.utils import (
    batch_items,
    extract_cluster_from_task_arn,
    extract_name_from_arn,
    paginate_aws_list,
    parse_task_definition_arn,
    run_concurrently,
)

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient
    from mypy_boto3_ecs.type_defs import TaskDefinitionTypeDef, TaskTypeDef

logger = logging.getLogger(__name__)

TASK_STATUSES = ("RUNNING", "PENDING", "STOPPED")
LIST_PAGE_SIZE = 100
DESCRIBE_BATCH_SIZE = 100


class TaskService(BaseAWSService):
    """Service for listing and describing ECS tasks and task definitions."""

    def __init__(self, ecs_client: ECSClient) -> None:
        super().__init__(ecs_client)

    def _list_tasks_paginated(self, cluster_name: str, desired_status: str) -> list[str]:
        with aws_errors("ListTasks"):
            return paginate_aws_list(
                self.ecs_client,
                "list_tasks",
                "taskArns",
                page_size=LIST_PAGE_SIZE,
                cluster=cluster_name,
                desiredStatus=desired_status,
            )

    def list_task_arns(self, cluster_name: str) -> list[str]:
        """List RUNNING, PENDING and STOPPED task ARNs, one paginated listing per status in parallel."""
        per_status = run_concurrently(lambda status: self._list_tasks_paginated(cluster_name, status), TASK_STATUSES)
        task_arns = [arn for arns in per_status for arn in arns]
        logger.debug("Listed %d tasks in %s", len(task_arns), cluster_name)
        return task_arns

    def describe_tasks(self, task_arns: list[str]) -> list[TaskTypeDef]:
        """Describe one batch of task ARNs belonging to a single cluster."""
        if not task_arns:
            return []

        cluster_name = extract_cluster_from_task_arn(task_arns[0])
        mixed = {arn for arn in task_arns if extract_cluster_from_task_arn(arn) != cluster_name}
        if mixed:
            raise ValueError(f"Task ARNs span multiple clusters: {cluster_name} and {sorted(mixed)}")

        with aws_errors("DescribeTasks"):
            response = self.ecs_client.describe_tasks(cluster=cluster_name, tasks=task_arns)
        return response.get("tasks", [])

    def describe_all_tasks(self, task_arns: list[str]) -> list[TaskTypeDef]:
        """Describe any number of task ARNs, 100 per call, calls run in parallel."""
        batches = run_concurrently(self.describe_tasks, list(batch_items(task_arns, DESCRIBE_BATCH_SIZE)))
        return [task for batch in batches for task in batch]

    def describe_task_definition(self, task_def_arn: str) -> TaskDefinitionTypeDef | None:
        with aws_errors("DescribeTaskDefinition"):
            response = self.ecs_client.describe_task_definition(taskDefinition=task_def_arn)
        return response.get("taskDefinition")

    def describe_task_definitions(self, task_def_arns: list[str]) -> list[TaskDefinitionTypeDef]:
        """Describe task definitions in parallel, dropping any that resolved to nothing."""
        definitions = run_concurrently(self.describe_task_definition, task_def_arns)
        return [definition for definition in definitions if definition is not None]


def build_task_summary(task: TaskTypeDef) -> TaskSummary:
    """Create the listing row for a described task."""
    overrides = task.get("overrides", {}).get("containerOverrides", [])
    commands = {override.get("name"): override["command"] for override in overrides if override.get("command")}

    family, revision = parse_task_definition_arn(task.get("taskDefinitionArn", ""))

    return {
        "cluster_name": extract_name_from_arn(task.get("clusterArn", "")),
        "task_id": extract_name_from_arn(task["taskArn"]),
        "task_arn": task["taskArn"],
        "started_at": task.get("startedAt"),
        "last_status": task.get("lastStatus", "UNKNOWN"),
        "task_definition": f"{family}:{revision}",
        "containers": [
            {"name": container.get("name", ""), "command": commands.get(container.get("name", ""))}
            for container in task.get("containers", [])
        ],
    }


def build_task_details(task: TaskTypeDef) -> TaskDetails:
    """Create the detail view of a task, live or recovered from an event."""
    task_def_arn = task.get("taskDefinitionArn", "")
    family, revision = parse_task_definition_arn(task_def_arn)
    cluster_arn = task.get("clusterArn", "")

    containers = []
    for container in task.get("containers", []):
        containers.append(
            {
                "name": container.get("name", ""),
                "last_status": container.get("lastStatus"),
                "image": container.get("image"),
                "cpu": _optional_str(container.get("cpu")),
                "memory": _optional_str(container.get("memory")),
            }
        )

    return {
        "task_arn": task["taskArn"],
        "task_id": extract_name_from_arn(task["taskArn"]),
        "cluster_arn": cluster_arn,
        "cluster_name": extract_name_from_arn(cluster_arn),
        "task_definition_arn": task_def_arn,
        "family": family,
        "revision": revision,
        "last_status": task.get("lastStatus", "UNKNOWN"),
        "desired_status": task.get("desiredStatus", "UNKNOWN"),
        "created_at": task.get("createdAt"),
        "started_at": task.get("startedAt"),
        "stopped_at": task.get("stoppedAt"),
        "cpu": task.get("cpu"),
        "memory": task.get("memory"),
        "containers": containers,
    }


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
