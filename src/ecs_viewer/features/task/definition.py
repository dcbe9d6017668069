"""Task definition lookups with a process-lifetime cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...core.types import ContainerDefinitionInfo, TaskDefinitionDetails

if TYPE_CHECKING:
    from mypy_boto3_ecs.type_defs import ContainerDefinitionOutputTypeDef, TaskDefinitionTypeDef

    from .task import TaskService

logger = logging.getLogger(__name__)


class TaskDefinitionResolver:
    """Fetch task definitions once per ARN.

    Task definition revisions are immutable, so cached entries never go stale.
    """

    def __init__(self, task_service: TaskService) -> None:
        self.task_service = task_service
        self._cache: dict[str, TaskDefinitionTypeDef] = {}

    def get_task_definitions(self, task_def_arns: list[str]) -> dict[str, TaskDefinitionTypeDef]:
        """Resolve ARNs to definitions, fetching each uncached ARN exactly once."""
        wanted = list(dict.fromkeys(task_def_arns))
        missing = [arn for arn in wanted if arn not in self._cache]

        if missing:
            logger.debug("Fetching %d task definitions (%d cached)", len(missing), len(wanted) - len(missing))
            for definition in self.task_service.describe_task_definitions(missing):
                self._cache[definition["taskDefinitionArn"]] = definition

        return {arn: self._cache[arn] for arn in wanted if arn in self._cache}

    def get_task_definition(self, task_def_arn: str) -> TaskDefinitionTypeDef | None:
        return self.get_task_definitions([task_def_arn]).get(task_def_arn)


def find_container_definition(
    task_definition: TaskDefinitionTypeDef, container_name: str
) -> ContainerDefinitionOutputTypeDef | None:
    for container_def in task_definition.get("containerDefinitions", []):
        if container_def["name"] == container_name:
            return container_def
    return None


def build_task_definition_details(task_definition: TaskDefinitionTypeDef) -> TaskDefinitionDetails:
    containers: list[ContainerDefinitionInfo] = []
    for container_def in task_definition.get("containerDefinitions", []):
        log_config = container_def.get("logConfiguration")
        containers.append(
            {
                "name": container_def["name"],
                "image": container_def.get("image", ""),
                "cpu": container_def.get("cpu"),
                "memory": container_def.get("memory"),
                "memory_reservation": container_def.get("memoryReservation"),
                "essential": container_def.get("essential"),
                "port_mappings": [dict(mapping) for mapping in container_def.get("portMappings", [])],
                "environment": {env["name"]: env["value"] for env in container_def.get("environment", [])},
                "log_configuration": dict(log_config) if log_config else None,
            }
        )

    return {
        "task_definition_arn": task_definition["taskDefinitionArn"],
        "family": task_definition["family"],
        "revision": task_definition["revision"],
        "status": task_definition.get("status", "UNKNOWN"),
        "cpu": task_definition.get("cpu"),
        "memory": task_definition.get("memory"),
        "network_mode": task_definition.get("networkMode"),
        "requires_compatibilities": list(task_definition.get("requiresCompatibilities", [])),
        "container_definitions": containers,
    }
