"""Type definitions for ecs-viewer."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, TypedDict

if TYPE_CHECKING:
    from mypy_boto3_ecs.type_defs import TaskTypeDef


class ContainerSummary(TypedDict):
    name: str
    command: list[str] | None


class TaskSummary(TypedDict):
    cluster_name: str
    task_id: str
    task_arn: str
    started_at: datetime | None
    last_status: str
    task_definition: str
    containers: list[ContainerSummary]


class FinishedTaskSummary(TypedDict):
    event_id: str
    task_id: str
    family: str
    main_command: str | None
    started_at: datetime | None
    stopped_at: datetime | None
    duration_sec: int | None


class ContainerInfo(TypedDict):
    name: str
    last_status: str | None
    image: str | None
    cpu: str | None
    memory: str | None


class TaskDetails(TypedDict):
    task_arn: str
    task_id: str
    cluster_arn: str
    cluster_name: str
    task_definition_arn: str
    family: str
    revision: str
    last_status: str
    desired_status: str
    created_at: datetime | None
    started_at: datetime | None
    stopped_at: datetime | None
    cpu: str | None
    memory: str | None
    containers: list[ContainerInfo]


class ContainerDefinitionInfo(TypedDict):
    name: str
    image: str
    cpu: int | None
    memory: int | None
    memory_reservation: int | None
    essential: bool | None
    port_mappings: list[dict[str, Any]]
    environment: dict[str, str]
    log_configuration: dict[str, Any] | None


class TaskDefinitionDetails(TypedDict):
    task_definition_arn: str
    family: str
    revision: int
    status: str
    cpu: str | None
    memory: str | None
    network_mode: str | None
    requires_compatibilities: list[str]
    container_definitions: list[ContainerDefinitionInfo]


class LogConfig(TypedDict):
    log_group: str
    log_stream: str


# EventBridge envelope as written to the state change log group
EcsTaskStateChangeEvent = TypedDict(
    "EcsTaskStateChangeEvent",
    {
        "version": str,
        "id": str,
        "detail-type": str,
        "source": str,
        "account": str,
        "time": str,
        "region": str,
        "detail": "TaskTypeDef",
    },
    total=False,
)
