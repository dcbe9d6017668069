"""Container log stream location and CloudWatch Logs retrieval."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...core.base import BaseLogsService
from ...core.errors import aws_errors
from ...core.types import LogConfig
from ...core.utils import paginate_aws_list
from ..task.definition import find_container_definition
from .models import LogEvent, RecentLogLines

if TYPE_CHECKING:
    from mypy_boto3_ecs.type_defs import TaskDefinitionTypeDef
    from mypy_boto3_logs.client import CloudWatchLogsClient
    from mypy_boto3_logs.type_defs import FilteredLogEventTypeDef, OutputLogEventTypeDef

logger = logging.getLogger(__name__)

AWSLOGS_DRIVER = "awslogs"
MAX_LOG_PAGES = 50


def build_log_stream_name(stream_prefix: str, container_name: str, task_id: str) -> str:
    return f"{stream_prefix}/{container_name}/{task_id}"


def resolve_log_stream(task_definition: TaskDefinitionTypeDef, task_id: str, container_name: str) -> LogConfig | None:
    """Locate the awslogs group and stream a container of a task writes to."""
    container_def = find_container_definition(task_definition, container_name)
    if not container_def:
        return None

    log_config = container_def.get("logConfiguration") or {}
    if log_config.get("logDriver") != AWSLOGS_DRIVER:
        return None

    options = log_config.get("options") or {}
    log_group = options.get("awslogs-group")
    if not log_group:
        return None

    stream_prefix = options.get("awslogs-stream-prefix") or ""
    return {"log_group": log_group, "log_stream": build_log_stream_name(stream_prefix, container_name, task_id)}


class LogService(BaseLogsService):
    """Service for CloudWatch Logs reads."""

    def __init__(self, logs_client: CloudWatchLogsClient) -> None:
        super().__init__(logs_client)

    def filter_log_events(self, log_group: str, start_time_ms: int) -> list[FilteredLogEventTypeDef]:
        """All events of a log group from start_time_ms up to now."""
        with aws_errors("FilterLogEvents"):
            events = paginate_aws_list(
                self.logs_client, "filter_log_events", "events", logGroupName=log_group, startTime=start_time_ms
            )
        logger.debug("Fetched %d events from %s", len(events), log_group)
        return events

    def get_log_events(self, log_group: str, log_stream: str, limit: int) -> list[OutputLogEventTypeDef]:
        """The newest ``limit`` events of a stream, oldest first.

        GetLogEvents keeps returning a continuation token after the last page; the end of
        the stream is only signalled by receiving the token that was just sent.
        """
        kwargs = {"logGroupName": log_group, "logStreamName": log_stream, "startFromHead": False, "limit": limit}
        events: list[OutputLogEventTypeDef] = []
        sent_token = None

        for _ in range(MAX_LOG_PAGES):
            with aws_errors("GetLogEvents"):
                response = self.logs_client.get_log_events(**kwargs)
            events.extend(response.get("events", []))

            next_token = response.get("nextForwardToken")
            if not next_token or next_token == sent_token:
                break
            sent_token = next_token
            kwargs["nextToken"] = next_token
        else:
            logger.warning("Stopped reading %s/%s after %d pages", log_group, log_stream, MAX_LOG_PAGES)

        return events[-limit:] if limit else events

    def get_recent_log_lines(
        self, log_group: str, log_stream: str, container_name: str, limit: int = 100
    ) -> RecentLogLines:
        events = self.get_log_events(log_group, log_stream, limit)
        lines = RecentLogLines(
            log_group=log_group,
            log_stream=log_stream,
            container_name=container_name,
            events=[LogEvent.from_output_event(event) for event in events],
        )
        if lines.possibly_delayed:
            logger.info("No events in %s/%s yet, delivery may be delayed", log_group, log_stream)
        return lines
