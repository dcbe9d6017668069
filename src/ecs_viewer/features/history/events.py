"""Finished task history reconstructed from ECS task state change events.

ECS forgets stopped tasks shortly after they stop, so the only long-lived record of
one-off task runs is the EventBridge "ECS Task State Change" stream written to a
CloudWatch Logs group. Looking a task up there by ID would mean scanning the whole
window, so the listing view parses the window once and caches the tasks per
environment for later detail lookups.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from ...core.errors import MalformedEventError
from ...core.types import EcsTaskStateChangeEvent, FinishedTaskSummary
from ...core.utils import extract_name_from_arn

if TYPE_CHECKING:
    from mypy_boto3_ecs.type_defs import TaskTypeDef

    from ...core.context import ViewerContext
    from ..container.container import LogService

logger = logging.getLogger(__name__)

SERVICE_STARTED_BY_PREFIX = "ecs-svc/"
DEFAULT_WINDOW = timedelta(hours=24)

# Only these detail attributes are converted; anything else stays a string.
DATE_KEYS = (
    "createdAt",
    "executionStoppedAt",
    "pullStartedAt",
    "pullStoppedAt",
    "startedAt",
    "stoppingAt",
    "stoppedAt",
    "connectivityAt",
)


@dataclass
class ParsedEvent:
    event: EcsTaskStateChangeEvent


@dataclass
class SkippedEvent:
    reason: str
    message: str = field(repr=False)


ParseResult = ParsedEvent | SkippedEvent


@dataclass
class FinishedTaskView:
    tasks: list[TaskTypeDef]
    events: list[EcsTaskStateChangeEvent]
    skipped: list[SkippedEvent]


def parse_date(value: Any) -> Any:  # noqa: ANN401
    """Convert an ISO 8601 string to datetime, leaving anything else untouched."""
    if not isinstance(value, str):
        return value
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise MalformedEventError(f"invalid date {value!r}") from e


def parse_state_change_event(message: str) -> EcsTaskStateChangeEvent:
    """Parse one log line into a task state change event with datetime fields restored."""
    try:
        event = json.loads(message)
    except json.JSONDecodeError as e:
        raise MalformedEventError(f"not JSON: {e.msg}") from e

    if not isinstance(event, dict):
        raise MalformedEventError("event is not an object")
    detail = event.get("detail")
    if not isinstance(detail, dict):
        raise MalformedEventError("event has no detail")
    if not isinstance(detail.get("taskArn"), str):
        raise MalformedEventError("detail has no taskArn")

    for key in DATE_KEYS:
        if detail.get(key):
            detail[key] = parse_date(detail[key])

    return event  # type: ignore[return-value]


def parse_event_line(message: str) -> ParseResult:
    try:
        return ParsedEvent(parse_state_change_event(message))
    except MalformedEventError as e:
        return SkippedEvent(e.reason, message)


def is_service_task(task: TaskTypeDef) -> bool:
    """Tasks started by an ECS service scheduler rather than a one-off run."""
    return (task.get("startedBy") or "").startswith(SERVICE_STARTED_BY_PREFIX)


def build_finished_task_summary(event: EcsTaskStateChangeEvent, main_container: str) -> FinishedTaskSummary:
    detail = event["detail"]

    main_command = None
    for override in detail.get("overrides", {}).get("containerOverrides", []):
        if override.get("name") == main_container and override.get("command"):
            main_command = " ".join(override["command"])
            break

    started_at = detail.get("startedAt")
    stopped_at = detail.get("stoppedAt")
    duration_sec = None
    if isinstance(started_at, datetime) and isinstance(stopped_at, datetime):
        duration_sec = round((stopped_at - started_at).total_seconds())

    return {
        "event_id": event.get("id", ""),
        "task_id": extract_name_from_arn(detail["taskArn"]),
        "family": detail.get("group") or "",
        "main_command": main_command,
        "started_at": started_at,
        "stopped_at": stopped_at,
        "duration_sec": duration_sec,
    }


class HistoryService:
    """Reads the state change log group of the active environment into the finished task cache."""

    def __init__(self, log_service: LogService, context: ViewerContext) -> None:
        self.log_service = log_service
        self.context = context

    def build_finished_task_view(self, window: timedelta = DEFAULT_WINDOW) -> FinishedTaskView:
        log_group = self.context.active_config.log_group_name
        since = datetime.now(tz=UTC) - window
        raw_events = self.log_service.filter_log_events(log_group, int(since.timestamp() * 1000))

        events: list[EcsTaskStateChangeEvent] = []
        skipped: list[SkippedEvent] = []
        for raw in raw_events:
            result = parse_event_line(raw.get("message", ""))
            if isinstance(result, SkippedEvent):
                logger.debug("Skipping event %s: %s", raw.get("eventId"), result.reason)
                skipped.append(result)
            elif not is_service_task(result.event["detail"]):
                events.append(result.event)

        if skipped:
            logger.warning("Skipped %d unparseable lines in %s", len(skipped), log_group)

        return FinishedTaskView(tasks=[event["detail"] for event in events], events=events, skipped=skipped)

    def store_finished_tasks(self, tasks: list[TaskTypeDef]) -> int:
        return self.context.store_finished_tasks(tasks)

    def get_finished_task(self, task_id: str) -> TaskTypeDef | None:
        return self.context.get_finished_task(task_id)

    def refresh(self, window: timedelta = DEFAULT_WINDOW) -> tuple[list[FinishedTaskSummary], int]:
        """Build the finished task view, cache it, and return display rows plus the skip count."""
        view = self.build_finished_task_view(window)
        self.store_finished_tasks(view.tasks)
        main_container = self.context.active_config.main_container
        summaries = [build_finished_task_summary(event, main_container) for event in view.events]
        return summaries, len(view.skipped)
