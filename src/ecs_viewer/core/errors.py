"""Error types raised by ecs-viewer."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from botocore.exceptions import BotoCoreError, ClientError


class ECSViewerError(Exception):
    """Base class for all ecs-viewer errors."""


class TaskNotFoundError(ECSViewerError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task '{task_id}' not found")
        self.task_id = task_id


class UpstreamUnavailableError(ECSViewerError):
    """An ECS or CloudWatch Logs call failed (network, throttling, credentials)."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(f"AWS call '{operation}' failed: {cause}")
        self.operation = operation


class MalformedEventError(ECSViewerError):
    """A log line is not a task state change event."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class EnvironmentNotFoundError(ECSViewerError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Environment '{name}' not found in configuration")
        self.name = name


class ConfigurationError(ECSViewerError):
    """The environments file is not valid JSON or does not match the expected layout."""


@contextmanager
def aws_errors(operation: str) -> Iterator[None]:
    """Translate botocore failures into UpstreamUnavailableError."""
    try:
        yield
    except (ClientError, BotoCoreError) as e:
        raise UpstreamUnavailableError(operation, e) from e
