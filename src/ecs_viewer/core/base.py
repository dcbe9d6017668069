"""Shared bases for AWS-backed services and terminal UI components."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .navigation import select_with_auto_pagination, select_with_navigation

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient
    from mypy_boto3_logs.client import CloudWatchLogsClient


class BaseAWSService:
    def __init__(self, ecs_client: ECSClient) -> None:
        self.ecs_client = ecs_client


class BaseLogsService:
    def __init__(self, logs_client: CloudWatchLogsClient) -> None:
        self.logs_client = logs_client


class BaseUIComponent:
    """Menu prompts with back/exit entries, shared by every screen."""

    def select_with_nav(self, prompt: str, choices: list[dict[str, str]], back_text: str | None) -> str | None:
        return select_with_navigation(prompt, choices, back_text)

    def select_from_list(self, prompt: str, choices: list[dict[str, str]], back_text: str | None) -> str | None:
        """Like select_with_nav, but pages through lists too long for one screen."""
        return select_with_auto_pagination(prompt, choices, back_text)
