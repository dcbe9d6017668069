"""Context objects shared across a serving process."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .config import EnvironmentConfig, EnvironmentsConfig
from .utils import extract_name_from_arn

if TYPE_CHECKING:
    from mypy_boto3_ecs.type_defs import TaskTypeDef

logger = logging.getLogger(__name__)


class FinishedTaskCache:
    """Finished tasks recovered from state change events, keyed by environment then task ID.

    Entries are never evicted. Stores are upserts, so a later event for the same task wins.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, dict[str, TaskTypeDef]] = {}

    def store(self, environment: str, tasks: Iterable[TaskTypeDef]) -> int:
        bucket = self._tasks.setdefault(environment, {})
        count = 0
        for task in tasks:
            bucket[extract_name_from_arn(task["taskArn"])] = task
            count += 1
        logger.debug("Cached %d finished tasks for %s (%d total)", count, environment, len(bucket))
        return count

    def get(self, environment: str, task_id: str) -> TaskTypeDef | None:
        return self._tasks.get(environment, {}).get(task_id)


class ViewerContext:
    """Active environment selection plus the finished task cache."""

    def __init__(
        self,
        environments: EnvironmentsConfig,
        active: str | None = None,
        finished_tasks: FinishedTaskCache | None = None,
    ) -> None:
        self.environments = environments
        self.finished_tasks = finished_tasks or FinishedTaskCache()
        self._active = environments.default_name()
        if active:
            self.switch_environment(active)

    @property
    def active_name(self) -> str:
        return self._active

    @property
    def active_config(self) -> EnvironmentConfig:
        return self.environments.get(self._active)

    def available_environments(self) -> list[str]:
        return self.environments.names()

    def switch_environment(self, name: str) -> None:
        # get() raises for unknown names before anything changes
        self.environments.get(name)
        logger.info("Switching environment %s -> %s", self._active, name)
        self._active = name

    def store_finished_tasks(self, tasks: Iterable[TaskTypeDef]) -> int:
        return self.finished_tasks.store(self._active, tasks)

    def get_finished_task(self, task_id: str) -> TaskTypeDef | None:
        return self.finished_tasks.get(self._active, task_id)
