"""Shared pytest fixtures for tests."""

from unittest.mock import Mock

import pytest

from ecs_viewer.core.config import EnvironmentConfig, EnvironmentsConfig
from ecs_viewer.core.context import ViewerContext


@pytest.fixture
def mock_paginated_client():
    def _create_client(pages: list[dict]) -> Mock:
        client = Mock()
        paginator = Mock()
        paginator.paginate.return_value = pages
        client.get_paginator.return_value = paginator
        return client

    return _create_client


@pytest.fixture
def environments():
    return EnvironmentsConfig(
        {
            "staging": EnvironmentConfig(
                cluster_name="staging-cluster", main_container="app", log_group_name="/events/staging"
            ),
            "production": EnvironmentConfig(
                cluster_name="production", main_container="app", log_group_name="/events/production"
            ),
        }
    )


@pytest.fixture
def viewer_context(environments):
    return ViewerContext(environments)


@pytest.fixture
def make_task():
    def _make_task(task_id: str, cluster: str = "production", **extra) -> dict:
        task = {
            "taskArn": f"arn:aws:ecs:us-east-1:123456789012:task/{cluster}/{task_id}",
            "clusterArn": f"arn:aws:ecs:us-east-1:123456789012:cluster/{cluster}",
            "taskDefinitionArn": "arn:aws:ecs:us-east-1:123456789012:task-definition/batch-job:7",
            "lastStatus": "RUNNING",
            "desiredStatus": "RUNNING",
            "containers": [{"name": "app", "lastStatus": "RUNNING", "image": "batch:1.0"}],
        }
        task.update(extra)
        return task

    return _make_task
