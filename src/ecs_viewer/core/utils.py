"""Utility functions for ecs-viewer."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, TypeVar

from rich.console import Console
from rich.spinner import Spinner

T = TypeVar("T")
R = TypeVar("R")

MAX_WORKERS = 8

console = Console()


def extract_name_from_arn(arn: str) -> str:
    """Extract resource name from AWS ARN."""
    return arn.split("/")[-1]


def extract_cluster_from_task_arn(task_arn: str) -> str:
    """Cluster segment of arn:aws:ecs:<region>:<account>:task/<cluster>/<id>."""
    return task_arn.split("/")[1]


def parse_task_definition_arn(task_def_arn: str) -> tuple[str, str]:
    """Return (family, revision) from a task definition ARN or family:revision string."""
    family_revision = task_def_arn.split("/")[-1]
    family, _, revision = family_revision.rpartition(":")
    if not family:
        return revision, ""
    return family, revision


def print_error(message: str) -> None:
    console.print(f"❌ {message}", style="red")


def print_success(message: str) -> None:
    console.print(f"✅ {message}", style="green")


def print_warning(message: str) -> None:
    console.print(f"⚠️ {message}", style="yellow")


@contextmanager
def show_spinner() -> Iterator[None]:
    """Context manager that shows a spinner while running operations."""
    spinner = Spinner("dots", style="cyan")
    with console.status(spinner):
        yield


def paginate_aws_list(
    client: Any,  # noqa: ANN401
    operation_name: str,
    result_key: str,
    page_size: int | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> list[Any]:
    paginator = client.get_paginator(operation_name)
    if page_size:
        kwargs["PaginationConfig"] = {"PageSize": page_size}
    page_iterator = paginator.paginate(**kwargs)

    results: list[Any] = []
    for page in page_iterator:
        results.extend(page.get(result_key, []))

    return results


def batch_items(items: Sequence[T], batch_size: int) -> Iterator[list[T]]:
    """Split items into lists of at most batch_size."""
    for i in range(0, len(items), batch_size):
        yield list(items[i : i + batch_size])


def gather(*calls: Callable[[], Any]) -> list[Any]:
    """Run independent calls on worker threads and return their results in order.

    The first exception raised by any call propagates once all calls have finished.
    """
    if not calls:
        return []
    if len(calls) == 1:
        return [calls[0]()]

    with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(calls))) as executor:
        futures = [executor.submit(call) for call in calls]
    return [future.result() for future in futures]


def run_concurrently(fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
    """Apply fn to every item concurrently, preserving input order."""
    return gather(*(lambda item=item: fn(item) for item in items))
