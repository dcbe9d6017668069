import argparse
import logging
from datetime import timedelta
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from mypy_boto3_ecs import ECSClient
    from mypy_boto3_logs.client import CloudWatchLogsClient

from .aws_service import ECSViewerService
from .core.app import run_dashboard
from .core.config import load_environments
from .core.context import ViewerContext
from .core.errors import ECSViewerError
from .ui import ECSNavigator

try:
    __version__ = version("ecs-viewer")
except PackageNotFoundError:
    __version__ = "dev"

console = Console()


def main() -> None:
    """Read-only ECS task dashboard."""
    parser = argparse.ArgumentParser(description="Inspect live and finished ECS tasks and their logs")
    parser.add_argument("--version", action="version", version=f"ecs-viewer {__version__}")
    parser.add_argument("--profile", help="AWS profile to use for authentication", type=str, default=None)
    parser.add_argument("--config", help="Path to environments JSON file", type=str, default=None)
    parser.add_argument("--env", help="Environment to start in (defaults to the first one)", type=str, default=None)
    parser.add_argument("--hours", help="Hours of task history to read", type=int, default=24)
    parser.add_argument("--log-lines", help="Log lines to show per container", type=int, default=100)
    parser.add_argument("--verbose", help="Enable debug logging", action="store_true")
    args = parser.parse_args()

    _configure_logging(args.verbose)

    console.print("🔎 Welcome to ecs-viewer!", style="bold cyan")
    console.print("Read-only ECS task dashboard\n", style="dim")

    try:
        context = ViewerContext(load_environments(args.config), active=args.env)
        ecs_client = _create_aws_client(args.profile)
        logs_client = _create_logs_client(args.profile)
        viewer_service = ECSViewerService(ecs_client, logs_client, context, timedelta(hours=args.hours))
        navigator = ECSNavigator(viewer_service, log_lines=args.log_lines)

        run_dashboard(navigator)

    except ECSViewerError as e:
        console.print(f"\n❌ Error: {e}", style="red")
    except Exception as e:
        console.print(f"\n❌ Error: {e}", style="red")
        console.print("Make sure your AWS credentials are configured.", style="dim")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    # botocore is noisy at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)


def _create_aws_client(profile_name: str | None) -> "ECSClient":
    """Create optimized AWS ECS client with connection pooling."""
    config = Config(
        max_pool_connections=10,
        retries={"max_attempts": 2, "mode": "adaptive"},
    )

    session = boto3.Session(profile_name=profile_name) if profile_name else boto3
    return session.client("ecs", config=config)


def _create_logs_client(profile_name: str | None) -> "CloudWatchLogsClient":
    """Create optimized CloudWatch Logs client with connection pooling."""
    config = Config(
        max_pool_connections=10,
        retries={"max_attempts": 2, "mode": "adaptive"},
    )

    session = boto3.Session(profile_name=profile_name) if profile_name else boto3
    return session.client("logs", config=config)


if __name__ == "__main__":
    main()
