import sys
from unittest.mock import Mock, patch

from ecs_viewer import _create_aws_client, _create_logs_client, main
from ecs_viewer.core.errors import EnvironmentNotFoundError


@patch("ecs_viewer.run_dashboard")
@patch("ecs_viewer.load_environments")
@patch("ecs_viewer._create_logs_client")
@patch("ecs_viewer._create_aws_client")
@patch("ecs_viewer.ECSNavigator")
@patch("ecs_viewer.console")
def test_main_successful_flow(
    mock_console,
    mock_navigator_class,
    mock_create_client,
    mock_create_logs_client,
    mock_load_environments,
    mock_run_dashboard,
    environments,
) -> None:
    """Test main function wiring the dashboard with default arguments."""
    mock_load_environments.return_value = environments
    mock_navigator = Mock()
    mock_navigator_class.return_value = mock_navigator

    with patch.object(sys, "argv", ["ecs-viewer"]):
        main()

    mock_load_environments.assert_called_once_with(None)
    mock_create_client.assert_called_once_with(None)
    mock_create_logs_client.assert_called_once_with(None)
    mock_run_dashboard.assert_called_once_with(mock_navigator)
    assert mock_navigator_class.call_args.kwargs == {"log_lines": 100}
    mock_console.print.assert_any_call("🔎 Welcome to ecs-viewer!", style="bold cyan")


@patch("ecs_viewer.run_dashboard")
@patch("ecs_viewer.load_environments")
@patch("ecs_viewer._create_logs_client")
@patch("ecs_viewer._create_aws_client")
@patch("ecs_viewer.ECSNavigator")
@patch("ecs_viewer.ECSViewerService")
@patch("ecs_viewer.console")
def test_main_passes_arguments(
    _mock_console,
    mock_service_class,
    mock_navigator_class,
    mock_create_client,
    mock_create_logs_client,
    mock_load_environments,
    _mock_run_dashboard,
    environments,
) -> None:
    """Test main function with profile, config, environment and window arguments."""
    mock_load_environments.return_value = environments
    argv = [
        "ecs-viewer",
        "--profile",
        "dev",
        "--config",
        "envs.json",
        "--env",
        "production",
        "--hours",
        "6",
        "--log-lines",
        "20",
    ]

    with patch.object(sys, "argv", argv):
        main()

    mock_load_environments.assert_called_once_with("envs.json")
    mock_create_client.assert_called_once_with("dev")
    mock_create_logs_client.assert_called_once_with("dev")
    _, _, context, window = mock_service_class.call_args.args
    assert context.active_name == "production"
    assert window.total_seconds() == 6 * 3600
    assert mock_navigator_class.call_args.kwargs == {"log_lines": 20}


@patch("ecs_viewer.load_environments")
@patch("ecs_viewer._create_aws_client")
@patch("ecs_viewer.console")
def test_main_configuration_error(mock_console, mock_create_client, mock_load_environments) -> None:
    """Test main function with a missing environment configuration."""
    mock_load_environments.side_effect = EnvironmentNotFoundError("staging")

    with patch.object(sys, "argv", ["ecs-viewer"]):
        main()

    mock_create_client.assert_not_called()
    printed = [call.args[0] for call in mock_console.print.call_args_list if call.args]
    assert any("staging" in message for message in printed)


@patch("ecs_viewer.load_environments")
@patch("ecs_viewer._create_aws_client")
@patch("ecs_viewer.console")
def test_main_aws_error(mock_console, mock_create_client, mock_load_environments, environments) -> None:
    """Test main function with AWS connection error."""
    mock_load_environments.return_value = environments
    mock_create_client.side_effect = Exception("No credentials found")

    with patch.object(sys, "argv", ["ecs-viewer"]):
        main()

    mock_console.print.assert_any_call("\n❌ Error: No credentials found", style="red")
    mock_console.print.assert_any_call("Make sure your AWS credentials are configured.", style="dim")


@patch("ecs_viewer.boto3")
def test_create_aws_client_without_profile(mock_boto3) -> None:
    mock_client = Mock()
    mock_boto3.client.return_value = mock_client

    result = _create_aws_client(None)

    assert result == mock_client
    mock_boto3.client.assert_called_once()
    assert mock_boto3.client.call_args.args == ("ecs",)


@patch("ecs_viewer.boto3")
def test_create_logs_client_with_profile(mock_boto3) -> None:
    mock_session = Mock()
    mock_boto3.Session.return_value = mock_session

    _create_logs_client("dev")

    mock_boto3.Session.assert_called_once_with(profile_name="dev")
    config = mock_session.client.call_args.kwargs["config"]
    assert mock_session.client.call_args.args == ("logs",)
    assert config.retries == {"max_attempts": 2, "mode": "adaptive"}
