from typer.testing import CliRunner
from unittest.mock import patch

from compose_teardown_cli.main import app
from compose_teardown_cli.commands.check import check_environment_logic
from compose_teardown_cli.schemas import CheckReport, EnvironmentCheck

runner = CliRunner()


def _report(*passed):
    return CheckReport(checks=[EnvironmentCheck(name=f"check {i}", passed=p) for i, p in enumerate(passed)])


@patch('compose_teardown_cli.main.AppContext')
def test_check_command_all_passed(MockAppContext, mock_app_context):
    MockAppContext.return_value = mock_app_context
    mock_app_context.config.app_config.compose_files = ["docker-compose.yml"]
    mock_app_context.docker_client.run_environment_checks.return_value = _report(True, True)

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 0
    mock_app_context.docker_client.run_environment_checks.assert_called_once_with(["docker-compose.yml"])
    mock_app_context.display.check_report.assert_called_once()


@patch('compose_teardown_cli.main.AppContext')
def test_check_command_with_files(MockAppContext, mock_app_context):
    MockAppContext.return_value = mock_app_context
    mock_app_context.docker_client.run_environment_checks.return_value = _report(True)

    result = runner.invoke(app, ["check", "-f", "other.yml"])

    assert result.exit_code == 0
    mock_app_context.docker_client.run_environment_checks.assert_called_once_with(["other.yml"])


@patch('compose_teardown_cli.main.AppContext')
def test_check_command_failure_exit_code(MockAppContext, mock_app_context):
    MockAppContext.return_value = mock_app_context
    mock_app_context.docker_client.run_environment_checks.return_value = _report(True, False)

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 1


def test_check_logic_fix_rewrites_fallback_config(mock_app_context):
    mock_app_context.config.fell_back_to_defaults = True
    mock_app_context.docker_client.run_environment_checks.return_value = _report(True)

    check_environment_logic(mock_app_context, fix=True)

    mock_app_context.config.save.assert_called_once()


def test_check_logic_without_fix_leaves_config(mock_app_context):
    mock_app_context.config.fell_back_to_defaults = True
    mock_app_context.docker_client.run_environment_checks.return_value = _report(True)

    check_environment_logic(mock_app_context, fix=False)

    mock_app_context.config.save.assert_not_called()
