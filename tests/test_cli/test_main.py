"""Tests for CLI main module."""

import pytest
from unittest.mock import MagicMock, patch

import typer
from docker.errors import APIError
from typer.testing import CliRunner

from mongo_runner.cli.main import app, _fail, _run_engine_command
from mongo_runner.config import ConfigStore
from mongo_runner.errors import LaunchError
from mongo_runner.models.config import RunnerConfig
from mongo_runner.models.topology import LaunchProgress, Topology


runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    """Path of an isolated config file."""
    return tmp_path / ".mongo-runner"


@pytest.fixture
def mock_get_client():
    with patch("mongo_runner.cli.main.get_client") as mock:
        yield mock


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("mongo_runner.cli.main.setup_logging"):
        yield


class TestRunCommand:
    """Test argument handling of ``run``."""

    def test_no_arguments(self, mock_get_client):
        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Please specify a version" in result.output
        mock_get_client.assert_not_called()

    def test_missing_topology(self, mock_get_client):
        result = runner.invoke(app, ["run", "3.4.2"])

        assert result.exit_code == 1
        assert "Please specify a topology" in result.output
        mock_get_client.assert_not_called()

    def test_unknown_topology_is_usage_error(self, mock_get_client):
        """Unrecognized topologies exit 1, same as missing arguments."""
        result = runner.invoke(app, ["run", "3.4.2", "sharded"])

        assert result.exit_code == 1
        assert "Unknown topology: sharded" in result.output
        mock_get_client.assert_not_called()

    @pytest.mark.parametrize("topology", list(Topology))
    def test_dispatches_to_launcher(self, mock_get_client, config_file, topology):
        progress = LaunchProgress(topology=topology, version="3.4.2", image="3.4.2-x")
        progress.add_member("mongo-0")

        with patch("mongo_runner.cli.main.get_launcher") as mock_get_launcher:
            mock_get_launcher.return_value.launch.return_value = progress

            result = runner.invoke(
                app, ["run", "3.4.2", topology.value, "--config", str(config_file)]
            )

        assert result.exit_code == 0, result.output
        mock_get_client.assert_called_once_with(None)
        args = mock_get_launcher.call_args[0]
        assert args[0] is topology
        assert args[1] is mock_get_client.return_value
        mock_get_launcher.return_value.launch.assert_called_once_with("3.4.2")
        assert "running" in result.output

    def test_uses_stored_settings(self, mock_get_client, config_file):
        ConfigStore(config_file).save(RunnerConfig(docker_host="tcp://docker:2375"))

        with patch("mongo_runner.cli.main.get_launcher") as mock_get_launcher:
            mock_get_launcher.return_value.launch.return_value = LaunchProgress(
                topology=Topology.STANDALONE, version="3.4.2"
            )
            result = runner.invoke(
                app, ["run", "3.4.2", "standalone", "--config", str(config_file)]
            )

        assert result.exit_code == 0, result.output
        mock_get_client.assert_called_once_with("tcp://docker:2375")
        assert mock_get_launcher.call_args[0][2].docker_host == "tcp://docker:2375"

    def test_launch_failure_exits_nonzero(self, mock_get_client, config_file):
        with patch("mongo_runner.cli.main.get_launcher") as mock_get_launcher:
            mock_get_launcher.return_value.launch.side_effect = LaunchError(
                "replicaset launch failed"
            )
            result = runner.invoke(
                app, ["run", "3.4.2", "replicaset", "--config", str(config_file)]
            )

        assert result.exit_code == 1
        assert "replicaset launch failed" in result.output

    def test_invalid_log_level(self, mock_get_client, config_file):
        result = runner.invoke(
            app, ["run", "3.4.2", "standalone", "--config", str(config_file), "-l", "LOUD"]
        )

        assert result.exit_code == 1
        mock_get_client.assert_not_called()


class TestBuildCommand:
    """Test ``build``."""

    def test_build_defaults_to_base(self, mock_get_client, config_file):
        with patch("mongo_runner.cli.main.ImageProvider") as mock_provider:
            mock_provider.return_value.ensure_image.return_value = "3.4.2-base"

            result = runner.invoke(app, ["build", "3.4.2", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        mock_provider.return_value.ensure_image.assert_called_once_with("3.4.2", "base")
        assert "3.4.2-base" in result.output


class TestConfigCommands:
    """Test ``config`` subcommands."""

    def test_set_and_show(self, config_file):
        result = runner.invoke(app, ["config", "set", "shell", "mongosh", "-c", str(config_file)])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["config", "set", "retries", "3", "-c", str(config_file)])
        assert result.exit_code == 0, result.output

        config = ConfigStore(config_file).load()
        assert config.shell == "mongosh"
        assert config.retries == 3

        result = runner.invoke(app, ["config", "show", "-c", str(config_file)])
        assert result.exit_code == 0
        assert "mongosh" in result.output

    def test_set_numeric_string_for_known_setting(self, config_file):
        result = runner.invoke(app, ["config", "set", "templates_dir", "2024", "-c", str(config_file)])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["config", "set", "shell", "8", "-c", str(config_file)])
        assert result.exit_code == 0, result.output

        config = ConfigStore(config_file).load()
        assert config.templates_dir == "2024"
        assert config.shell == "8"

    def test_set_invalid_value(self, config_file):
        result = runner.invoke(app, ["config", "set", "log_level", "LOUD", "-c", str(config_file)])

        assert result.exit_code == 1
        assert ConfigStore(config_file).load().log_level == "INFO"

    def test_unset(self, config_file):
        ConfigStore(config_file).save(RunnerConfig(shell="mongosh", note="x"))

        assert runner.invoke(app, ["config", "unset", "shell", "-c", str(config_file)]).exit_code == 0
        assert runner.invoke(app, ["config", "unset", "note", "-c", str(config_file)]).exit_code == 0

        config = ConfigStore(config_file).load()
        assert config.shell == "mongo"
        assert "note" not in config.model_dump()

    def test_unset_unknown(self, config_file):
        result = runner.invoke(app, ["config", "unset", "nope", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Unknown setting: nope" in result.output


@patch("mongo_runner.cli.main.get_client")
@patch("mongo_runner.cli.main.console")
def test_run_engine_command_success(mock_console, mock_get_client):
    """Test the engine command runner on a successful execution."""
    mock_handler = MagicMock(return_value="ok")
    config = RunnerConfig()

    assert _run_engine_command(mock_handler, config, arg1="value1") == "ok"

    mock_handler.assert_called_once_with(mock_get_client.return_value, config, arg1="value1")
    mock_console.print.assert_not_called()


@patch("mongo_runner.cli.main.get_client")
@patch("mongo_runner.cli.main.console")
def test_run_engine_command_docker_error(mock_console, mock_get_client):
    """Test the engine command runner when the engine rejects a call."""
    mock_handler = MagicMock(side_effect=APIError("daemon unavailable"))

    with pytest.raises(typer.Exit) as exc_info:
        _run_engine_command(mock_handler, RunnerConfig())

    mock_console.print.assert_called_once_with("[red]Error:[/red] daemon unavailable")
    assert exc_info.value.exit_code == 1


@patch("mongo_runner.cli.main.console")
def test_fail_always_exits(mock_console):
    """Test the failure helper prints the message and never returns."""
    with pytest.raises(typer.Exit) as exc_info:
        _fail("Please specify a version")

    mock_console.print.assert_called_once_with("[red]Error:[/red] Please specify a version")
    assert exc_info.value.exit_code == 1
