"""
Unit tests for the appium-service CLI commands.

Tests the CLI behavior with real files standing in for Node.js and the
Appium entry script, and a mocked launcher for 'start'.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import click
import pytest
from click.testing import CliRunner

from appium_service.cli import cli
from appium_service.cli.commands.args import args
from appium_service.cli.commands.start import start
from appium_service.cli.context import AppiumContext
from appium_service.cli.options import parse_env_var, parse_server_arg
from appium_service.core.container import get_container
from appium_service.core.interfaces.launcher import IServiceLauncher
from appium_service.core.settings import AppiumServiceSettings


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def context(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return AppiumContext(
        cwd=tmp_path,
        settings=AppiumServiceSettings(logging={"file": False}),
        is_interactive=False,
    )


@pytest.fixture
def paths(node_executable, appium_js):
    return ["--node", str(node_executable), "--appium-js", str(appium_js)]


class TestArgsCommand:
    def test_prints_command_line(self, runner, context, paths, node_executable, appium_js):
        result = runner.invoke(args, [*paths, "--port", "4800"], obj=context)

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            str(node_executable),
            str(appium_js.absolute()),
            "--port",
            "4800",
            "--address",
            "0.0.0.0",
        ]

    def test_server_args_and_log(self, runner, context, paths):
        result = runner.invoke(
            args,
            [
                *paths,
                "--log",
                "server.log",
                "--arg",
                "relaxed-security",
                "--arg",
                "--log-level=debug",
            ],
            obj=context,
        )

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[6:] == [
            "--log",
            str(Path.cwd() / "server.log"),
            "--relaxed-security",
            "--log-level",
            "debug",
        ]

    def test_json_output(self, runner, context, paths, node_executable):
        result = runner.invoke(
            args,
            [*paths, "--address", "127.0.0.1", "--timeout", "30", "--env", "FOO=bar", "--json"],
            obj=context,
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["executable"] == str(node_executable)
        assert data["address"] == "127.0.0.1"
        assert data["startup_timeout"] == 30.0
        assert data["environment"] == {"FOO": "bar"}

    def test_settings_are_defaults_for_options(self, runner, tmp_path, paths, monkeypatch):
        monkeypatch.chdir(tmp_path)
        ctx = AppiumContext(
            cwd=tmp_path,
            settings=AppiumServiceSettings(
                server={"port": 4900}, args={"--session-override": ""}, logging={"file": False}
            ),
            is_interactive=False,
        )

        result = runner.invoke(args, paths, obj=ctx)

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[lines.index("--port") + 1] == "4900"
        assert "--session-override" in lines

    def test_invalid_address_reported(self, runner, context, paths):
        result = runner.invoke(args, [*paths, "--address", "999.999.999.999"], obj=context)

        assert result.exit_code == 1
        assert "The invalid IP address 999.999.999.999 is defined" in result.output

    def test_missing_node_reported(self, runner, context, appium_js, tmp_path):
        result = runner.invoke(
            args,
            ["--node", str(tmp_path / "missing-node"), "--appium-js", str(appium_js)],
            obj=context,
        )

        assert result.exit_code == 1
        assert "missing-node" in result.output

    def test_bad_env_rejected(self, runner, context, paths):
        result = runner.invoke(args, [*paths, "--env", "NOVALUE"], obj=context)

        assert result.exit_code == 2
        assert "expected NAME=VALUE" in result.output


class TestStartCommand:
    @pytest.fixture
    def service(self):
        service = MagicMock()
        service.url = "http://127.0.0.1:4723/wd/hub"
        return service

    @pytest.fixture
    def launcher(self, service):
        launcher = MagicMock(spec=IServiceLauncher)
        launcher.launch.return_value = service
        get_container().register_singleton(IServiceLauncher, implementation=launcher)
        return launcher

    def test_runs_until_interrupted(self, runner, context, paths, launcher, service):
        service.is_running.side_effect = [True, KeyboardInterrupt]

        with patch("appium_service.cli.commands.start.time.sleep"):
            result = runner.invoke(start, paths, obj=context)

        assert result.exit_code == 0, result.output
        assert "Appium server is running at http://127.0.0.1:4723/wd/hub" in result.output
        service.start.assert_called_once()
        service.stop.assert_called_once()
        launcher.launch.assert_called_once()

    def test_unexpected_exit(self, runner, context, paths, launcher, service):
        service.is_running.return_value = False

        result = runner.invoke(start, paths, obj=context)

        assert result.exit_code == 1
        assert "exited unexpectedly" in result.output
        service.stop.assert_called_once()

    def test_startup_failure(self, runner, context, paths, launcher, service):
        from appium_service.core.exceptions import ServiceStartupError

        service.start.side_effect = ServiceStartupError("boom", url=service.url)

        result = runner.invoke(start, paths, obj=context)

        assert result.exit_code == 1
        assert "boom" in result.output


class TestGroup:
    def test_no_command_shows_help(self, runner):
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "args" in result.output
        assert "start" in result.output

    def test_config_file_end_to_end(self, runner, tmp_path, node_executable, appium_js, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = tmp_path / "appium.toml"
        config.write_text(
            "[server]\nport = 4950\n\n"
            f'[paths]\nnode = "{node_executable.as_posix()}"\n'
            f'appium_js = "{appium_js.as_posix()}"\n\n'
            "[logging]\nfile = false\n"
        )

        result = runner.invoke(cli, ["--config", str(config), "args"])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[lines.index("--port") + 1] == "4950"
        assert lines[1] == str(appium_js.absolute())


class TestOptionParsing:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("relaxed-security", ("--relaxed-security", "")),
            ("--log-level=debug", ("--log-level", "debug")),
            ("--default-capabilities={\"a\":1}", ("--default-capabilities", '{"a":1}')),
            ("-v", ("-v", "")),
        ],
    )
    def test_parse_server_arg(self, raw, expected):
        assert parse_server_arg(raw) == expected

    def test_parse_server_arg_requires_name(self):
        with pytest.raises(click.BadParameter):
            parse_server_arg("=value")

    def test_parse_env_var(self):
        assert parse_env_var("PATH=/usr/bin:/bin") == ("PATH", "/usr/bin:/bin")
        assert parse_env_var("EMPTY=") == ("EMPTY", "")

    @pytest.mark.parametrize("raw", ["NOVALUE", "=x"])
    def test_parse_env_var_rejects(self, raw):
        with pytest.raises(click.BadParameter):
            parse_env_var(raw)


def test_context_create_reports_invalid_config(tmp_path: Path):
    config = tmp_path / "bad.toml"
    config.write_text('[server]\naddress = "localhost"\n')

    with pytest.raises(click.ClickException, match="Invalid configuration"):
        AppiumContext.create(cwd=tmp_path, config_path=config)


def test_context_create_reports_non_string_address(tmp_path: Path):
    config = tmp_path / "bad.toml"
    config.write_text("[server]\naddress = 127\n")

    with pytest.raises(click.ClickException, match="Invalid configuration"):
        AppiumContext.create(cwd=tmp_path, config_path=config)
