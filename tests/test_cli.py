"""Tests for the root copyrec CLI."""

import pytest
from click.testing import CliRunner

from copyrec import __version__
from copyrec.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "copyrec" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_project")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


@pytest.mark.parametrize("command", ["layout", "blank", "decode", "encode"])
def test_commands_registered(cli_runner: CliRunner, command: str) -> None:
    result = cli_runner.invoke(cli, [command, "--help"])
    assert result.exit_code == 0
    assert "SCHEMA" in result.output


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["--examples"], "copyrec layout customer.toml"),
        (["layout", "--examples"], "copyrec --json layout"),
        (["blank", "--examples"], "copyrec blank"),
        (["decode", "--examples"], "customers.dat"),
        (["encode", "--examples"], "--output customers.dat"),
    ],
)
@pytest.mark.usefixtures("_isolated_project")
def test_examples(cli_runner: CliRunner, args: list[str], expected: str) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert expected in result.output
