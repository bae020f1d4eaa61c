"""Tests for the root CLI group."""

from click.testing import CliRunner

from gendocs import __version__
from gendocs.cli import cli

COMMANDS = (
    "docs:create",
    "docs:list",
    "docs:rename",
    "docs:remove",
    "init",
    "subdomain:set",
    "domains:add",
)


class TestRootGroup:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_command_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for name in COMMANDS:
            assert name in result.output

    def test_every_command_has_examples(self, cli_runner: CliRunner) -> None:
        for name in COMMANDS:
            result = cli_runner.invoke(cli, [name, "--examples"])
            assert result.exit_code == 0, name
            assert "Examples for" in result.output
            assert f"gendocs {name}" in result.output

    def test_unknown_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["publish"])
        assert result.exit_code == 2
