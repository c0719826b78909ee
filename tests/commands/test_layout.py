"""Tests for the layout command."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from copyrec.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestLayoutCommand:
    def test_human_output(self, cli_runner: CliRunner, schema_file: Path) -> None:
        result = cli_runner.invoke(cli, ["layout", str(schema_file)])
        assert result.exit_code == 0
        assert "address.street" in result.output
        assert "PIC 9(5)" in result.output

    def test_json_output(self, cli_runner: CliRunner, schema_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "layout", str(schema_file)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["length"] == 45
        assert data["data"]["fields"][3]["start"] == 35

    def test_quiet_output(self, cli_runner: CliRunner, schema_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "layout", str(schema_file)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "id 0 10",
            "count 10 15",
            "address.street 15 35",
            "address.city 35 45",
        ]

    def test_base_offset_from_config(
        self, cli_runner: CliRunner, schema_file: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "copyrec.toml").write_text("[codec]\nbase_offset = 5\n")
        result = cli_runner.invoke(cli, ["-q", "layout", str(schema_file)])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "id 5 15"

    def test_invalid_schema_exits_1(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text('name = "bad"\n\n[[fields]]\nname = "x"\ntype = "PIC Z"\nlength = 3\n')
        result = cli_runner.invoke(cli, ["layout", str(bad)])
        assert result.exit_code == 1
        assert "Unknown field type" in result.output

    def test_missing_schema_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["layout", str(tmp_path / "missing.toml")])
        assert result.exit_code == 2
