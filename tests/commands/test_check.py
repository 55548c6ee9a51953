"""Tests for the check command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from neoarch.cli import cli


class TestCheckCommand:
    def test_clean_design(self, cli_runner: CliRunner, design_file: Path) -> None:
        result = cli_runner.invoke(cli, ["check", str(design_file)])
        assert result.exit_code == 0, result.output
        assert "No issues found" in result.stdout

    def test_json_issues(self, cli_runner: CliRunner, messy_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", str(messy_file)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["errors"] == 1
        assert {i["node_id"] for i in data["issues"]} == {
            "design_Messy.Loop",
            "design_Messy.Lonely",
        }

    def test_errors_only(self, cli_runner: CliRunner, messy_file: Path) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", str(messy_file), "--errors-only"])
        data = json.loads(result.stdout)["data"]
        assert data["count"] == 1
        assert data["issues"][0]["severity"] == "error"

    def test_quiet(self, cli_runner: CliRunner, messy_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-q", "check", str(messy_file), "--min-severity", "error"])
        assert result.stdout.startswith("error: Self-referencing edge")

    def test_does_not_touch_store(self, cli_runner: CliRunner, design_file: Path) -> None:
        # No store is patched in; opening one would try a real connection.
        result = cli_runner.invoke(cli, ["check", str(design_file)])
        assert result.exit_code == 0
