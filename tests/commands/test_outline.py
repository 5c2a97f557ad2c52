"""Tests for outline CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from reqctl.cli import cli


@pytest.mark.usefixtures("project_root")
class TestOutlineCommand:
    def test_tree(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["outline", "requirements.yml"])
        assert result.exit_code == 0, result.output
        assert "Sample 1.2.3" in result.stdout
        assert "T1.1  Encryption" in result.stdout
        assert "REQ-3  TLS" in result.stdout
        assert "3 topics, 4 requirements" in result.stdout

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "outline", "requirements.yml"])
        data = json.loads(result.stdout)["data"]
        assert [t["id"] for t in data["topics"]] == ["T1", "T2"]
        assert data["requirement_count"] == 4

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "outline", "requirements.yml"])
        assert result.stdout.strip() == "OK: outline"

    def test_missing_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["outline", "nope.yml"])
        assert result.exit_code == 1
        assert "ERROR" in result.stderr
