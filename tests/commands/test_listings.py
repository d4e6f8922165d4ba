"""Tests for the rules and roles CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from eagov.cli import cli


class TestRulesCommand:
    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rules"])
        assert result.exit_code == 0
        for rule_id in (
            "EA_REQUIRED_NAME",
            "EA_REQUIRED_OWNER",
            "EA_CAPABILITY_TECHNICAL_TERM",
            "EA_APPLICATION_SERVICE_REQUIRES_APPLICATION",
        ):
            assert rule_id in result.output

    def test_quiet_lists_ids_in_order(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "rules"])
        assert result.output.split() == [
            "EA_REQUIRED_NAME",
            "EA_REQUIRED_OWNER",
            "EA_CAPABILITY_TECHNICAL_TERM",
            "EA_APPLICATION_SERVICE_REQUIRES_APPLICATION",
        ]

    def test_reports_configured_mode(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "eagov.toml").write_text('[governance]\ngovernance_mode = "Advisory"\n')
        result = cli_runner.invoke(cli, ["--json", "rules"])
        assert json.loads(result.output)["data"]["governance_mode"] == "Advisory"


class TestRolesCommand:
    def test_all_roles(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "roles"])
        assert result.exit_code == 0
        data = json.loads(result.output)["data"]
        assert data["count"] == 4
        assert data["rbac_enabled"] is False

    def test_single_role(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["roles", "Architect"])
        assert result.exit_code == 0
        assert "createElement" in result.output
        assert "manageRbac" not in result.output

    def test_rbac_from_env(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EAGOV_ACCESS__RBAC_ENABLED", "true")
        result = cli_runner.invoke(cli, ["roles", "Viewer"])
        assert "rbac: enabled" in result.output

    def test_unknown_role(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["roles", "Admin"])
        assert result.exit_code == 1
        assert "Unknown role 'Admin'" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["roles", "--examples"])
        assert "eagov roles Viewer" in result.output
