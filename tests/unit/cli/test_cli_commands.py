# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Tests for the AgentRoster CLI.

Tests cover:
    - build summary and warnings
    - export in JSON and YAML, to stdout and to a file
    - resolve output, JSON plans and exit codes
    - configuration errors

Note:
    Assertions target summary lines rather than table cells; rich wraps
    table content to the runner's terminal width.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from agentroster.cli.main import EXIT_BUILD_FAILED, EXIT_RESOLUTION_FAILED, cli

# All tests in this module are unit tests
pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer .env files and shell variables out of the CLI."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "AGENTROSTER_AGENTS_ROOT",
        "AGENTROSTER_TEMPLATES_ROOT",
        "AGENTROSTER_STRICT_TRIGGER_COUNT",
        "AGENTROSTER_MATCH_WORD_BOUNDARIES",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AGENTROSTER_MIN_TRIGGERS", "1")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def agents_root(write_agents, agent_text) -> Path:
    return write_agents(
        {
            "auth.md": agent_text(
                name="Auth", tier="foundation", triggers=["login", "session"]
            ),
            "billing.md": agent_text(
                name="Billing", triggers=["stripe", "billing"], depends_on=["auth"]
            ),
            "search.md": agent_text(name="Search", triggers=["search"]),
            "postgres.md": agent_text(
                name="Postgres", triggers=["postgres"], conflicts_with=["mongo"]
            ),
            "mongo.md": agent_text(
                name="Mongo", triggers=["mongo"], conflicts_with=["postgres"]
            ),
        }
    )


# =============================================================================
# build
# =============================================================================


class TestBuildCommand:
    """Tests for `agentroster build`."""

    def test_prints_summary(self, runner: CliRunner, agents_root: Path) -> None:
        result = runner.invoke(cli, ["build", "--root", str(agents_root)])

        assert result.exit_code == 0, result.output
        assert "5 agent(s)" in result.stdout
        assert "fingerprint" in result.stdout

    def test_reports_warnings(
        self, runner: CliRunner, agents_root: Path, agent_text
    ) -> None:
        (agents_root / "broken.md").write_text(
            agent_text(triggers=["broken"], depends_on=["ghost"])
        )

        result = runner.invoke(cli, ["build", "--root", str(agents_root)])

        assert result.exit_code == 0, result.output
        assert "1 warning(s)" in result.stdout
        assert "REFERENTIAL_INTEGRITY" in result.stdout

    def test_duplicate_trigger_fails(
        self, runner: CliRunner, agents_root: Path, agent_text
    ) -> None:
        (agents_root / "payments.md").write_text(agent_text(triggers=["stripe"]))

        result = runner.invoke(cli, ["build", "--root", str(agents_root)])

        assert result.exit_code == EXIT_BUILD_FAILED
        assert "duplicate triggers" in result.output
        assert "billing, payments" in result.output

    def test_missing_root_is_a_configuration_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["build"])

        assert result.exit_code == EXIT_BUILD_FAILED
        assert "AGENTROSTER_AGENTS_ROOT is required" in result.output

    def test_root_from_environment(
        self, runner: CliRunner, agents_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AGENTROSTER_AGENTS_ROOT", str(agents_root))

        result = runner.invoke(cli, ["build"])

        assert result.exit_code == 0, result.output
        assert "5 agent(s)" in result.stdout


# =============================================================================
# export
# =============================================================================


class TestExportCommand:
    """Tests for `agentroster export`."""

    def test_json_to_stdout(self, runner: CliRunner, agents_root: Path) -> None:
        result = runner.invoke(cli, ["export", "--root", str(agents_root)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["statistics"]["total_agents"] == 5
        assert [a["id"] for a in data["tiers"]["foundation"]] == ["auth"]

    def test_yaml_to_file(
        self, runner: CliRunner, agents_root: Path, tmp_path: Path
    ) -> None:
        target = tmp_path / "out" / "registry.yaml"

        result = runner.invoke(
            cli,
            [
                "export",
                "--root",
                str(agents_root),
                "--format",
                "yaml",
                "--output",
                str(target),
            ],
        )

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(target.read_text())
        assert data["tiers"]["features"][0]["id"] == "billing"

    def test_file_matches_stdout(
        self, runner: CliRunner, agents_root: Path, tmp_path: Path
    ) -> None:
        target = tmp_path / "registry.json"
        root_args = ["export", "--root", str(agents_root)]

        to_stdout = runner.invoke(cli, root_args)
        to_file = runner.invoke(cli, [*root_args, "--output", str(target)])

        assert to_file.exit_code == 0, to_file.output
        written = json.loads(target.read_text(encoding="utf-8"))
        printed = json.loads(to_stdout.stdout)
        # Each invocation is a separate build.
        written.pop("built_at")
        printed.pop("built_at")
        assert written == printed


# =============================================================================
# resolve
# =============================================================================


class TestResolveCommand:
    """Tests for `agentroster resolve`."""

    def test_prints_ordered_plan(self, runner: CliRunner, agents_root: Path) -> None:
        result = runner.invoke(
            cli, ["resolve", "set up stripe billing", "--root", str(agents_root)]
        )

        assert result.exit_code == 0, result.output
        assert "Status: single" in result.stdout
        assert "1. auth (foundation) (dependency)" in result.stdout
        assert "2. billing (features)" in result.stdout

    def test_json_plan(self, runner: CliRunner, agents_root: Path) -> None:
        result = runner.invoke(
            cli,
            ["resolve", "stripe billing", "--root", str(agents_root), "--json"],
        )

        assert result.exit_code == 0, result.output
        plan = json.loads(result.stdout)
        assert plan["status"] == "single"
        assert plan["agent_ids"] == ["auth", "billing"]
        assert plan["handoffs"] == ["auth"]
        assert plan["keywords"] == ["billing", "stripe"]
        assert plan["matches"] == [
            {"agent_id": "billing", "score": 2, "matched": ["billing", "stripe"]}
        ]

    def test_fallback(self, runner: CliRunner, agents_root: Path) -> None:
        result = runner.invoke(
            cli, ["resolve", "deploy kubernetes", "--root", str(agents_root), "--json"]
        )

        assert result.exit_code == 0, result.output
        plan = json.loads(result.stdout)
        assert plan["status"] == "fallback"
        assert plan["agent_ids"] == []

    def test_conflict_exits_with_resolution_failure(
        self, runner: CliRunner, agents_root: Path
    ) -> None:
        result = runner.invoke(
            cli, ["resolve", "postgres and mongo", "--root", str(agents_root)]
        )

        assert result.exit_code == EXIT_RESOLUTION_FAILED
        assert "Conflict:" in result.output
        assert "'mongo' and 'postgres'" in result.output
