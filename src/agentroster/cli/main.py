# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""AgentRoster CLI - build, export and query the agent registry.

Commands:

    build       Compile the registry and print agents, statistics and warnings.
    export      Write the registry export as JSON or YAML.
    resolve     Resolve free-text intent into an ordered agent plan.

Usage::

    agentroster build --root agents --templates templates/code
    agentroster export --root agents --format yaml --output registry.yaml
    agentroster resolve "set up stripe billing" --root agents
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from agentroster.config.settings import Settings, get_settings
from agentroster.lib.errors import (
    ConfigurationError,
    ConflictError,
    CycleError,
    ResolutionError,
    TriggerUniquenessError,
)
from agentroster.registry.builder import RegistryBuilder
from agentroster.registry.export import dump_registry, render_registry
from agentroster.registry.models import Registry
from agentroster.routing.engine import SelectionEngine
from agentroster.routing.models import MatchStatus, ResolvedPlan

console = Console()
error_console = Console(stderr=True)

EXIT_BUILD_FAILED = 1
EXIT_RESOLUTION_FAILED = 2

_STATUS_COLORS: dict[MatchStatus, str] = {
    MatchStatus.SINGLE: "green",
    MatchStatus.RECOMMEND: "yellow",
    MatchStatus.AMBIGUOUS: "red",
    MatchStatus.FALLBACK: "blue",
}

root_option = click.option(
    "--root",
    "root",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Agents directory (defaults to AGENTROSTER_AGENTS_ROOT).",
)
templates_option = click.option(
    "--templates",
    "templates",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Code templates directory (defaults to AGENTROSTER_TEMPLATES_ROOT).",
)


def _settings(root: Path | None, templates: Path | None = None) -> Settings:
    """Apply command-line overrides on top of environment settings."""
    overrides: dict[str, Path] = {}
    if root is not None:
        overrides["agents_root"] = root
    if templates is not None:
        overrides["templates_root"] = templates
    settings = get_settings().model_copy(update=overrides)

    errors = settings.validate_required()
    if errors:
        raise ConfigurationError(errors)
    return settings


def _build(settings: Settings) -> Registry:
    try:
        return RegistryBuilder(settings).build_from_directory()
    except TriggerUniquenessError as exc:
        error_console.print("[red]Registry build rejected:[/red] duplicate triggers")
        for phrase, ids in exc.collisions.items():
            error_console.print(f"  '{escape(phrase)}': {', '.join(ids)}")
        sys.exit(EXIT_BUILD_FAILED)


def _fail_config(exc: ConfigurationError) -> NoReturn:
    for message in exc.errors:
        error_console.print(f"[red]Configuration error:[/red] {escape(message)}")
    sys.exit(EXIT_BUILD_FAILED)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Agent registry and selection engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# build
# ---------------------------------------------------------------------------


@cli.command("build")
@root_option
@templates_option
def build_cmd(root: Path | None, templates: Path | None) -> None:
    """Compile the registry and print a per-tier summary."""
    try:
        settings = _settings(root, templates)
    except ConfigurationError as exc:
        _fail_config(exc)
    registry = _build(settings)

    table = Table(title=f"Agent registry ({registry.built_at.isoformat()})")
    table.add_column("Tier")
    table.add_column("Agent")
    table.add_column("Name")
    table.add_column("Triggers", justify="right")
    table.add_column("Depends on")
    for tier, agent_ids in registry.tiers.items():
        for agent_id in agent_ids:
            agent = registry.agents[agent_id]
            table.add_row(
                tier.value,
                agent.id,
                agent.name,
                str(len(agent.triggers)),
                ", ".join(agent.depends_on),
            )
    console.print(table)

    stats = registry.statistics()
    per_tier = ", ".join(f"{tier}={count}" for tier, count in stats["per_tier"].items())
    console.print(
        f"[bold]{stats['total_agents']}[/bold] agent(s), "
        f"{stats['total_triggers']} trigger(s) ({per_tier})"
    )
    console.print(f"fingerprint {registry.fingerprint[:12]}")

    if registry.warnings:
        console.print(f"[yellow]{len(registry.warnings)} warning(s):[/yellow]")
        for warning in registry.warnings:
            console.print(
                f"  [yellow]{warning.kind.value}[/yellow] "
                f"{escape(warning.document_id)}: {escape(warning.message)}"
            )


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


@cli.command("export")
@root_option
@templates_option
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    show_default=True,
)
@click.option(
    "--output",
    "output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write to this file instead of stdout.",
)
def export_cmd(
    root: Path | None, templates: Path | None, fmt: str, output: Path | None
) -> None:
    """Export the registry listing and statistics."""
    try:
        settings = _settings(root, templates)
    except ConfigurationError as exc:
        _fail_config(exc)
    registry = _build(settings)

    export_format = fmt.lower()
    if output is None:
        click.echo(render_registry(registry, export_format), nl=False)  # type: ignore[arg-type]
        return
    dump_registry(registry, output, export_format)  # type: ignore[arg-type]
    error_console.print(f"Wrote {output}")


# ---------------------------------------------------------------------------
# resolve
# ---------------------------------------------------------------------------


def _plan_as_dict(plan: ResolvedPlan) -> dict[str, object]:
    return {
        "status": plan.status.value,
        "agent_ids": list(plan.agent_ids),
        "warnings": list(plan.warnings),
        "keywords": list(plan.intent.sorted_keywords) if plan.intent else [],
        "matches": [
            {"agent_id": m.agent_id, "score": m.score, "matched": list(m.matched)}
            for m in plan.matches
        ],
        "handoffs": list(plan.handoffs),
    }


@cli.command("resolve")
@click.argument("text")
@root_option
@click.option("--json", "as_json", is_flag=True, help="Print the plan as JSON.")
def resolve_cmd(text: str, root: Path | None, as_json: bool) -> None:
    """Resolve TEXT into an ordered agent plan."""
    try:
        settings = _settings(root)
    except ConfigurationError as exc:
        _fail_config(exc)
    registry = _build(settings)

    try:
        plan = SelectionEngine(registry, settings=settings).resolve(text)
    except ConflictError as exc:
        first, second = exc.pair
        error_console.print(
            f"[red]Conflict:[/red] '{first}' and '{second}' cannot be combined; "
            "choose one of them"
        )
        sys.exit(EXIT_RESOLUTION_FAILED)
    except CycleError as exc:
        error_console.print(f"[red]Dependency cycle:[/red] {' -> '.join(exc.cycle)}")
        sys.exit(EXIT_RESOLUTION_FAILED)
    except ResolutionError as exc:
        error_console.print(f"[red]Resolution failed:[/red] {escape(exc.message)}")
        sys.exit(EXIT_RESOLUTION_FAILED)

    if as_json:
        click.echo(json.dumps(_plan_as_dict(plan), indent=2))
        return

    color = _STATUS_COLORS[plan.status]
    console.print(f"Status: [{color}]{plan.status.value}[/{color}]")
    if plan.intent is not None and plan.intent.keywords:
        console.print(f"Keywords: {', '.join(plan.intent.sorted_keywords)}")
    for position, agent_id in enumerate(plan.agent_ids, 1):
        agent = registry.agents[agent_id]
        marker = " (dependency)" if agent_id in plan.handoffs else ""
        console.print(f"  {position}. {escape(agent.id)} ({agent.tier.value}){marker}")
    for warning in plan.warnings:
        console.print(f"[yellow]![/yellow] {escape(warning)}")


if __name__ == "__main__":
    cli()
