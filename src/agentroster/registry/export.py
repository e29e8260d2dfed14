# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Registry export for callers and tools.

The export lists agents grouped by tier (in execution order) together with
aggregate statistics and the build timestamp.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

import yaml

from agentroster.registry.models import Registry

logger = logging.getLogger(__name__)

ExportFormat = Literal["json", "yaml"]


def export_registry(registry: Registry) -> dict[str, Any]:
    """Return a JSON-compatible summary of ``registry``."""
    tiers: dict[str, list[dict[str, Any]]] = {}
    for tier, agent_ids in registry.tiers.items():
        entries = []
        for agent_id in agent_ids:
            agent = registry.agents[agent_id]
            entries.append(
                {
                    "id": agent.id,
                    "name": agent.name,
                    "description": agent.description,
                    "trigger_count": len(agent.triggers),
                    "depends_on": list(agent.depends_on),
                    "conflicts_with": list(agent.conflicts_with),
                }
            )
        tiers[tier.value] = entries

    return {
        "built_at": registry.built_at.isoformat(),
        "version": registry.version,
        "fingerprint": registry.fingerprint,
        "statistics": registry.statistics(),
        "tiers": tiers,
        "warnings": [
            {
                "kind": w.kind.value,
                "document_id": w.document_id,
                "message": w.message,
            }
            for w in registry.warnings
        ],
    }


def render_registry(registry: Registry, fmt: ExportFormat = "json") -> str:
    """Serialise the export of ``registry`` as JSON or YAML text."""
    data = export_registry(registry)
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    msg = f"Unsupported export format: {fmt}"
    raise ValueError(msg)


def dump_registry(registry: Registry, path: Path, fmt: ExportFormat = "json") -> Path:
    """Write the export of ``registry`` to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_registry(registry, fmt), encoding="utf-8")
    logger.info("Wrote registry export to %s", path, extra={"format": fmt})
    return path


__all__ = ["ExportFormat", "dump_registry", "export_registry", "render_registry"]
