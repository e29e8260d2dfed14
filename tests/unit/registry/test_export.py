# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Tests for the registry export."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from agentroster.registry.export import dump_registry, export_registry, render_registry

pytestmark = pytest.mark.unit


@pytest.fixture
def registry(build_registry, billing_specs):
    billing_specs["search"]["conflicts_with"] = ["legacy-search"]
    billing_specs["legacy-search"] = {
        "name": "Legacy Search",
        "tier": "integrations",
        "triggers": ["solr"],
        "conflicts_with": ["search"],
    }
    return build_registry(billing_specs)


class TestExportRegistry:
    def test_tiers_in_execution_order(self, registry) -> None:
        data = export_registry(registry)

        assert list(data["tiers"]) == [
            "industries",
            "foundation",
            "features",
            "ui",
            "integrations",
        ]
        assert [a["id"] for a in data["tiers"]["features"]] == ["billing", "search"]
        assert data["tiers"]["ui"] == []

    def test_agent_entries(self, registry) -> None:
        billing = export_registry(registry)["tiers"]["features"][0]

        assert billing == {
            "id": "billing",
            "name": "Billing",
            "description": "An agent",
            "trigger_count": 4,
            "depends_on": ["auth"],
            "conflicts_with": [],
        }

    def test_statistics_and_metadata(self, registry) -> None:
        data = export_registry(registry)

        assert data["built_at"] == "2026-01-15T09:30:00+00:00"
        assert data["version"] == 0
        assert data["fingerprint"] == registry.fingerprint
        assert data["statistics"]["total_agents"] == 4
        assert data["statistics"]["per_tier"]["integrations"] == 1
        assert data["warnings"] == []

    def test_warnings_are_exported(self, build_registry) -> None:
        registry = build_registry({"a": {"triggers": ["a"], "depends_on": ["ghost"]}})

        (warning,) = export_registry(registry)["warnings"]

        assert warning["kind"] == "REFERENTIAL_INTEGRITY"
        assert warning["document_id"] == "a"


class TestRenderRegistry:
    def test_json_matches_export(self, registry) -> None:
        text = render_registry(registry, "json")

        assert json.loads(text) == export_registry(registry)

    def test_yaml_matches_export(self, registry) -> None:
        text = render_registry(registry, "yaml")

        assert yaml.safe_load(text) == export_registry(registry)

    def test_rendering_is_deterministic(self, registry) -> None:
        assert render_registry(registry) == render_registry(registry)

    def test_unknown_format(self, registry) -> None:
        with pytest.raises(ValueError, match="Unsupported export format"):
            render_registry(registry, "toml")  # type: ignore[arg-type]

    def test_dump_writes_file(self, registry, tmp_path: Path) -> None:
        target = tmp_path / "out" / "registry.yaml"

        dump_registry(registry, target, "yaml")

        assert yaml.safe_load(target.read_text()) == export_registry(registry)
