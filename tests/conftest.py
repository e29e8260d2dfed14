# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Shared fixtures for AgentRoster tests.

Provides:
- ``settings``: isolated Settings (no .env, relaxed trigger count)
- ``agent_text``: render an agent document from header fields
- ``write_agents``: write documents into a temporary agents root
- ``build_registry``: compile in-memory documents with a fixed clock
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
import yaml

from agentroster.config.settings import Settings, clear_settings_cache
from agentroster.documents.loader import SourceDocument
from agentroster.registry.builder import RegistryBuilder
from agentroster.registry.models import Registry

FIXED_TIME = datetime(2026, 1, 15, 9, 30, 0, tzinfo=UTC)

AgentSpec = dict[str, Any]


def render_agent(
    *,
    name: str = "Agent",
    tier: str = "features",
    triggers: list[str] | None = None,
    description: str = "An agent",
    body: str = "# Guidance\n\nOpaque body text.\n",
    **extra: Any,
) -> str:
    """Render a complete agent document; ``extra`` adds or overrides header keys."""
    header: dict[str, Any] = {
        "name": name,
        "tier": tier,
        "triggers": triggers if triggers is not None else ["placeholder"],
        "depends_on": [],
        "conflicts_with": [],
        "prerequisites": [],
        "description": description,
        "code_templates": [],
        "design_tokens": "",
    }
    header.update(extra)
    return "---\n" + yaml.safe_dump(header, sort_keys=False) + "---\n" + body


def source(document_id: str, text: str) -> SourceDocument:
    return SourceDocument(
        document_id=document_id, path=Path(f"/agents/{document_id}.md"), text=text
    )


@pytest.fixture(autouse=True)
def reset_settings() -> Iterator[None]:
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment, accepting any trigger count."""
    return Settings(
        _env_file=None,
        agents_root=None,
        templates_root=None,
        min_triggers=1,
        max_triggers=12,
        strict_trigger_count=False,
        match_word_boundaries=False,
    )


@pytest.fixture
def builder(settings: Settings) -> RegistryBuilder:
    return RegistryBuilder(settings, clock=lambda: FIXED_TIME)


@pytest.fixture
def agent_text() -> Callable[..., str]:
    return render_agent


@pytest.fixture
def source_document() -> Callable[[str, str], SourceDocument]:
    return source


@pytest.fixture
def build_registry(builder: RegistryBuilder) -> Callable[[dict[str, AgentSpec]], Registry]:
    """Compile ``{document_id: header fields}`` into a registry."""

    def _build(specs: dict[str, AgentSpec]) -> Registry:
        documents = [source(doc_id, render_agent(**spec)) for doc_id, spec in specs.items()]
        return builder.build(documents)

    return _build


@pytest.fixture
def write_agents(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative path: text}`` under a fresh agents root and return it."""

    def _write(files: dict[str, str]) -> Path:
        root = tmp_path / "agents"
        for relative, text in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        root.mkdir(parents=True, exist_ok=True)
        return root

    return _write


@pytest.fixture
def billing_specs() -> dict[str, AgentSpec]:
    """Small registry: billing depends on auth; auth has unrelated triggers."""
    return {
        "auth": {
            "name": "Auth",
            "tier": "foundation",
            "triggers": ["login", "sign in", "password reset", "session"],
        },
        "billing": {
            "name": "Billing",
            "tier": "features",
            "triggers": ["stripe", "billing", "subscription", "checkout"],
            "depends_on": ["auth"],
        },
        "search": {
            "name": "Search",
            "tier": "features",
            "triggers": ["search", "filter", "full text"],
        },
    }
