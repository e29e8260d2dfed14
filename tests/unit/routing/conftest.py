# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Fixtures for routing tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from agentroster.registry.enums import AgentTier
from agentroster.registry.models import AgentDocument, Registry


@pytest.fixture
def raw_registry() -> Callable[..., Registry]:
    """Construct a registry directly, bypassing builder validation.

    Each agent is given as ``id=(tier, depends_on, conflicts_with)``; the
    agent's only trigger is its id.
    """

    def _make(**agents: tuple[str, tuple[str, ...], tuple[str, ...]]) -> Registry:
        documents = {
            agent_id: AgentDocument(
                id=agent_id,
                tier=AgentTier(tier),
                name=agent_id,
                description="d",
                triggers=(agent_id,),
                depends_on=depends_on,
                conflicts_with=conflicts_with,
            )
            for agent_id, (tier, depends_on, conflicts_with) in sorted(agents.items())
        }
        tiers: dict[AgentTier, tuple[str, ...]] = {}
        for tier in AgentTier:
            tiers[tier] = tuple(a for a, d in documents.items() if d.tier is tier)
        return Registry(
            agents=documents,
            tiers=tiers,
            trigger_index={agent_id: agent_id for agent_id in documents},
            built_at=datetime(2026, 1, 1, tzinfo=UTC),
            fingerprint="unchecked",
        )

    return _make
