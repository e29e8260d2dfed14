# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Enumerations for the agent registry.

Both are ``str`` enums so they serialise cleanly to JSON and YAML exports.
"""

from __future__ import annotations

from enum import Enum


class AgentTier(str, Enum):
    """Coarse grouping of agents with a fixed execution precedence.

    Declaration order is execution order: earlier tiers establish the domain
    and foundational context that later tiers build on.
    """

    INDUSTRIES = "industries"
    """Industry/domain profiles (healthcare, legal, ...)."""

    FOUNDATION = "foundation"
    """Project scaffolding, auth, database schema."""

    FEATURES = "features"
    """Product features (billing, search, scheduling, ...)."""

    UI = "ui"
    """Screens, components and layout."""

    INTEGRATIONS = "integrations"
    """Third-party services (email, SMS, calendars, ...)."""

    @property
    def priority(self) -> int:
        """Zero-based execution priority; lower runs first."""
        return _TIER_PRIORITY[self]

    @classmethod
    def ordered(cls) -> tuple["AgentTier", ...]:
        """All tiers in execution order."""
        return tuple(cls)


_TIER_PRIORITY: dict[AgentTier, int] = {tier: i for i, tier in enumerate(AgentTier)}


class BuildWarningKind(str, Enum):
    """Non-fatal problems recorded while building a registry."""

    HEADER_PARSE = "HEADER_PARSE"
    """Header missing, malformed or incomplete; document excluded."""

    REFERENTIAL_INTEGRITY = "REFERENTIAL_INTEGRITY"
    """depends_on/conflicts_with names an unknown agent; agent excluded."""

    DEPENDENCY_CYCLE = "DEPENDENCY_CYCLE"
    """Agent sits on a depends_on cycle; agent excluded."""

    TRIGGER_COUNT = "TRIGGER_COUNT"
    """Trigger count outside the configured range."""

    MISSING_TEMPLATE = "MISSING_TEMPLATE"
    """code_templates names a file absent from the templates root."""

    ASYMMETRIC_CONFLICT = "ASYMMETRIC_CONFLICT"
    """A conflicts with B but B does not declare the conflict back."""
