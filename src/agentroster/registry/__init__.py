# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Agent registry: models, builder, provider and export."""

from __future__ import annotations

from agentroster.registry.builder import RegistryBuilder
from agentroster.registry.enums import AgentTier, BuildWarningKind
from agentroster.registry.export import dump_registry, export_registry, render_registry
from agentroster.registry.header import (
    HeaderParsed,
    HeaderParseFailure,
    HeaderParseResult,
    parse_header,
)
from agentroster.registry.models import (
    AgentDocument,
    AgentHeader,
    BuildWarning,
    Registry,
)
from agentroster.registry.provider import RegistryProvider

__all__ = [
    "AgentDocument",
    "AgentHeader",
    "AgentTier",
    "BuildWarning",
    "BuildWarningKind",
    "HeaderParseFailure",
    "HeaderParseResult",
    "HeaderParsed",
    "Registry",
    "RegistryBuilder",
    "RegistryProvider",
    "dump_registry",
    "export_registry",
    "parse_header",
    "render_registry",
]
