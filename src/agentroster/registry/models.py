# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Data models for the agent registry.

* ``AgentHeader`` - strict schema of a document's YAML header.
* ``AgentDocument`` - validated, typed record stored in the registry.
* ``BuildWarning`` - a non-fatal problem recorded during a build.
* ``Registry`` - immutable snapshot produced by the builder.

Header and document models are Pydantic v2 models, immutable after
construction. ``Registry`` is a frozen dataclass whose mappings are
read-only proxies, so a published snapshot cannot be edited in place.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agentroster.lib.text import normalize
from agentroster.registry.enums import AgentTier, BuildWarningKind


def _check_distinct(values: list[str], label: str) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    if duplicates:
        msg = f"{label} contains duplicates: {', '.join(duplicates)}"
        raise ValueError(msg)
    return values


class AgentHeader(BaseModel):
    """Metadata header of an agent document.

    Unknown keys are rejected and required keys have no defaults, so a
    header either validates completely or not at all.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    tier: AgentTier
    description: str = Field(..., min_length=1)
    triggers: list[str] = Field(..., min_length=1)
    depends_on: list[str] = Field(default_factory=list)
    conflicts_with: list[str] = Field(default_factory=list)
    prerequisites: list[Any] = Field(default_factory=list)
    code_templates: list[Any] = Field(default_factory=list)
    design_tokens: str = ""

    @field_validator("name", "description")
    @classmethod
    def text_must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only display fields."""
        if not v.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return v.strip()

    @field_validator("triggers")
    @classmethod
    def triggers_must_be_lowercase_and_distinct(cls, v: list[str]) -> list[str]:
        """Require distinct, non-empty, lowercase trigger phrases."""
        cleaned = [t.strip() for t in v]
        for trigger in cleaned:
            if not trigger:
                msg = "trigger phrases must not be empty"
                raise ValueError(msg)
            if trigger != trigger.lower():
                msg = f"trigger phrase must be lowercase: '{trigger}'"
                raise ValueError(msg)
            if not normalize(trigger):
                msg = f"trigger phrase has no letters or digits: '{trigger}'"
                raise ValueError(msg)
        return _check_distinct(cleaned, "triggers")

    @field_validator("depends_on", "conflicts_with")
    @classmethod
    def references_must_be_distinct(cls, v: list[str]) -> list[str]:
        """Require non-empty, distinct agent ids."""
        cleaned = [ref.strip() for ref in v]
        if any(not ref for ref in cleaned):
            msg = "agent ids must not be empty"
            raise ValueError(msg)
        return _check_distinct(cleaned, "agent references")


class AgentDocument(BaseModel):
    """A validated agent record.

    Attributes:
        id: Stable identifier (document path relative to the agents root).
        tier: Execution tier.
        name: Display name.
        description: Display description.
        triggers: Trigger phrases, sorted.
        depends_on: Ids this agent requires, sorted.
        conflicts_with: Ids this agent cannot be combined with, sorted.
        prerequisites: Opaque, carried through unchanged.
        code_templates: Opaque, carried through unchanged.
        design_tokens: Opaque, carried through unchanged.
        source_path: File the record was parsed from (display only).
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    tier: AgentTier
    name: str
    description: str
    triggers: tuple[str, ...] = Field(..., min_length=1)
    depends_on: tuple[str, ...] = ()
    conflicts_with: tuple[str, ...] = ()
    prerequisites: tuple[Any, ...] = ()
    code_templates: tuple[Any, ...] = ()
    design_tokens: str = ""
    source_path: str | None = None

    @field_validator("triggers", "depends_on", "conflicts_with")
    @classmethod
    def sort_sets(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Store set-like fields in canonical (sorted, distinct) order."""
        return tuple(sorted(set(v)))

    @classmethod
    def from_header(
        cls, document_id: str, header: AgentHeader, source_path: Path | None = None
    ) -> AgentDocument:
        """Build a record from a validated header."""
        return cls(
            id=document_id,
            tier=header.tier,
            name=header.name,
            description=header.description,
            triggers=tuple(header.triggers),
            depends_on=tuple(header.depends_on),
            conflicts_with=tuple(header.conflicts_with),
            prerequisites=tuple(header.prerequisites),
            code_templates=tuple(header.code_templates),
            design_tokens=header.design_tokens,
            source_path=str(source_path) if source_path is not None else None,
        )

    def canonical(self) -> dict[str, Any]:
        """JSON-compatible content used for fingerprints and comparisons."""
        return self.model_dump(mode="json", exclude={"source_path"})


class BuildWarning(BaseModel):
    """A non-fatal problem recorded during a registry build."""

    model_config = ConfigDict(frozen=True)

    kind: BuildWarningKind
    document_id: str
    message: str

    def sort_key(self) -> tuple[str, str, str]:
        return (self.kind.value, self.document_id, self.message)

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.document_id}: {self.message}"


@dataclass(frozen=True)
class Registry:
    """Immutable snapshot of every valid agent.

    Created by ``RegistryBuilder``; replaced wholesale on rebuild.

    Attributes:
        agents: Mapping of id to record, keys in sorted order.
        tiers: Mapping of every tier to its agent ids, sorted by id.
        trigger_index: Mapping of trigger phrase to owning agent id.
        built_at: UTC timestamp of the build.
        fingerprint: SHA-256 over the canonical agent content; equal for
            equal inputs regardless of timestamp or version.
        warnings: Build warnings, sorted.
        version: Publication number assigned by ``RegistryProvider``;
            0 for a stand-alone build.
    """

    agents: Mapping[str, AgentDocument]
    tiers: Mapping[AgentTier, tuple[str, ...]]
    trigger_index: Mapping[str, str]
    built_at: datetime
    fingerprint: str
    warnings: tuple[BuildWarning, ...] = ()
    version: int = 0
    _vocabulary: tuple[str, ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # Freeze whatever mapping type the caller handed in.
        object.__setattr__(self, "agents", MappingProxyType(dict(self.agents)))
        object.__setattr__(
            self,
            "tiers",
            MappingProxyType(
                {tier: tuple(self.tiers.get(tier, ())) for tier in AgentTier.ordered()}
            ),
        )
        object.__setattr__(
            self, "trigger_index", MappingProxyType(dict(self.trigger_index))
        )
        object.__setattr__(self, "warnings", tuple(self.warnings))
        object.__setattr__(self, "_vocabulary", tuple(sorted(self.trigger_index)))

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self.agents

    def __len__(self) -> int:
        return len(self.agents)

    def __iter__(self) -> Iterator[AgentDocument]:
        return iter(self.agents.values())

    def get(self, agent_id: str) -> AgentDocument | None:
        return self.agents.get(agent_id)

    @property
    def vocabulary(self) -> tuple[str, ...]:
        """Every known trigger phrase, sorted."""
        return self._vocabulary

    def owner_of(self, phrase: str) -> str | None:
        """Return the id of the agent declaring ``phrase``."""
        return self.trigger_index.get(phrase)

    def statistics(self) -> dict[str, Any]:
        """Aggregate counts for exports and CLI summaries."""
        return {
            "total_agents": len(self.agents),
            "per_tier": {tier.value: len(ids) for tier, ids in self.tiers.items()},
            "total_triggers": len(self.trigger_index),
            "warnings": len(self.warnings),
        }

    def with_version(self, version: int) -> Registry:
        """Copy of this snapshot carrying a publication number."""
        return replace(self, version=version)

    def content_equals(self, other: Registry) -> bool:
        """True when both snapshots hold the same agents, grouping and index."""
        return (
            self.fingerprint == other.fingerprint
            and dict(self.tiers) == dict(other.tiers)
            and dict(self.trigger_index) == dict(other.trigger_index)
            and self.warnings == other.warnings
        )

    def canonical_json(self) -> str:
        """Deterministic JSON of the agent content, used for fingerprints."""
        return canonical_json(self.agents.values())


def canonical_json(documents: Any) -> str:
    """Serialise records in id order with sorted keys."""
    payload = [doc.canonical() for doc in sorted(documents, key=lambda d: d.id)]
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))
