# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Per-request data models for intent resolution.

These objects live only for the duration of one resolution call; nothing
here is persisted.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MatchStatus(str, Enum):
    """Outcome of classifying trigger matches."""

    SINGLE = "single"
    """One clear winner; selected automatically."""

    RECOMMEND = "recommend"
    """Two or three close candidates; caller should confirm with the user."""

    AMBIGUOUS = "ambiguous"
    """Four or more close candidates; nothing selected, intent must be narrowed."""

    FALLBACK = "fallback"
    """No agent matched; caller supplies its default set."""


class IntentRequest(BaseModel):
    """Raw user input and the trigger phrases recognised in it."""

    model_config = ConfigDict(frozen=True)

    raw: str
    keywords: frozenset[str] = Field(default_factory=frozenset)

    @property
    def sorted_keywords(self) -> tuple[str, ...]:
        return tuple(sorted(self.keywords))


class MatchResult(BaseModel):
    """Score of one agent against an intent.

    Attributes:
        agent_id: Scored agent.
        score: Number of distinct matched keywords among its triggers.
        matched: The contributing keywords, sorted.
    """

    model_config = ConfigDict(frozen=True)

    agent_id: str
    score: int = Field(..., ge=1)
    matched: tuple[str, ...] = ()


class MatchOutcome(BaseModel):
    """Classification of a set of match results.

    Attributes:
        status: Classification status.
        selected: Agents selected for resolution (empty unless single or
            recommend), in display order.
        candidates: Every result within one point of the best score, in
            display order.
    """

    model_config = ConfigDict(frozen=True)

    status: MatchStatus
    selected: tuple[str, ...] = ()
    candidates: tuple[MatchResult, ...] = ()


class Resolution(BaseModel):
    """Dependency-closed, conflict-free agent set."""

    model_config = ConfigDict(frozen=True)

    agent_ids: frozenset[str]
    handoffs: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class ResolvedPlan(BaseModel):
    """Final output of one resolution call.

    Attributes:
        agent_ids: Agents to apply, in execution order.
        status: Status inherited from match classification.
        warnings: Explanations accumulated while resolving, in a fixed order.
        intent: Parsed intent the plan was resolved from.
        matches: Scored candidates in display order.
        handoffs: Agents present only because a selected agent depends on
            them.
        registry_version: Version of the snapshot used.
    """

    model_config = ConfigDict(frozen=True)

    agent_ids: tuple[str, ...]
    status: MatchStatus
    warnings: tuple[str, ...] = ()
    intent: IntentRequest | None = None
    matches: tuple[MatchResult, ...] = ()
    handoffs: tuple[str, ...] = ()
    registry_version: int = 0

    @property
    def requires_confirmation(self) -> bool:
        return self.status in (MatchStatus.RECOMMEND, MatchStatus.AMBIGUOUS)
