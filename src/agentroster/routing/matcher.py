# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Trigger Matcher
===============

Scores agents by keyword overlap and classifies the outcome.

Scoring:
- score(agent) = number of distinct matched keywords in agent.triggers
- agents scoring 0 are omitted

Classification over the agents within one point of the best score:
- none        -> fallback
- one         -> single
- two, three  -> recommend
- four or more -> ambiguous (nothing selected)

Display order: score descending, then tier priority, then id.
"""

from __future__ import annotations

from collections.abc import Iterable

from agentroster.registry.models import Registry
from agentroster.routing.models import MatchOutcome, MatchResult, MatchStatus

# Agents within this many points of the best score are treated as contenders.
CONTENDER_MARGIN = 1
MAX_RECOMMENDATIONS = 3


class TriggerMatcher:
    """Keyword-overlap scoring against one registry snapshot."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def score(self, agent_id: str, keywords: Iterable[str]) -> int:
        """Number of distinct ``keywords`` among the agent's triggers."""
        agent = self.registry.agents[agent_id]
        return len(set(agent.triggers) & set(keywords))

    def match(self, keywords: Iterable[str]) -> list[MatchResult]:
        """Score every agent with at least one matched keyword.

        Returns:
            Results in display order.
        """
        keyword_set = set(keywords)
        if not keyword_set:
            return []

        results = []
        for agent in self.registry:
            hits = keyword_set.intersection(agent.triggers)
            if hits:
                results.append(
                    MatchResult(
                        agent_id=agent.id, score=len(hits), matched=tuple(sorted(hits))
                    )
                )
        results.sort(key=self.display_key)
        return results

    def display_key(self, result: MatchResult) -> tuple[int, int, str]:
        """Sort key: higher score first, then earlier tier, then id."""
        tier = self.registry.agents[result.agent_id].tier
        return (-result.score, tier.priority, result.agent_id)

    def classify(self, results: list[MatchResult]) -> MatchOutcome:
        """Classify results already in display order."""
        if not results:
            return MatchOutcome(status=MatchStatus.FALLBACK)

        best = results[0].score
        contenders = tuple(r for r in results if r.score >= best - CONTENDER_MARGIN)
        ids = tuple(r.agent_id for r in contenders)

        if len(contenders) == 1:
            return MatchOutcome(
                status=MatchStatus.SINGLE, selected=ids, candidates=contenders
            )
        if len(contenders) <= MAX_RECOMMENDATIONS:
            return MatchOutcome(
                status=MatchStatus.RECOMMEND, selected=ids, candidates=contenders
            )
        return MatchOutcome(status=MatchStatus.AMBIGUOUS, candidates=contenders)


__all__ = ["CONTENDER_MARGIN", "MAX_RECOMMENDATIONS", "TriggerMatcher"]
