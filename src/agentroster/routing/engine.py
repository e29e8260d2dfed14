# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
Selection Engine
================

Ties the intent parser, trigger matcher, dependency resolver and execution
orderer together behind a single resolution call.

Flow:
1. Parse intent into trigger keywords
2. Score and classify agents
3. fallback / ambiguous -> empty plan with an explanation
4. single / recommend -> dependency closure, conflict check, ordering

The engine is bound to one registry snapshot and keeps no per-request
state, so one instance may serve concurrent requests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from agentroster.config.settings import Settings, get_settings
from agentroster.lib.errors import ResolutionError
from agentroster.registry.models import Registry
from agentroster.routing.intent import IntentParser
from agentroster.routing.matcher import TriggerMatcher
from agentroster.routing.models import (
    IntentRequest,
    MatchOutcome,
    MatchResult,
    MatchStatus,
    ResolvedPlan,
)
from agentroster.routing.orderer import ExecutionOrderer
from agentroster.routing.resolver import DependencyResolver

logger = logging.getLogger(__name__)


def _describe(results: Iterable[MatchResult]) -> str:
    return ", ".join(f"{r.agent_id} ({r.score})" for r in results)


class SelectionEngine:
    """Resolves free-text intent against one registry snapshot."""

    def __init__(self, registry: Registry, settings: Settings | None = None):
        settings = settings or get_settings()
        self.registry = registry
        self.parser = IntentParser(
            registry, word_boundaries=settings.match_word_boundaries
        )
        self.matcher = TriggerMatcher(registry)
        self.resolver = DependencyResolver(registry)
        self.orderer = ExecutionOrderer(registry)

    def resolve(self, text: str) -> ResolvedPlan:
        """Resolve ``text`` into an ordered plan.

        Raises:
            CycleError: Dependency expansion found a cycle.
            ConflictError: The expanded selection contains conflicting agents.
        """
        intent = self.parser.parse(text)
        results = self.matcher.match(intent.keywords)
        outcome = self.matcher.classify(results)

        logger.debug(
            "Classified intent as %s",
            outcome.status.value,
            extra={
                "keywords": list(intent.sorted_keywords),
                "candidates": [r.agent_id for r in outcome.candidates],
            },
        )

        if outcome.status is MatchStatus.FALLBACK:
            return self._empty_plan(
                intent,
                outcome,
                results,
                "no agent matched the request; use the default agent set",
            )

        if outcome.status is MatchStatus.AMBIGUOUS:
            return self._empty_plan(
                intent,
                outcome,
                results,
                (
                    f"{len(outcome.candidates)} agents match equally well: "
                    f"{_describe(outcome.candidates)}; narrow the request"
                ),
            )

        notes: list[str] = []
        if outcome.status is MatchStatus.RECOMMEND:
            notes.append(
                f"recommended agents need confirmation: {_describe(outcome.candidates)}"
            )
        return self._plan(outcome.selected, outcome.status, intent, results, notes)

    def resolve_ids(self, agent_ids: Iterable[str]) -> ResolvedPlan:
        """Resolve an explicit selection, e.g. the user's pick after a recommendation.

        Raises:
            UnknownAgentError: An id is not registered.
            CycleError: Dependency expansion found a cycle.
            ConflictError: The expanded selection contains conflicting agents.
        """
        selected = tuple(sorted(set(agent_ids)))
        if not selected:
            status = MatchStatus.FALLBACK
        elif len(selected) == 1:
            status = MatchStatus.SINGLE
        else:
            status = MatchStatus.RECOMMEND
        return self._plan(selected, status, None, [], [])

    def _plan(
        self,
        selected: tuple[str, ...],
        status: MatchStatus,
        intent: IntentRequest | None,
        results: list[MatchResult],
        notes: list[str],
    ) -> ResolvedPlan:
        try:
            resolution = self.resolver.resolve(selected)
            ordered = self.orderer.order(resolution.agent_ids)
        except ResolutionError as e:
            logger.warning(
                "Resolution failed: %s",
                e.message,
                extra={"error_code": e.code.value, "selected": list(selected)},
            )
            raise

        plan = ResolvedPlan(
            agent_ids=ordered,
            status=status,
            warnings=(*notes, *resolution.warnings),
            intent=intent,
            matches=tuple(results),
            handoffs=resolution.handoffs,
            registry_version=self.registry.version,
        )
        logger.info(
            "Resolved %d agent(s) with status %s",
            len(plan.agent_ids),
            plan.status.value,
            extra={"agent_ids": list(plan.agent_ids)},
        )
        return plan

    def _empty_plan(
        self,
        intent: IntentRequest,
        outcome: MatchOutcome,
        results: list[MatchResult],
        warning: str,
    ) -> ResolvedPlan:
        logger.info("No agents selected (%s)", outcome.status.value)
        return ResolvedPlan(
            agent_ids=(),
            status=outcome.status,
            warnings=(warning,),
            intent=intent,
            matches=tuple(results),
            registry_version=self.registry.version,
        )


def resolve(text: str, registry: Registry, settings: Settings | None = None) -> ResolvedPlan:
    """Resolve ``text`` against ``registry``."""
    return SelectionEngine(registry, settings=settings).resolve(text)


__all__ = ["SelectionEngine", "resolve"]
