# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Dependency Resolver.

Expands a candidate selection to its ``depends_on`` closure, then checks the
closed set for cycles and declared conflicts. Problems are raised, never
worked around: a conflict is never settled by dropping one of the agents.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import combinations

from agentroster.lib.errors import ConflictError, CycleError, UnknownAgentError
from agentroster.registry.models import Registry
from agentroster.routing.models import Resolution

logger = logging.getLogger(__name__)


def handoff_warning(agent_id: str, dependent: str) -> str:
    return f"{agent_id} was pulled in only because {dependent} depends on it"


class DependencyResolver:
    """Closure, cycle and conflict checks over one registry snapshot."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def resolve(self, candidates: Iterable[str]) -> Resolution:
        """Expand and validate ``candidates``.

        Raises:
            UnknownAgentError: A candidate or dependency is not registered.
            CycleError: Expansion revisits an agent still being expanded.
            ConflictError: Two agents of the closed set conflict.
        """
        selected = set(candidates)
        unknown = [agent_id for agent_id in selected if agent_id not in self.registry]
        if unknown:
            raise UnknownAgentError(unknown)

        closed: set[str] = set()
        pulled_by: dict[str, str] = {}
        for agent_id in sorted(selected):
            self._expand(agent_id, [], closed, pulled_by, selected)

        self.check_conflicts(closed)

        handoffs = tuple(pulled_by)
        warnings = tuple(handoff_warning(a, pulled_by[a]) for a in handoffs)
        if handoffs:
            logger.debug(
                "Dependency closure added %d agent(s)",
                len(handoffs),
                extra={"handoffs": list(handoffs)},
            )
        return Resolution(
            agent_ids=frozenset(closed), handoffs=handoffs, warnings=warnings
        )

    def _expand(
        self,
        agent_id: str,
        path: list[str],
        closed: set[str],
        pulled_by: dict[str, str],
        selected: set[str],
    ) -> None:
        if agent_id in path:
            raise CycleError(path[path.index(agent_id) :] + [agent_id])
        if agent_id in closed:
            return

        agent = self.registry.get(agent_id)
        if agent is None:
            raise UnknownAgentError([agent_id])

        path.append(agent_id)
        for dependency in agent.depends_on:
            if dependency not in selected and dependency not in pulled_by:
                pulled_by[dependency] = agent_id
            self._expand(dependency, path, closed, pulled_by, selected)
        path.pop()
        closed.add(agent_id)

    def check_conflicts(self, agent_ids: Iterable[str]) -> None:
        """Raise ConflictError for the first conflicting pair, in sorted order."""
        for first, second in combinations(sorted(set(agent_ids)), 2):
            declared_by = [
                a
                for a, b in ((first, second), (second, first))
                if b in self.registry.agents[a].conflicts_with
            ]
            if declared_by:
                error = ConflictError((first, second), declared_by)
                logger.info("Resolution rejected: %s", error.message)
                raise error


__all__ = ["DependencyResolver", "handoff_warning"]
