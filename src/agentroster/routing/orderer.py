# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Execution Orderer.

Topological sort over ``depends_on`` whose ready queue is ordered by
effective tier priority. An agent's effective priority is the earliest tier
among itself and every agent inside the set that (transitively) depends on
it, so a later-tier dependency is pulled forward just far enough to precede
its dependent instead of holding the dependent back behind unrelated agents.

Heap key: (effective priority, own tier priority, id).
"""

from __future__ import annotations

import heapq
from collections.abc import Iterable

from agentroster.lib.errors import CycleError, UnknownAgentError
from agentroster.lib.graph import find_cycle
from agentroster.registry.models import Registry


class ExecutionOrderer:
    def __init__(self, registry: Registry):
        self.registry = registry

    def order(self, agent_ids: Iterable[str]) -> tuple[str, ...]:
        """Linear execution order for a closed, conflict-free set.

        Dependencies outside ``agent_ids`` are ignored.

        Raises:
            UnknownAgentError: An id is not registered.
            CycleError: The dependencies inside the set form a cycle.
        """
        members = set(agent_ids)
        unknown = [a for a in members if a not in self.registry]
        if unknown:
            raise UnknownAgentError(unknown)

        deps = {
            a: {d for d in self.registry.agents[a].depends_on if d in members}
            for a in members
        }
        dependents: dict[str, list[str]] = {a: [] for a in members}
        for agent_id, requires in deps.items():
            for dependency in requires:
                dependents[dependency].append(agent_id)

        effective = self._effective_priorities(members, dependents)

        def key(agent_id: str) -> tuple[int, int, str]:
            own = self.registry.agents[agent_id].tier.priority
            return (effective[agent_id], own, agent_id)

        remaining = {a: len(requires) for a, requires in deps.items()}
        ready = [key(a) for a, count in remaining.items() if count == 0]
        heapq.heapify(ready)

        ordered: list[str] = []
        while ready:
            *_, agent_id = heapq.heappop(ready)
            ordered.append(agent_id)
            for dependent in dependents[agent_id]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    heapq.heappush(ready, key(dependent))

        if len(ordered) != len(members):
            cycle = find_cycle({a: deps[a] for a in members if a not in ordered})
            raise CycleError(cycle or sorted(members - set(ordered)))
        return tuple(ordered)

    def _effective_priorities(
        self, members: set[str], dependents: dict[str, list[str]]
    ) -> dict[str, int]:
        """Earliest tier priority over each agent and its transitive dependents."""
        effective: dict[str, int] = {}
        for agent_id in members:
            best = self.registry.agents[agent_id].tier.priority
            seen = {agent_id}
            stack = list(dependents[agent_id])
            while stack:
                current = stack.pop()
                if current in seen:
                    continue
                seen.add(current)
                best = min(best, self.registry.agents[current].tier.priority)
                stack.extend(dependents[current])
            effective[agent_id] = best
        return effective


__all__ = ["ExecutionOrderer"]
