# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Small deterministic helpers over dependency graphs.

A graph is a mapping of node id to the ids it depends on. Edges to nodes
absent from the mapping are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def find_cycle(graph: Mapping[str, Iterable[str]]) -> list[str] | None:
    """Return the first dependency cycle found, or None.

    Nodes and edges are visited in sorted order so the same graph always
    yields the same cycle. The returned list starts and ends with the same
    node, e.g. ``["a", "b", "a"]``.
    """
    edges = {node: sorted(e for e in deps if e in graph) for node, deps in graph.items()}
    done: set[str] = set()

    for start in sorted(edges):
        if start in done:
            continue
        path: list[str] = [start]
        on_path: set[str] = {start}
        stack = [iter(edges[start])]

        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                finished = path.pop()
                on_path.discard(finished)
                done.add(finished)
                continue
            if nxt in on_path:
                return path[path.index(nxt) :] + [nxt]
            if nxt in done:
                continue
            path.append(nxt)
            on_path.add(nxt)
            stack.append(iter(edges[nxt]))

    return None


__all__ = ["find_cycle"]
