"""
Transitive blast radius over a repository dependency graph.

The blast radius of a node is the number of distinct nodes reachable from it
along directed edges, never counting the node itself. With the default
``dependencies`` direction edges are followed as declared ("what do I pull
in"); ``dependents`` walks them backwards ("what breaks if I change").

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Set

from config import BLAST_DIRECTION_DEPENDENCIES, BLAST_DIRECTION_DEPENDENTS
from engine.graph.store import Graph, NodeId

BlastRadiusMap = Dict[NodeId, int]


def reachable(graph: Graph, start: NodeId) -> Set[NodeId]:
    visited: Set[NodeId] = set()
    stack: List[NodeId] = list(graph.adjacency(start))
    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        for neighbor in graph.adjacency(node):
            if neighbor not in visited:
                stack.append(neighbor)
    # a cycle back to the start must not count it
    visited.discard(start)
    return visited


def compute(graph: Graph, direction: str = BLAST_DIRECTION_DEPENDENCIES) -> BlastRadiusMap:
    """Blast radius for every node of ``graph``.

    One traversal per node, O(V * (V + E)). The result is a pure function of
    the node and edge sets; adjacency order never changes a count.
    """
    if direction == BLAST_DIRECTION_DEPENDENTS:
        graph = graph.reversed()
    elif direction != BLAST_DIRECTION_DEPENDENCIES:
        raise ValueError(f"unknown blast direction {direction!r}")
    return {node: len(reachable(graph, node)) for node in graph.nodes}


def max_radius(radius: Mapping[NodeId, int]) -> int:
    return max(radius.values(), default=0)


def criticality(radius: Mapping[NodeId, int]) -> Dict[NodeId, float]:
    # ratio against the largest radius, floor of 1 so an edgeless graph maps to 0.0
    ceiling = max(max_radius(radius), 1)
    return {node: round(value / ceiling, 4) for node, value in radius.items()}
