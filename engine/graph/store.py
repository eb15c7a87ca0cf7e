"""
Immutable repository dependency graph built from a scanner's node/edge list.

An edge ``(a, b)`` reads "a depends on b". The graph keeps adjacency in edge
insertion order and rejects edges whose endpoints are not declared nodes.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from engine.errors import ConstructionError

NodeId = str
Edge = Tuple[NodeId, NodeId]

_EMPTY: Tuple[NodeId, ...] = ()


@dataclass(frozen=True)
class Graph:
    nodes: Tuple[NodeId, ...]
    edges: Tuple[Edge, ...]
    _adjacency: Mapping[NodeId, Tuple[NodeId, ...]] = field(repr=False, compare=False, default_factory=dict)

    def adjacency(self, node: NodeId) -> Tuple[NodeId, ...]:
        return self._adjacency.get(node, _EMPTY)

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self.nodes)

    def reversed(self) -> Graph:
        return build(self.nodes, [(to, frm) for frm, to in self.edges])

    def to_adjacency_map(self) -> Dict[NodeId, List[NodeId]]:
        return {node: list(self.adjacency(node)) for node in self.nodes}


def build(nodes: Iterable[NodeId], edges: Sequence[Edge]) -> Graph:
    """Validate a scan result and freeze it into a :class:`Graph`.

    Node order is first-seen order with duplicates dropped. Duplicate edges are
    kept in ``edges`` (they describe what the scanner reported) but adjacency
    lists hold each neighbour once.

    Raises:
        ConstructionError: if any edge endpoint is missing from ``nodes``.
    """
    ordered: Dict[NodeId, None] = {}
    for node in nodes:
        ordered.setdefault(node, None)

    unknown: Dict[NodeId, None] = {}
    for frm, to in edges:
        for endpoint in (frm, to):
            if endpoint not in ordered:
                unknown.setdefault(endpoint, None)
    if unknown:
        missing = tuple(unknown)
        raise ConstructionError(
            f"edges reference unknown nodes: {', '.join(sorted(missing))}",
            unknown=missing,
        )

    neighbours: Dict[NodeId, Dict[NodeId, None]] = {node: {} for node in ordered}
    for frm, to in edges:
        neighbours[frm].setdefault(to, None)

    return Graph(
        nodes=tuple(ordered),
        edges=tuple((frm, to) for frm, to in edges),
        _adjacency=MappingProxyType({node: tuple(targets) for node, targets in neighbours.items()}),
    )


EMPTY_GRAPH = build((), ())
