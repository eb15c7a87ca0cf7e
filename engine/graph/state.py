"""
Current graph and blast-radius snapshot with serialized, atomically swapped rebuilds.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from config import settings
from engine.errors import ConstructionError
from engine.graph import blast
from engine.graph.scanner import ScanResult
from engine.graph.store import EMPTY_GRAPH, Edge, Graph, NodeId, build

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphSnapshot:
    graph: Graph
    blast_radius: Mapping[NodeId, int]
    direction: str
    version: int = 0
    built_at: float = field(default_factory=time.time)

    @property
    def max_blast_radius(self) -> int:
        return blast.max_radius(self.blast_radius)


def _compute_snapshot(
    nodes: Sequence[NodeId],
    edges: Sequence[Edge],
    direction: str,
    version: int,
    max_nodes: int,
) -> GraphSnapshot:
    graph = build(nodes, edges)
    if len(graph) > max_nodes:
        raise ConstructionError(f"graph has {len(graph)} nodes, limit is {max_nodes}")
    radius = blast.compute(graph, direction)
    return GraphSnapshot(
        graph=graph,
        blast_radius=MappingProxyType(radius),
        direction=direction,
        version=version,
    )


class GraphState:
    """Holder of the authoritative :class:`GraphSnapshot`.

    Readers take ``current`` once and use that object; it is never mutated.
    Rebuilds are serialized and run off the event loop; the new snapshot
    replaces the old one in a single reference assignment, and a rebuild that
    fails leaves the previous snapshot in place.
    """

    def __init__(self, direction: Optional[str] = None, max_nodes: Optional[int] = None) -> None:
        self._direction = direction or settings.blast_direction
        self._max_nodes = max_nodes if max_nodes is not None else settings.max_graph_nodes
        self._current = GraphSnapshot(
            graph=EMPTY_GRAPH,
            blast_radius=MappingProxyType({}),
            direction=self._direction,
        )
        self._lock = asyncio.Lock()

    @property
    def current(self) -> GraphSnapshot:
        return self._current

    @property
    def direction(self) -> str:
        return self._direction

    async def rebuild(self, nodes: Iterable[NodeId], edges: Iterable[Edge]) -> GraphSnapshot:
        node_list = list(nodes)
        edge_list = [(frm, to) for frm, to in edges]
        async with self._lock:
            version = self._current.version + 1
            started = time.monotonic()
            try:
                snapshot = await asyncio.to_thread(
                    _compute_snapshot,
                    node_list,
                    edge_list,
                    self._direction,
                    version,
                    self._max_nodes,
                )
            except ConstructionError as exc:
                log.warning("Graph rebuild rejected, keeping version %d: %s", self._current.version, exc)
                raise
            self._current = snapshot
        log.info(
            "Graph rebuilt: version=%d nodes=%d edges=%d max_blast_radius=%d (%.1f ms)",
            snapshot.version,
            len(snapshot.graph.nodes),
            len(snapshot.graph.edges),
            snapshot.max_blast_radius,
            (time.monotonic() - started) * 1000,
        )
        return snapshot

    async def rebuild_from_scan(self, result: ScanResult) -> GraphSnapshot:
        return await self.rebuild(result.nodes, result.edges)
