"""
Dependency graph routes: replace the graph from a scan result, scan a Go module,
and read the current graph and its blast radius.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from api.requests import GraphRequest, ScanRequest
from api.responses import BlastRadiusResponse, GraphResponse, MetricsResponse, RebuildResponse
from api.routes.common import get_graph_state, get_hub
from api.routes.exception import handle_exceptions
from engine.errors import ConstructionError, ScanError
from engine.graph import GraphState, scan_go_module
from engine.hub import EventHub

router = APIRouter(tags=["Graph"])


@router.post("/graph", summary="Replace the dependency graph with a scan result")
@handle_exceptions
async def replace_graph(
    req: GraphRequest,
    state: GraphState = Depends(get_graph_state),
) -> RebuildResponse:
    try:
        snapshot = await state.rebuild(req.nodes, req.edge_pairs())
    except ConstructionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return RebuildResponse.from_snapshot(snapshot)


@router.post("/scan", summary="Scan a Go module's go.mod and rebuild the graph")
@handle_exceptions
async def scan_repository(
    req: ScanRequest,
    state: GraphState = Depends(get_graph_state),
) -> RebuildResponse:
    try:
        result = await asyncio.to_thread(scan_go_module, req.repo_path)
        snapshot = await state.rebuild_from_scan(result)
    except (ScanError, ConstructionError) as exc:
        raise HTTPException(status_code=400, detail=f"Failed to scan: {exc}") from exc
    return RebuildResponse.from_snapshot(snapshot, status="scan complete")


@router.get("/graph", summary="Current dependency graph")
async def get_graph(state: GraphState = Depends(get_graph_state)) -> GraphResponse:
    return GraphResponse.from_snapshot(state.current)


@router.get("/graph/blast-radius", summary="Transitive blast radius of every node")
async def get_blast_radius(state: GraphState = Depends(get_graph_state)) -> BlastRadiusResponse:
    return BlastRadiusResponse.from_snapshot(state.current)


@router.get("/metrics", summary="Graph and subscriber counters")
async def get_metrics(
    state: GraphState = Depends(get_graph_state),
    hub: EventHub = Depends(get_hub),
) -> MetricsResponse:
    snapshot = state.current
    return MetricsResponse(
        graph_version=snapshot.version,
        node_count=len(snapshot.graph.nodes),
        edge_count=len(snapshot.graph.edges),
        max_blast_radius=snapshot.max_blast_radius,
        subscribers=hub.subscriber_count,
    )
