"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from engine.graph import GraphSnapshot, criticality
from engine.hub import DeliveryReport


class EdgeOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(serialization_alias="from")
    target: str = Field(serialization_alias="to")


class GraphResponse(BaseModel):
    version: int
    nodes: List[str]
    edges: List[EdgeOut]
    adjacency: Dict[str, List[str]]

    @classmethod
    def from_snapshot(cls, snapshot: GraphSnapshot) -> GraphResponse:
        graph = snapshot.graph
        return cls(
            version=snapshot.version,
            nodes=list(graph.nodes),
            edges=[EdgeOut(source=frm, target=to) for frm, to in graph.edges],
            adjacency=graph.to_adjacency_map(),
        )


class BlastRadiusResponse(BaseModel):
    version: int
    direction: str
    blast_radius: Dict[str, int]
    criticality: Dict[str, float]
    max_blast_radius: int

    @classmethod
    def from_snapshot(cls, snapshot: GraphSnapshot) -> BlastRadiusResponse:
        radius = dict(snapshot.blast_radius)
        return cls(
            version=snapshot.version,
            direction=snapshot.direction,
            blast_radius=radius,
            criticality=criticality(radius),
            max_blast_radius=snapshot.max_blast_radius,
        )


class RebuildResponse(BaseModel):
    status: str
    version: int
    node_count: int
    edge_count: int
    max_blast_radius: int

    @classmethod
    def from_snapshot(cls, snapshot: GraphSnapshot, status: str = "graph updated") -> RebuildResponse:
        return cls(
            status=status,
            version=snapshot.version,
            node_count=len(snapshot.graph.nodes),
            edge_count=len(snapshot.graph.edges),
            max_blast_radius=snapshot.max_blast_radius,
        )


class DeliveryReportResponse(BaseModel):
    event: Dict[str, str]
    attempted: int = Field(description="Subscribers registered when the event was emitted.")
    delivered: int = Field(
        description=(
            "Subscribers whose outbox accepted the event. A transport failure after this point "
            "evicts the subscriber and is not reflected here."
        )
    )
    failed: List[str] = Field(description="Connection ids that refused the event and were evicted.")

    @classmethod
    def from_report(cls, report: DeliveryReport) -> DeliveryReportResponse:
        return cls(**report.to_dict())


class MetricsResponse(BaseModel):
    graph_version: int
    node_count: int
    edge_count: int
    max_blast_radius: int
    subscribers: int
