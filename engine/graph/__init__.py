"""
Dependency graph package exports.

This package provides the immutable repository graph, the blast-radius
calculator and the swappable snapshot served to readers.
"""

from engine.graph.blast import BlastRadiusMap, compute, criticality, max_radius, reachable
from engine.graph.scanner import ScanResult, parse_go_mod, scan_go_module
from engine.graph.state import GraphSnapshot, GraphState
from engine.graph.store import EMPTY_GRAPH, Graph, build

__all__ = [
    "BlastRadiusMap",
    "EMPTY_GRAPH",
    "Graph",
    "GraphSnapshot",
    "GraphState",
    "ScanResult",
    "build",
    "compute",
    "criticality",
    "max_radius",
    "parse_go_mod",
    "reachable",
    "scan_go_module",
]
