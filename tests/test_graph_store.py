"""
Test Suite for the Graph Store

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.errors import ConstructionError
from engine.graph.store import EMPTY_GRAPH, build


def test_build_keeps_insertion_order():
    g = build(["a", "b", "c", "d"], [("a", "c"), ("a", "b"), ("b", "d")])
    assert g.nodes == ("a", "b", "c", "d")
    assert g.adjacency("a") == ("c", "b")
    assert g.adjacency("d") == ()
    assert len(g) == 4
    assert "b" in g


def test_unknown_node_adjacency_is_empty():
    g = build(["a"], [])
    assert g.adjacency("missing") == ()


def test_edge_to_unknown_node_is_rejected():
    with pytest.raises(ConstructionError) as info:
        build(["a", "b"], [("a", "b"), ("b", "ghost"), ("phantom", "a")])
    assert set(info.value.unknown) == {"ghost", "phantom"}
    assert "ghost" in str(info.value)


def test_duplicate_nodes_and_edges():
    g = build(["a", "b", "a"], [("a", "b"), ("a", "b")])
    assert g.nodes == ("a", "b")
    # scanner output is kept as reported, adjacency is deduplicated
    assert g.edges == (("a", "b"), ("a", "b"))
    assert g.adjacency("a") == ("b",)


def test_graph_is_read_only():
    g = build(["a", "b"], [("a", "b")])
    with pytest.raises(AttributeError):
        g.nodes = ("x",)
    with pytest.raises(TypeError):
        g._adjacency["a"] = ("x",)


def test_reversed_and_adjacency_map():
    g = build(["a", "b", "c"], [("a", "b"), ("b", "c")])
    r = g.reversed()
    assert r.adjacency("c") == ("b",)
    assert r.adjacency("a") == ()
    assert g.to_adjacency_map() == {"a": ["b"], "b": ["c"], "c": []}


def test_empty_graph():
    assert EMPTY_GRAPH.nodes == ()
    assert EMPTY_GRAPH.edges == ()
