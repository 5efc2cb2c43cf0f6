"""
Tests for causal chain search and scoring
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from causal_graph.causal_chains import calculate_path_strength, find_causal_chains, find_path_to_event
from causal_graph.config import EngineConfig
from causal_graph.models import CausalGraph, Edge, Node


def _make_graph(nodes, edges, event_id="e1"):
    """Build a graph from (id, type) node pairs plus the event node."""
    graph = CausalGraph()
    graph.add_node(Node(id=event_id, label="Event", type="Event", size=20, color="#4ec9b0"))
    for node_id, node_type in nodes:
        graph.add_node(Node(id=node_id, label=node_id, type=node_type, size=10, color="#b5cea8"))
    for source, target, relationship, strength in edges:
        graph.add_edge(Edge(source, target, relationship, strength))
    return graph


class TestFindPath:
    """Tests for the depth-first path search."""

    def test_direct_path(self):
        graph = _make_graph([("A", "Concept")], [("A", "e1", "INFLUENCES", 0.7)])
        assert find_path_to_event(graph, "A", "e1") == ["A", "e1"]

    def test_unreachable(self):
        graph = _make_graph([("A", "Concept")], [("A", "e1", "MENTIONS", 0.7)])
        assert find_path_to_event(graph, "A", "e1") == []

    def test_first_path_kept(self):
        graph = _make_graph([("A", "Concept"), ("B", "Concept")], [
            ("A", "e1", "CAUSES", 0.4),
            ("A", "B", "CAUSES", 0.9),
            ("B", "e1", "CAUSES", 0.9),
        ])
        assert find_path_to_event(graph, "A", "e1") == ["A", "e1"]

    def test_cycle_terminates(self):
        graph = _make_graph([("A", "Concept"), ("B", "Concept")], [
            ("A", "B", "CAUSES", 0.8),
            ("B", "A", "CAUSES", 0.8),
        ])
        assert find_path_to_event(graph, "A", "e1") == []

    def test_path_through_cycle(self):
        graph = _make_graph([("A", "Concept"), ("B", "Concept")], [
            ("A", "B", "CAUSES", 0.8),
            ("B", "A", "CAUSES", 0.8),
            ("B", "e1", "AFFECTS", 0.6),
        ])
        assert find_path_to_event(graph, "A", "e1") == ["A", "B", "e1"]


class TestPathStrength:
    """Tests for chain strength scoring."""

    def setup_method(self):
        self.graph = _make_graph([("A", "Concept"), ("B", "Concept")], [
            ("A", "B", "CAUSES", 0.8),
            ("B", "e1", "INFLUENCES", 0.5),
        ])

    def test_product_with_length_decay(self):
        assert calculate_path_strength(self.graph, ["A", "B", "e1"]) == pytest.approx(0.36)

    def test_direct_edge_not_decayed(self):
        assert calculate_path_strength(self.graph, ["B", "e1"]) == 0.5

    def test_missing_edge_penalty(self):
        assert calculate_path_strength(self.graph, ["A", "e1"]) == pytest.approx(0.3)

    def test_short_path(self):
        assert calculate_path_strength(self.graph, ["A"]) == 0.0
        assert calculate_path_strength(self.graph, []) == 0.0

    def test_zero_strength_edge_defaults(self):
        graph = _make_graph([("A", "Concept")], [("A", "e1", "CAUSES", 0.0)])
        assert calculate_path_strength(graph, ["A", "e1"]) == 0.5

    def test_config_constants(self):
        config = EngineConfig(missing_edge_penalty=0.1, length_decay=1.0)
        assert calculate_path_strength(self.graph, ["A", "B", "e1"], config) == pytest.approx(0.4)
        assert calculate_path_strength(self.graph, ["A", "e1"], config) == pytest.approx(0.1)


class TestFindCausalChains:
    """Tests for chain discovery over a whole graph."""

    def test_sorted_by_strength(self):
        graph = _make_graph([("A", "Concept"), ("B", "Factor")], [
            ("A", "B", "CAUSES", 0.8),
            ("B", "e1", "INFLUENCES", 0.5),
        ])
        chains = find_causal_chains(graph, "e1")

        assert [c.start for c in chains] == ["B", "A"]
        assert chains[1].path == ["A", "B", "e1"]
        assert chains[1].length == 3
        assert chains[1].strength == pytest.approx(0.36)
        assert all(c.end == "e1" for c in chains)

    def test_only_factor_nodes_start_chains(self):
        graph = _make_graph([("P", "Person"), ("O", "Organization")], [
            ("P", "e1", "CAUSES", 0.9),
            ("O", "e1", "INFLUENCES", 0.9),
        ])
        assert find_causal_chains(graph, "e1") == []

    def test_no_factor_nodes(self):
        graph = _make_graph([], [])
        assert find_causal_chains(graph, "e1") == []

    def test_max_chains(self):
        nodes = [(f"C{i}", "Concept") for i in range(5)]
        edges = [(f"C{i}", "e1", "CAUSES", 0.5 + i / 10) for i in range(5)]
        graph = _make_graph(nodes, edges)
        chains = find_causal_chains(graph, "e1", EngineConfig(max_causal_chains=2))

        assert [c.start for c in chains] == ["C4", "C3"]

    def test_unknown_event(self):
        graph = _make_graph([("A", "Concept")], [("A", "e1", "CAUSES", 0.9)])
        assert find_causal_chains(graph, "missing") == []
