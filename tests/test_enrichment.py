"""
Tests for transitive enrichment and causal pattern detection
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from causal_graph.config import EngineConfig
from causal_graph.graph import (
    build_causal_digraph,
    detect_causal_patterns,
    enrich_graph,
    find_transitive_relationships,
    read_jsonl,
)
from causal_graph.models import CausalGraph, Edge, Node


def _make_graph(node_ids, edges):
    """Build a graph of Concept nodes from (source, target, relationship, strength) tuples."""
    graph = CausalGraph()
    for node_id in node_ids:
        graph.add_node(Node(id=node_id, label=node_id, type="Concept", size=10.2, color="#b5cea8"))
    for source, target, relationship, strength in edges:
        graph.add_edge(Edge(source, target, relationship, strength))
    return graph


class TestTransitiveRelationships:
    """Tests for A -> B -> C candidate search."""

    def test_chain_of_two(self):
        graph = _make_graph(["a", "b", "c"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "c", "INFLUENCES", 0.6),
        ])
        candidates = find_transitive_relationships(graph)

        assert len(candidates) == 1
        edge = candidates[0]
        assert (edge.source, edge.target, edge.relationship) == ("a", "c", "INFLUENCES")
        assert edge.strength == pytest.approx(0.56)
        assert edge.weight == pytest.approx(0.56)
        assert edge.properties == {"transitive": True, "path": ["a", "b", "c"]}

    def test_custom_decay(self):
        graph = _make_graph(["a", "b", "c"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "c", "CAUSES", 0.6),
        ])
        assert find_transitive_relationships(graph, decay=0.5)[0].strength == pytest.approx(0.35)

    def test_other_relationships_ignored(self):
        graph = _make_graph(["a", "b", "c"], [
            ("a", "b", "AFFECTS", 0.8),
            ("b", "c", "CAUSES", 0.6),
        ])
        assert find_transitive_relationships(graph) == []

    def test_no_self_loops(self):
        graph = _make_graph(["a", "b"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "a", "CAUSES", 0.6),
        ])
        assert find_transitive_relationships(graph) == []

    def test_first_edge_per_pair_used(self):
        graph = _make_graph(["a", "b", "c"], [
            ("a", "b", "CAUSES", 0.4),
            ("a", "b", "INFLUENCES", 1.0),
            ("b", "c", "CAUSES", 0.4),
        ])
        assert find_transitive_relationships(graph)[0].strength == pytest.approx(0.32)


class TestEnrichGraph:
    """Tests for enrich_graph."""

    def setup_method(self):
        self.graph = _make_graph(["a", "b", "c"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "c", "INFLUENCES", 0.6),
        ])

    def test_adds_transitive_edge(self):
        summary = enrich_graph(self.graph)

        assert self.graph.edge_exists("a", "c", "INFLUENCES")
        assert summary["transitive_candidates"] == 1
        assert summary["transitive_edges_added"] == 1
        assert summary["triangles"] == 1
        assert summary["feedback_loops"] == 0
        assert summary["edges_total"] == 3

    def test_existing_edge_not_duplicated(self):
        self.graph.add_edge(Edge("a", "c", "INFLUENCES", 0.9))
        summary = enrich_graph(self.graph)

        assert summary["transitive_edges_added"] == 0
        assert len(self.graph.edges) == 3
        assert self.graph.find_edge("a", "c").strength == 0.9

    def test_other_relationship_does_not_block(self):
        self.graph.add_edge(Edge("a", "c", "CAUSES", 0.9))
        enrich_graph(self.graph)

        assert self.graph.edge_exists("a", "c", "INFLUENCES")
        assert len(self.graph.edges) == 4

    def test_config_decay(self):
        enrich_graph(self.graph, EngineConfig(transitive_decay=1.0))
        edge = [e for e in self.graph.edges if e.properties.get("transitive")][0]
        assert edge.strength == pytest.approx(0.7)

    def test_output_files(self, tmp_path):
        enrich_graph(self.graph, output_dir=tmp_path)

        records = read_jsonl(tmp_path / "transitive_edges.jsonl")
        assert len(records) == 1
        assert records[0]["edge_id"] == "a->c"
        assert records[0]["via_node"] == "b"
        assert records[0]["strength"] == 0.56
        assert (tmp_path / "enrichment.log").exists()

        summary = json.loads((tmp_path / "summary.json").read_text())
        assert summary["module"] == "enrichment"
        assert summary["transitive_edges_added"] == 1

    def test_rerun_replaces_edge_log(self, tmp_path):
        enrich_graph(self.graph, output_dir=tmp_path)
        other = _make_graph(["a", "b", "c"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "c", "INFLUENCES", 0.6),
        ])
        enrich_graph(other, output_dir=tmp_path)

        assert len(read_jsonl(tmp_path / "transitive_edges.jsonl")) == 1


class TestCausalPatterns:
    """Tests for report-only motif detection."""

    def test_triangle(self):
        graph = _make_graph(["a", "b", "c"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "c", "CAUSES", 0.6),
            ("a", "c", "AFFECTS", 0.5),
        ])
        patterns = detect_causal_patterns(graph)

        assert patterns["triangles"] == [("a", "b", "c")]
        assert patterns["feedback_loops"] == []

    def test_feedback_loop(self):
        graph = _make_graph(["a", "b"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "a", "INFLUENCES", 0.6),
        ])
        patterns = detect_causal_patterns(graph)

        assert len(patterns["feedback_loops"]) == 1
        assert set(patterns["feedback_loops"][0]) == {"a", "b"}

    def test_graph_unchanged(self):
        graph = _make_graph(["a", "b", "c"], [
            ("a", "b", "CAUSES", 0.8),
            ("b", "c", "CAUSES", 0.6),
            ("c", "a", "CAUSES", 0.5),
        ])
        before = graph.to_dict()
        detect_causal_patterns(graph)
        assert graph.to_dict() == before

    def test_digraph_keeps_strongest_causal_edge(self):
        graph = _make_graph(["a", "b"], [
            ("a", "b", "CAUSES", 0.5),
            ("a", "b", "INFLUENCES", 0.9),
            ("a", "b", "MENTIONS", 1.0),
        ])
        digraph = build_causal_digraph(graph)

        assert digraph.number_of_edges() == 1
        assert digraph["a"]["b"] == {"strength": 0.9, "relationship": "INFLUENCES"}
