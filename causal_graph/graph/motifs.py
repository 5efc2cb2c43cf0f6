"""
Causal Pattern Detection Module

Detects structural patterns among causal edges (CAUSES, INFLUENCES,
AFFECTS, PREDICTS):
- Triangles: A -> B -> C together with a direct A -> C
- Feedback loops: directed cycles

Detection is report-only. Edge strengths are not boosted and no edges are
added or removed.
"""

import logging
from typing import Dict, List, Tuple

import networkx as nx

from extraction.relation_patterns import CAUSAL_CHAIN_RELATIONSHIPS

from ..models import CausalGraph

logger = logging.getLogger("causal_graph.motifs")

MAX_CYCLE_LENGTH = 6


def build_causal_digraph(graph: CausalGraph) -> nx.DiGraph:
    """
    Collapse causal edges into a simple DiGraph (strongest edge per pair).
    """
    digraph = nx.DiGraph()
    for node in graph.nodes.values():
        digraph.add_node(node.id, node_type=node.type)

    for edge in graph.edges:
        if edge.relationship not in CAUSAL_CHAIN_RELATIONSHIPS:
            continue
        if digraph.has_edge(edge.source, edge.target):
            data = digraph[edge.source][edge.target]
            if edge.strength > data["strength"]:
                data["strength"] = edge.strength
                data["relationship"] = edge.relationship
        else:
            digraph.add_edge(
                edge.source, edge.target,
                strength=edge.strength,
                relationship=edge.relationship
            )
    return digraph


def detect_triangle_motifs(digraph: nx.DiGraph) -> List[Tuple[str, str, str]]:
    """
    Detect triangles: a -> b -> c with a direct a -> c shortcut.

    Args:
        digraph: Collapsed causal graph

    Returns:
        List of (a, b, c) tuples
    """
    triangles = []
    for b in digraph.nodes():
        for a in digraph.predecessors(b):
            for c in digraph.successors(b):
                if a != c and a != b and c != b and digraph.has_edge(a, c):
                    triangles.append((a, b, c))
    return triangles


def detect_feedback_loops(digraph: nx.DiGraph, max_length: int = MAX_CYCLE_LENGTH) -> List[List[str]]:
    """Directed cycles of at most max_length nodes."""
    return [
        cycle for cycle in nx.simple_cycles(digraph, length_bound=max_length)
    ]


def detect_causal_patterns(graph: CausalGraph) -> Dict[str, List]:
    """
    Detect triangles and feedback loops among causal edges.

    Args:
        graph: Causal graph (not modified)

    Returns:
        Dict with 'triangles' and 'feedback_loops' lists
    """
    digraph = build_causal_digraph(graph)
    triangles = detect_triangle_motifs(digraph)
    loops = detect_feedback_loops(digraph)

    if triangles or loops:
        logger.info(f"Detected {len(triangles)} triangles, {len(loops)} feedback loops")
    else:
        logger.debug("No causal patterns detected")

    return {"triangles": triangles, "feedback_loops": loops}
