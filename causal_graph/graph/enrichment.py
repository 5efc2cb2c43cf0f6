"""
Graph Enrichment Module

Derives indirect relationships after all sources are processed:
1. Transitive edges: A -CAUSES/INFLUENCES-> B -CAUSES/INFLUENCES-> C
   gives A -INFLUENCES-> C with strength avg(s1, s2) * decay
2. Pattern detection: triangles and feedback loops are reported, the
   graph itself is left unchanged

The transitive search visits every ordered triple of distinct node ids,
O(n^3) in node count. Graphs stay small (at most 5 entities and 3
relationships per source) so this is acceptable.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from extraction.relation_patterns import TRANSITIVE_RELATIONSHIPS

from ..config import EngineConfig
from ..models import CausalGraph, Edge
from .logging_utils import log_edge_update, log_summary, setup_graph_logger
from .motifs import detect_causal_patterns


def _first_transitive_edges(graph: CausalGraph) -> Dict[Tuple[str, str], Edge]:
    """First CAUSES/INFLUENCES edge for each ordered pair, in edge order."""
    first: Dict[Tuple[str, str], Edge] = {}
    for edge in graph.edges:
        if edge.relationship in TRANSITIVE_RELATIONSHIPS:
            first.setdefault((edge.source, edge.target), edge)
    return first


def find_transitive_relationships(
    graph: CausalGraph,
    decay: float = 0.8
) -> List[Edge]:
    """
    Find A -> C edges implied by A -> B -> C causal/influence paths.

    Args:
        graph: Graph to scan (not modified)
        decay: Strength penalty for indirection

    Returns:
        Candidate INFLUENCES edges in (source, intermediate, target) node order
    """
    first = _first_transitive_edges(graph)
    node_ids = list(graph.nodes.keys())
    transitive = []

    for source_id in node_ids:
        for intermediate_id in node_ids:
            if source_id == intermediate_id:
                continue
            edge1 = first.get((source_id, intermediate_id))
            if edge1 is None:
                continue

            for target_id in node_ids:
                if target_id in (intermediate_id, source_id):
                    continue
                edge2 = first.get((intermediate_id, target_id))
                if edge2 is None:
                    continue

                transitive.append(Edge(
                    source=source_id,
                    target=target_id,
                    relationship="INFLUENCES",
                    strength=(edge1.strength + edge2.strength) / 2 * decay,
                    weight=(edge1.weight + edge2.weight) / 2 * decay,
                    properties={
                        "transitive": True,
                        "path": [source_id, intermediate_id, target_id]
                    }
                ))

    return transitive


def enrich_graph(
    graph: CausalGraph,
    config: Optional[EngineConfig] = None,
    output_dir: Optional[Path] = None
) -> Dict:
    """
    Add transitive edges and run pattern detection.

    A transitive edge is skipped when an identical (source, target,
    INFLUENCES) edge already exists.

    Args:
        graph: Graph to enrich in place
        config: Engine configuration (transitive_decay)
        output_dir: Optional directory for JSONL/summary logs

    Returns:
        Summary statistics
    """
    config = config or EngineConfig()
    output_dir = Path(output_dir) if output_dir else None
    logger = setup_graph_logger("enrichment", output_dir)

    edge_log_file = output_dir / "transitive_edges.jsonl" if output_dir else None
    if edge_log_file and edge_log_file.exists():
        edge_log_file.unlink()

    candidates = find_transitive_relationships(graph, decay=config.transitive_decay)
    added = 0
    for edge in candidates:
        if graph.edge_exists(edge.source, edge.target, edge.relationship):
            continue
        graph.add_edge(edge)
        added += 1
        logger.debug(f"Transitive edge {' -> '.join(edge.properties['path'])}: {edge.strength:.3f}")
        log_edge_update(edge_log_file, {
            "edge_id": f"{edge.source}->{edge.target}",
            "via_node": edge.properties["path"][1],
            "strength": round(edge.strength, 4)
        })

    logger.info(f"Transitive enrichment: {len(candidates)} candidates, {added} edges added")

    patterns = detect_causal_patterns(graph)

    summary = {
        "module": "enrichment",
        "transitive_candidates": len(candidates),
        "transitive_edges_added": added,
        "triangles": len(patterns["triangles"]),
        "feedback_loops": len(patterns["feedback_loops"]),
        "edges_total": len(graph.edges)
    }
    log_summary(output_dir / "summary.json" if output_dir else None, summary)
    return summary
