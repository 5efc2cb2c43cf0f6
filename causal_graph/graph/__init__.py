"""
Graph operations run after construction:
- Enrichment: transitive INFLUENCES edges
- Motifs: report-only triangle and feedback-loop detection
- Logging utilities for graph operations
"""

from .enrichment import enrich_graph, find_transitive_relationships
from .motifs import build_causal_digraph, detect_causal_patterns
from .logging_utils import setup_graph_logger, log_edge_update, log_summary, read_jsonl

__all__ = [
    "enrich_graph",
    "find_transitive_relationships",
    "build_causal_digraph",
    "detect_causal_patterns",
    "setup_graph_logger",
    "log_edge_update",
    "log_summary",
    "read_jsonl",
]
