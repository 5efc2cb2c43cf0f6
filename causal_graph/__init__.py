"""
Causal Graph Module

Builds weighted causal graphs from unstructured source text around a
forecasting event, and turns their causal chains into outcome predictions.

Extraction is regex/heuristic based (see the extraction package); there is
no model and no persistence. The graph is rebuilt for every analysis.

Key components:
- CausalGraph, Node, Edge, Chain, Prediction: data models
- EntityResolver: normalization and node-level deduplication
- CausalGraphBuilder: per-source orchestration around the event node
- enrich_graph: transitive INFLUENCES edges and pattern reports
- find_causal_chains: depth-first search from factor nodes to the event
- CausalPredictor: chain signals -> ranked predictions
- CausalityEngine: facade used by the API and CLI

Pipeline steps:
1. Sentence segmentation
2. Entity and relationship extraction
3. Entity resolution and graph assembly
4. Transitive enrichment
5. Causal chain search
6. Prediction
"""

from .models import (
    CausalGraph,
    Chain,
    Edge,
    EventDescriptor,
    GraphMetadata,
    Node,
    Prediction,
    SourceAttribution,
    SourceRecord,
    NODE_COLORS,
    NODE_TYPES,
)
from .config import EngineConfig, load_config
from .exceptions import CausalGraphError, InvalidInputError
from .entity_resolver import EntityResolver, get_entity_id, normalize_entity
from .graph_builder import CausalGraphBuilder
from .causal_chains import find_causal_chains
from .predictor import CausalPredictor
from .engine import CausalityEngine

__all__ = [
    # Models
    "CausalGraph",
    "Chain",
    "Edge",
    "EventDescriptor",
    "GraphMetadata",
    "Node",
    "Prediction",
    "SourceAttribution",
    "SourceRecord",
    "NODE_COLORS",
    "NODE_TYPES",
    # Configuration
    "EngineConfig",
    "load_config",
    # Errors
    "CausalGraphError",
    "InvalidInputError",
    # Components
    "EntityResolver",
    "get_entity_id",
    "normalize_entity",
    "CausalGraphBuilder",
    "find_causal_chains",
    "CausalPredictor",
    "CausalityEngine",
]
