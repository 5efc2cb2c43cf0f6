"""
Causal Chain Finder

Finds causal paths from factor nodes (Concept/Factor) to the event node
along CAUSES, INFLUENCES, AFFECTS and PREDICTS edges.

The search is a depth-first walk that avoids cycles per branch only: each
recursive call gets its own frozenset of the nodes already on its path, so
a node may appear on several branches. The first path found from each
start node is kept.
"""

import logging
from typing import FrozenSet, List, Optional

from extraction.relation_patterns import CAUSAL_CHAIN_RELATIONSHIPS

from .config import EngineConfig
from .models import CausalGraph, Chain

logger = logging.getLogger(__name__)

FACTOR_NODE_TYPES = {"Concept", "Factor"}


def find_path_to_event(
    graph: CausalGraph,
    node_id: str,
    event_id: str,
    visited: FrozenSet[str] = frozenset()
) -> List[str]:
    """
    Depth-first search for a path from node_id to event_id.

    Args:
        graph: Graph to search
        node_id: Current node
        event_id: Target event node
        visited: Nodes already on the current path

    Returns:
        Node ids from node_id to event_id, or [] if unreachable
    """
    if not node_id or not event_id:
        return []
    if node_id == event_id:
        return [node_id]
    if node_id in visited:
        return []

    branch_visited = visited | {node_id}
    for edge in graph.outgoing(node_id, CAUSAL_CHAIN_RELATIONSHIPS):
        if not edge.target:
            continue
        path = find_path_to_event(graph, edge.target, event_id, branch_visited)
        if path:
            return [node_id] + path

    return []


def calculate_path_strength(
    graph: CausalGraph,
    path: List[str],
    config: Optional[EngineConfig] = None
) -> float:
    """
    Product of consecutive edge strengths times a length decay.

    The first edge between each consecutive pair is used, whatever its
    relationship; a missing edge contributes the missing-edge penalty.
    The product is multiplied by length_decay ** (len(path) - 2).

    Args:
        graph: Graph the path belongs to
        path: Node ids
        config: Engine configuration

    Returns:
        Path strength (0.0 for paths shorter than 2)
    """
    config = config or EngineConfig()
    if len(path) < 2:
        return 0.0

    strength = 1.0
    for current, following in zip(path, path[1:]):
        edge = graph.find_edge(current, following)
        if edge is not None:
            strength *= edge.strength or 0.5
        else:
            strength *= config.missing_edge_penalty

    return strength * config.length_decay ** (len(path) - 2)


def find_causal_chains(
    graph: CausalGraph,
    event_id: str,
    config: Optional[EngineConfig] = None
) -> List[Chain]:
    """
    Find the strongest causal chains leading to the event.

    Args:
        graph: Built causal graph
        event_id: Id of the central event node
        config: Engine configuration (max_causal_chains, decay constants)

    Returns:
        Chains sorted by strength descending, at most max_causal_chains
    """
    config = config or EngineConfig()

    cause_nodes = [n for n in graph.nodes.values() if n.type in FACTOR_NODE_TYPES]
    if not cause_nodes:
        logger.info("No factor nodes found for causal chain analysis")
        return []

    chains = []
    for cause in cause_nodes:
        path = find_path_to_event(graph, cause.id, event_id)
        if len(path) > 1:
            chains.append(Chain(
                start=cause.id,
                end=event_id,
                path=path,
                strength=calculate_path_strength(graph, path, config)
            ))

    chains.sort(key=lambda c: c.strength, reverse=True)
    logger.info(f"Found {len(chains)} causal chains from {len(cause_nodes)} factor nodes")
    return chains[:config.max_causal_chains]
