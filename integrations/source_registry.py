"""
Source Registry

Trusted search providers and the weighting of source -> event edges.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from causal_graph.models import SourceRecord

# Providers whose results get a credibility boost
TRUSTED_PROVIDERS = frozenset({"Airweave", "Exa AI"})

DEFAULT_RELEVANCE = 0.5
RECENCY_BOOST = 1.2
TRUSTED_PROVIDER_BOOST = 1.15


def is_trusted_provider(provider: Optional[str]) -> bool:
    return provider in TRUSTED_PROVIDERS


def get_relevance(source: "SourceRecord") -> float:
    """Relevance score of a source, DEFAULT_RELEVANCE when missing or zero."""
    return source.relevance_score or DEFAULT_RELEVANCE


def calculate_edge_weight(source: "SourceRecord") -> float:
    """
    Weight of the INFORMS edge from a source to the event.

    Base is the relevance score, x1.2 for recent sources, x1.15 for
    trusted providers, clamped to [0, 1].

    Args:
        source: Source record

    Returns:
        Edge weight in [0.0, 1.0]
    """
    weight = get_relevance(source)
    if source.is_recent:
        weight *= RECENCY_BOOST
    if is_trusted_provider(source.source):
        weight *= TRUSTED_PROVIDER_BOOST
    return max(0.0, min(1.0, weight))
