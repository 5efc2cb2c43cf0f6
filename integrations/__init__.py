"""
Integrations Module

Data-source concerns the engine consumes:
- Source registry: trusted providers and source edge weighting
"""

from .source_registry import (
    TRUSTED_PROVIDERS,
    calculate_edge_weight,
    get_relevance,
    is_trusted_provider,
)

__all__ = [
    "TRUSTED_PROVIDERS",
    "calculate_edge_weight",
    "get_relevance",
    "is_trusted_provider",
]
