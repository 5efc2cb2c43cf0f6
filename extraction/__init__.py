"""
Extraction Module

Regex/heuristic text extraction feeding the causal graph:
- Text Segmenter: sentence splitting
- Text Filters: random-word and meaningful-concept gates
- Entity Extractor: person/organization/concept/statistic patterns
- Relationship Extractor: general, temporal and quantitative patterns
"""

from .text_segmenter import split_into_sentences
from .text_filters import (
    clean_entity,
    is_meaningful_concept,
    is_random_word,
    is_stop_word,
)
from .entity_extractor import EntityExtractor, ExtractedEntity
from .relationship_extractor import (
    RelationshipExtractor,
    ExtractedRelationship,
    extract_temporal_info,
    infer_effect,
)
from .relation_patterns import (
    RELATIONSHIP_TYPES,
    CAUSAL_CHAIN_RELATIONSHIPS,
    TRANSITIVE_RELATIONSHIPS,
    GENERAL_PATTERNS,
    RelationPattern,
)

__all__ = [
    "split_into_sentences",
    "clean_entity",
    "is_meaningful_concept",
    "is_random_word",
    "is_stop_word",
    "EntityExtractor",
    "ExtractedEntity",
    "RelationshipExtractor",
    "ExtractedRelationship",
    "extract_temporal_info",
    "infer_effect",
    "RELATIONSHIP_TYPES",
    "CAUSAL_CHAIN_RELATIONSHIPS",
    "TRANSITIVE_RELATIONSHIPS",
    "GENERAL_PATTERNS",
    "RelationPattern",
]
