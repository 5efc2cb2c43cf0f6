"""
Entity Resolver

Normalizes extracted entity text into dedup keys and resolves mentions to
graph nodes.

Two levels of merging:
- merge_entities: within one source's extraction pass
- EntityResolver.get_or_create_entity: across the whole graph build, the
  node keeps the running max of confidence/importance

A resolver is created per build, so its index never leaks between calls.
"""

import logging
import re
from typing import Dict, List, Optional, Union

from extraction.entity_extractor import ExtractedEntity
from extraction.relationship_extractor import ExtractedRelationship
from extraction.text_filters import clean_entity

from .models import CausalGraph, Node, get_color_for_type

logger = logging.getLogger(__name__)

MAX_KEY_LENGTH = 50
MAX_LABEL_LENGTH = 30
ENTITY_ID_PREFIX = "entity_"


def normalize_entity(text: str) -> str:
    """
    Dedup key: lowercase, strip non-word/non-space characters, collapse
    whitespace to underscores, truncate to 50 characters.
    """
    key = re.sub(r'[^\w\s]', '', text.lower())
    key = re.sub(r'\s+', '_', key)
    return key[:MAX_KEY_LENGTH]


def get_entity_id(entity: Union[str, ExtractedEntity]) -> str:
    """
    Node id for an entity mention.

    Leading articles are stripped first, so "the Federal Reserve" and
    "Federal Reserve" share entity_federal_reserve.
    """
    text = entity if isinstance(entity, str) else entity.text
    return f"{ENTITY_ID_PREFIX}{normalize_entity(clean_entity(text))}"


def merge_entities(entities: List[ExtractedEntity]) -> List[ExtractedEntity]:
    """
    Collapse entities sharing a normalized key.

    The first object for each key is kept, with confidence/importance raised
    to the max seen for that key. Order of first appearance is preserved.

    Args:
        entities: Raw entities from one source

    Returns:
        One entity per key
    """
    merged: Dict[str, ExtractedEntity] = {}
    for entity in entities:
        key = normalize_entity(entity.text)
        existing = merged.get(key)
        if existing is None:
            merged[key] = entity
        else:
            existing.confidence = max(existing.confidence, entity.confidence)
            existing.importance = max(existing.importance, entity.importance)
    return list(merged.values())


def deduplicate_relationships(relationships: List[ExtractedRelationship]) -> List[ExtractedRelationship]:
    """Drop repeated (source id, type, target id) triples; first occurrence wins."""
    seen = set()
    unique = []
    for rel in relationships:
        key = (get_entity_id(rel.source), rel.relation_type, get_entity_id(rel.target))
        if key in seen:
            continue
        seen.add(key)
        unique.append(rel)
    return unique


class EntityResolver:
    """Resolves entity mentions to nodes of one graph, keyed by node id."""

    def __init__(self, graph: CausalGraph):
        self.graph = graph

    def get_or_create_entity(self, entity: ExtractedEntity, source_idx: int) -> Optional[str]:
        """
        Get the node id for an entity, creating the node on first mention.

        Args:
            entity: Extracted entity (or relationship endpoint)
            source_idx: Index of the source being processed

        Returns:
            Node id, or None if the entity has no text
        """
        if entity is None or not entity.text:
            return None

        text = clean_entity(entity.text)
        normalized = normalize_entity(text)
        if not normalized:
            return None
        entity_id = f"{ENTITY_ID_PREFIX}{normalized}"

        node = self.graph.get_node(entity_id)
        if node is None:
            node_type = entity.entity_type or "Concept"
            properties = {
                "confidence": entity.confidence,
                "importance": entity.importance,
                "normalized": normalized,
                "sources": []
            }
            if entity.value is not None:
                properties["value"] = entity.value

            self.graph.add_node(Node(
                id=entity_id,
                label=text[:MAX_LABEL_LENGTH],
                type=node_type,
                size=6 + entity.importance * 6,
                color=get_color_for_type(node_type),
                properties=properties
            ))
            logger.debug(f"Created {node_type} node {entity_id} (source {source_idx})")
        else:
            node.properties["confidence"] = max(node.confidence, entity.confidence)
            node.properties["importance"] = max(node.importance, entity.importance)

        return entity_id
