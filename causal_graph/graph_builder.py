"""
Graph Builder

Main orchestrator for building causal graphs around a forecasting event.
For every source, in input order:
1. Source node + INFORMS edge to the event (weighted by relevance/recency/provider)
2. Sentence segmentation, entity and relationship extraction
3. Quality gates: at most 5 entities and 3 relationships per source
4. Entity nodes with source attribution, CONTAINS/INFORMS/FEATURES edges
5. Relationship edges with MENTIONS/DESCRIBES attribution edges
6. INFLUENCES edges from at most 2 key entities to the event

After all sources: transitive enrichment, causal chain search and metadata.
The output is a complete CausalGraph with nodes, edges and metadata.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from extraction.entity_extractor import EntityExtractor, ExtractedEntity
from extraction.relationship_extractor import ExtractedRelationship, RelationshipExtractor
from extraction.text_filters import is_random_word
from extraction.text_segmenter import split_into_sentences
from integrations.source_registry import calculate_edge_weight, get_relevance

from .causal_chains import find_causal_chains
from .config import EngineConfig
from .entity_resolver import (
    EntityResolver,
    deduplicate_relationships,
    get_entity_id,
    merge_entities,
)
from .exceptions import InvalidInputError
from .graph.enrichment import enrich_graph
from .models import (
    CausalGraph,
    Edge,
    EventDescriptor,
    GraphMetadata,
    Node,
    SourceAttribution,
    SourceRecord,
    SOURCE_NODE_COLOR,
    STRUCTURAL_NODE_TYPES,
    get_color_for_type,
)

logger = logging.getLogger(__name__)

EVENT_NODE_SIZE = 20
SOURCE_NODE_SIZE = 8
MAX_SOURCE_LABEL_LENGTH = 50
MIN_EXTRACTABLE_TEXT_LENGTH = 20
DEFAULT_EVENT_TITLE = "Untitled event"


def coerce_sources(sources: Any) -> List[SourceRecord]:
    """
    Convert caller input to SourceRecords.

    None is treated as no sources. Dicts are read with SourceRecord.from_dict.

    Raises:
        InvalidInputError: If sources is not a list of dicts/SourceRecords
    """
    if sources is None:
        return []
    if isinstance(sources, (str, bytes, dict)) or not isinstance(sources, Iterable):
        raise InvalidInputError(f"sources must be a list of source records, got {type(sources).__name__}")

    records = []
    for idx, source in enumerate(sources):
        if isinstance(source, SourceRecord):
            records.append(source)
        elif isinstance(source, dict):
            records.append(SourceRecord.from_dict(source))
        else:
            raise InvalidInputError(f"Source {idx} must be a dict or SourceRecord, got {type(source).__name__}")
    return records


def coerce_event(event: Any) -> EventDescriptor:
    """
    Convert caller input to an EventDescriptor.

    A missing event or title falls back to "Untitled event"; a missing id
    gives the node id "event".

    Raises:
        InvalidInputError: If event is neither a dict nor an EventDescriptor
    """
    if event is None:
        return EventDescriptor(title=DEFAULT_EVENT_TITLE)
    if isinstance(event, EventDescriptor):
        if not event.title:
            event.title = DEFAULT_EVENT_TITLE
        return event
    if isinstance(event, dict):
        return EventDescriptor.from_dict(event)
    raise InvalidInputError(f"event must be a dict or EventDescriptor, got {type(event).__name__}")


def extract_entities_and_relationships(
    text: str,
    source_idx: int,
    entity_extractor: EntityExtractor,
    relationship_extractor: RelationshipExtractor
) -> Tuple[List[ExtractedEntity], List[ExtractedRelationship]]:
    """
    Run sentence segmentation and both extractors over one source's text.

    Texts shorter than 20 characters are skipped.

    Args:
        text: Source text
        source_idx: Index of the source
        entity_extractor: Entity extractor
        relationship_extractor: Relationship extractor

    Returns:
        (merged entities, deduplicated relationships)
    """
    if not text or len(text) < MIN_EXTRACTABLE_TEXT_LENGTH:
        return [], []

    entities: List[ExtractedEntity] = []
    relationships: List[ExtractedRelationship] = []
    for sentence_idx, sentence in enumerate(split_into_sentences(text)):
        entities.extend(entity_extractor.extract(sentence))
        relationships.extend(relationship_extractor.extract(sentence, source_idx, sentence_idx))

    return merge_entities(entities), deduplicate_relationships(relationships)


class CausalGraphBuilder:
    """
    Builds causal graphs from source records and an event descriptor.

    One builder can be reused; every build gets its own graph and its own
    EntityResolver, so no entity state survives between builds.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        entity_extractor: Optional[EntityExtractor] = None,
        relationship_extractor: Optional[RelationshipExtractor] = None,
        output_dir: Optional[Union[str, Path]] = None
    ):
        """
        Initialize graph builder.

        Args:
            config: Engine configuration
            entity_extractor: Sentence -> entities stage
            relationship_extractor: Sentence -> relationships stage
            output_dir: Optional directory for enrichment logs
        """
        self.config = config or EngineConfig()
        self.entity_extractor = entity_extractor or EntityExtractor()
        self.relationship_extractor = relationship_extractor or RelationshipExtractor()
        self.output_dir = Path(output_dir) if output_dir else None

    def _passes_entity_gate(self, entity: ExtractedEntity) -> bool:
        cfg = self.config
        return (
            entity.confidence >= cfg.entity_min_confidence
            and entity.importance >= cfg.entity_min_importance
            and bool(entity.text)
            and cfg.entity_min_length <= len(entity.text) <= cfg.entity_max_length
            and not is_random_word(entity.text)
        )

    def _passes_relationship_gate(self, rel: ExtractedRelationship) -> bool:
        min_length = self.config.entity_min_length
        return (
            rel.confidence >= self.config.relationship_min_confidence
            and len(rel.source.text or "") >= min_length
            and len(rel.target.text or "") >= min_length
            and not is_random_word(rel.source.text)
            and not is_random_word(rel.target.text)
        )

    def _is_key_entity(self, entity: ExtractedEntity) -> bool:
        return (
            entity.importance > self.config.key_entity_min_importance
            and entity.confidence > self.config.key_entity_min_confidence
        )

    def _create_event_node(self, event: EventDescriptor) -> Node:
        return Node(
            id=event.node_id,
            label=event.title,
            type="Event",
            size=EVENT_NODE_SIZE,
            color=get_color_for_type("Event"),
            properties={
                "volume": event.volume or 0,
                "liquidity": event.liquidity or 0,
                "closeDate": event.close_date,
                "title": event.title
            }
        )

    def _create_source_node(self, source: SourceRecord, idx: int) -> Node:
        return Node(
            id=f"source_{idx}",
            label=source.title[:MAX_SOURCE_LABEL_LENGTH] if source.title else f"Source {idx + 1}",
            type="Source",
            size=SOURCE_NODE_SIZE,
            color=SOURCE_NODE_COLOR,
            properties={
                "url": source.url,
                "relevance": get_relevance(source),
                "text": source.text or "",
                "sourceType": source.source or "Unknown"
            }
        )

    def _add_source(self, graph: CausalGraph, resolver: EntityResolver,
                    source: SourceRecord, idx: int, event_id: str) -> None:
        """Add one source's nodes and edges to the graph."""
        cfg = self.config
        source_node = graph.add_node(self._create_source_node(source, idx))
        source_id = source_node.id
        source_title = source.title or f"Source {idx + 1}"
        attribution = {
            "sourceIdx": idx,
            "sourceTitle": source_title,
            "sourceUrl": source.url or ""
        }

        graph.add_edge(Edge(
            source=source_id,
            target=event_id,
            relationship="INFORMS",
            strength=calculate_edge_weight(source),
            properties={"relevance": get_relevance(source)}
        ))

        entities, relationships = extract_entities_and_relationships(
            source.text, idx, self.entity_extractor, self.relationship_extractor
        )

        quality_entities = [e for e in entities if self._passes_entity_gate(e)]
        quality_entities = quality_entities[:cfg.max_entities_per_source]

        for entity in quality_entities:
            entity_id = resolver.get_or_create_entity(entity, idx)
            entity_node = graph.get_node(entity_id) if entity_id else None
            if entity_node is None:
                continue

            entity_node.sources.append(SourceAttribution(
                source_id=source_id,
                source_title=source_title,
                source_url=source.url or "",
                source_type=source.source or "Unknown",
                relevance=get_relevance(source),
                extraction_method=entity.method or "NLP",
                confidence=entity.confidence
            ))

            graph.add_edge(Edge(
                source=source_id,
                target=entity_id,
                relationship="CONTAINS",
                strength=entity.confidence,
                properties=dict(attribution, extractionMethod=entity.method)
            ))
            graph.add_edge(Edge(
                source=source_id,
                target=entity_id,
                relationship="INFORMS",
                strength=entity.confidence * cfg.entity_informs_factor,
                properties=dict(attribution, extractionMethod=entity.method)
            ))
            if entity.importance > cfg.features_min_importance:
                graph.add_edge(Edge(
                    source=source_id,
                    target=entity_id,
                    relationship="FEATURES",
                    strength=entity.importance,
                    properties=dict(attribution, importance=entity.importance)
                ))

        quality_relationships = [r for r in relationships if self._passes_relationship_gate(r)]
        quality_relationships = quality_relationships[:cfg.max_relationships_per_source]

        for rel in quality_relationships:
            source_entity_id = resolver.get_or_create_entity(rel.source, idx)
            target_entity_id = resolver.get_or_create_entity(rel.target, idx)
            if not (source_entity_id and target_entity_id):
                continue

            graph.add_edge(Edge(
                source=source_entity_id,
                target=target_entity_id,
                relationship=rel.relation_type,
                strength=rel.confidence,
                properties=dict(
                    attribution,
                    temporal=rel.temporal,
                    context=rel.context,
                    extractionMethod="NLP",
                    sourceType=source.source or "Unknown",
                    **rel.properties
                )
            ))
            for endpoint_id in (source_entity_id, target_entity_id):
                graph.add_edge(Edge(
                    source=source_id,
                    target=endpoint_id,
                    relationship="MENTIONS",
                    strength=cfg.mentions_strength,
                    properties=dict(attribution, relationshipContext=rel.relation_type)
                ))
            graph.add_edge(Edge(
                source=source_id,
                target=source_entity_id,
                relationship="DESCRIBES",
                strength=rel.confidence * cfg.describes_factor,
                properties=dict(attribution, describesRelationship=rel.relation_type)
            ))

        key_entities = [e for e in quality_entities if self._is_key_entity(e)]
        for entity in key_entities[:cfg.max_key_entities_per_source]:
            entity_id = get_entity_id(entity)
            if entity_id and graph.has_node(entity_id):
                graph.add_edge(Edge(
                    source=entity_id,
                    target=event_id,
                    relationship="INFLUENCES",
                    strength=entity.importance,
                    properties={"importance": entity.importance}
                ))

        logger.debug(
            f"Source {idx} ({source_title[:40]!r}): "
            f"{len(quality_entities)}/{len(entities)} entities "
            f"{self.entity_extractor.get_type_counts(quality_entities)}, "
            f"{len(quality_relationships)}/{len(relationships)} relationships"
        )

    def build(self, sources: Any, event: Any) -> CausalGraph:
        """
        Build a causal graph for an event.

        Never raises for empty or low-quality sources: an empty list gives a
        graph holding only the event node.

        Args:
            sources: List of SourceRecord or source dicts
            event: EventDescriptor or event dict

        Returns:
            CausalGraph with metadata and causal chains

        Raises:
            InvalidInputError: If sources or event are not records at all
        """
        source_records = coerce_sources(sources)
        event_descriptor = coerce_event(event)
        event_id = event_descriptor.node_id

        logger.info(f"Building causal graph for {event_id!r} from {len(source_records)} sources")

        graph = CausalGraph()
        resolver = EntityResolver(graph)
        graph.add_node(self._create_event_node(event_descriptor))

        for idx, source in enumerate(source_records):
            self._add_source(graph, resolver, source, idx, event_id)

        enrich_graph(graph, self.config, self.output_dir)
        chains = find_causal_chains(graph, event_id, self.config)

        graph.metadata = GraphMetadata(
            total_sources=len(source_records),
            total_relations=len(graph.edges),
            entity_count=sum(1 for n in graph.nodes.values() if n.type not in STRUCTURAL_NODE_TYPES),
            relationship_types={e.relationship for e in graph.edges},
            causal_chains=chains
        )

        logger.info(
            f"Graph built: {len(graph.nodes)} nodes, {len(graph.edges)} edges, "
            f"{graph.metadata.entity_count} entities, {len(chains)} chains"
        )
        return graph
