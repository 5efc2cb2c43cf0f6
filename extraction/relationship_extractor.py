"""
Relationship Extractor

Extracts typed relationships from a single sentence in three passes:
1. General patterns (causal, influence, dependency, predictive, ...)
2. Temporal sequencing ("after X", "X then Y") -> PRECEDES
3. Quantitative changes ("X increased by 5%") -> AFFECTS

Both endpoints of every candidate must pass the phrase gates (length,
random-word, meaningful-concept); otherwise the candidate is dropped.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .entity_extractor import ExtractedEntity
from .relation_patterns import (
    DECREASE_VERBS,
    DEFAULT_EFFECT,
    DEFAULT_SUBSEQUENT,
    EFFECT_CUES,
    GENERAL_PATTERNS,
    QUANTITATIVE_PATTERNS,
    TEMPORAL_PATTERNS,
    TENSE_KEYWORDS,
    RelationPattern,
)
from .text_filters import clean_entity, passes_phrase_gates

logger = logging.getLogger(__name__)

MIN_ENDPOINT_LENGTH = 5
MAX_ENDPOINT_LENGTH = 35
CONTEXT_LENGTH = 100
TEMPORAL_WINDOW = 200


@dataclass
class ExtractedRelationship:
    """A directed, typed relationship between two extracted phrases."""
    source: ExtractedEntity
    target: ExtractedEntity
    relation_type: str
    confidence: float
    temporal: str  # past | present | future | unknown
    context: str
    source_idx: int = 0
    sentence_idx: int = 0
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "source": self.source.to_dict(),
            "target": self.target.to_dict(),
            "type": self.relation_type,
            "confidence": self.confidence,
            "temporal": self.temporal,
            "context": self.context,
            "sourceIdx": self.source_idx,
            "sentenceIdx": self.sentence_idx,
            "properties": self.properties
        }


def extract_temporal_info(sentence: str, match: re.Match) -> str:
    """
    Infer tense from keywords in the match and the text following it.

    Args:
        sentence: Full sentence
        match: Pattern match within the sentence

    Returns:
        'past', 'present', 'future' or 'unknown'
    """
    window = f"{match.group(0)} {sentence[match.end():match.end() + TEMPORAL_WINDOW]}".lower()
    words = set(re.findall(r"[a-z]+", window))
    for tense, keywords in TENSE_KEYWORDS.items():
        if any(word in words for word in keywords):
            return tense
    return "unknown"


def infer_effect(cause: str, sentence: str) -> str:
    """
    Synthesize a target phrase from outcome cues after the cause.

    Falls back to the literal 'outcome'.
    """
    idx = sentence.find(cause)
    after_cause = sentence[idx + len(cause):] if idx >= 0 else sentence
    for cue in EFFECT_CUES:
        match = cue.search(after_cause)
        if match and match.group(1):
            return clean_entity(match.group(1))
    return DEFAULT_EFFECT


class RelationshipExtractor:
    """
    Extracts relationships from one sentence using the static pattern tables.
    """

    def __init__(
        self,
        general_patterns: Tuple[RelationPattern, ...] = GENERAL_PATTERNS,
        min_endpoint_length: int = MIN_ENDPOINT_LENGTH,
        max_endpoint_length: int = MAX_ENDPOINT_LENGTH
    ):
        self.general_patterns = general_patterns
        self.min_endpoint_length = min_endpoint_length
        self.max_endpoint_length = max_endpoint_length

    def _endpoints_ok(self, source: str, target: str) -> bool:
        return (
            passes_phrase_gates(source, self.min_endpoint_length, self.max_endpoint_length)
            and passes_phrase_gates(target, self.min_endpoint_length, self.max_endpoint_length)
        )

    def _build(
        self,
        source_text: str,
        target_text: str,
        source_type: str,
        target_type: str,
        pattern: RelationPattern,
        temporal: str,
        sentence: str,
        source_idx: int,
        sentence_idx: int,
        properties: Optional[Dict[str, Any]] = None
    ) -> Optional[ExtractedRelationship]:
        if not self._endpoints_ok(source_text, target_text):
            return None
        return ExtractedRelationship(
            source=ExtractedEntity(text=source_text, entity_type=source_type),
            target=ExtractedEntity(text=target_text, entity_type=target_type),
            relation_type=pattern.relation_type,
            confidence=pattern.confidence,
            temporal=temporal,
            context=sentence[:CONTEXT_LENGTH],
            source_idx=source_idx,
            sentence_idx=sentence_idx,
            properties=properties or {}
        )

    def extract_general(self, sentence: str, source_idx: int = 0, sentence_idx: int = 0) -> List[ExtractedRelationship]:
        """Run the general pattern table over a sentence."""
        relationships = []
        for pattern in self.general_patterns:
            for match in pattern.regex.finditer(sentence):
                source = clean_entity(match.group(1))
                if match.lastindex and match.lastindex >= 2 and match.group(2):
                    target = clean_entity(match.group(2))
                else:
                    target = infer_effect(source, sentence)

                rel = self._build(
                    source, target, "Concept", "Concept", pattern,
                    extract_temporal_info(sentence, match),
                    sentence, source_idx, sentence_idx
                )
                if rel:
                    relationships.append(rel)
        return relationships

    def extract_temporal(self, sentence: str, source_idx: int = 0, sentence_idx: int = 0) -> List[ExtractedRelationship]:
        """Emit PRECEDES edges for explicit sequencing language."""
        relationships = []
        for pattern in TEMPORAL_PATTERNS:
            for match in pattern.regex.finditer(sentence):
                source = clean_entity(match.group(1))
                target = clean_entity(match.group(2) or DEFAULT_SUBSEQUENT)
                rel = self._build(
                    source, target, "Event", "Event", pattern,
                    extract_temporal_info(sentence, match),
                    sentence, source_idx, sentence_idx
                )
                if rel:
                    relationships.append(rel)
        return relationships

    def extract_quantitative(self, sentence: str, source_idx: int = 0, sentence_idx: int = 0) -> List[ExtractedRelationship]:
        """Emit AFFECTS edges from an entity to a synthesized percentage-change label."""
        relationships = []
        for pattern in QUANTITATIVE_PATTERNS:
            for match in pattern.regex.finditer(sentence):
                entity = clean_entity(match.group(1))
                amount = float(match.group(3))
                change = -amount if match.group(2).lower() in DECREASE_VERBS else amount
                direction = "decrease" if change < 0 else "increase"
                label = f"{direction} of {abs(change):g}%"

                rel = self._build(
                    entity, label, "Concept", "Statistic", pattern, "past",
                    sentence, source_idx, sentence_idx,
                    properties={"change": change}
                )
                if rel:
                    relationships.append(rel)
        return relationships

    def extract(self, sentence: str, source_idx: int = 0, sentence_idx: int = 0) -> List[ExtractedRelationship]:
        """
        Extract relationships from a sentence.

        Args:
            sentence: One sentence of source text
            source_idx: Index of the source the sentence came from
            sentence_idx: Index of the sentence within the source

        Returns:
            General, then temporal, then quantitative relationships
        """
        relationships = self.extract_general(sentence, source_idx, sentence_idx)
        relationships.extend(self.extract_temporal(sentence, source_idx, sentence_idx))
        relationships.extend(self.extract_quantitative(sentence, source_idx, sentence_idx))

        if relationships:
            logger.debug(
                f"Source {source_idx} sentence {sentence_idx}: "
                f"{len(relationships)} relationships"
            )
        return relationships
