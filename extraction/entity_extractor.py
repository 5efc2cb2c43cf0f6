"""
Entity Extractor

Pattern-based named-entity and concept extraction for a single sentence.
No tagger, no model: capitalization- and keyword-anchored regexes, each
tagged with a fixed confidence/importance pair.

Categories:
- Person: titles, "<Name> said", "<Name> will"
- Organization: corporate suffixes, acronyms, "the X government"
- Concept: "<Capitalized> policy/market/election", "rising <noun> rate"
- Statistic: numbers with percent/billion/million/points units
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .text_filters import (
    clean_entity,
    is_meaningful_concept,
    is_random_word,
    is_stop_word,
)

logger = logging.getLogger(__name__)

MIN_CONCEPT_LENGTH = 5
MAX_CONCEPT_LENGTH = 35


@dataclass
class ExtractedEntity:
    """
    An entity mention extracted from text.

    Relationship endpoints use the same type; they carry the resolver's
    default confidence/importance since no pattern scored them directly.
    """
    text: str
    entity_type: str  # Person | Organization | Concept | Statistic | Event
    confidence: float = 0.6
    importance: float = 0.5
    method: str = "NLP"
    value: Optional[float] = None

    def to_dict(self) -> dict:
        data = {
            "text": self.text,
            "type": self.entity_type,
            "confidence": self.confidence,
            "importance": self.importance,
            "method": self.method
        }
        if self.value is not None:
            data["value"] = self.value
        return data


@dataclass(frozen=True)
class EntityPattern:
    """Regex with the fixed scores every match of it receives."""
    regex: re.Pattern
    entity_type: str
    confidence: float
    importance: float


PERSON_PATTERNS: Tuple[EntityPattern, ...] = tuple(
    EntityPattern(re.compile(p), "Person", 0.8, 0.7) for p in (
        r'\b(?:President|CEO|Dr\.|Mr\.|Ms\.|Mrs\.|Senator|Governor|Mayor)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)',
        r'\b([A-Z][a-z]+\s+[A-Z][a-z]+)\s+(?:said|announced|stated|reported)\b',
        r'\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})\s+(?:will|may|could|should)\b',
    )
)

ORGANIZATION_PATTERNS: Tuple[EntityPattern, ...] = tuple(
    EntityPattern(re.compile(p), "Organization", 0.75, 0.6) for p in (
        r'\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\s+(?:Inc\.|Corp\.|LLC|Ltd\.|Company)',
        r'\b([A-Z][A-Z]+)\s+(?:announced|reported|said)\b',
        r'\b(?:the|The)\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\s+(?:government|administration|committee|board)\b',
    )
)

CONCEPT_PATTERNS: Tuple[EntityPattern, ...] = tuple(
    EntityPattern(re.compile(p), "Concept", 0.75, 0.7) for p in (
        r'\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})\s+(?:policy|strategy|plan|program|initiative|regulation|law|bill|act|proposal|reform|legislation)\b',
        r'\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})\s+(?:market|economy|industry|sector|trend|forecast|prediction|analysis|report)\b',
        r'\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,2})\s+(?:election|vote|campaign|candidate|nominee|president|governor|senator)\b',
        r'\b(?:increased?|decreased?|rising|falling|growing|declining|surged?|plunged?)\s+([a-z]{5,}(?:\s+[a-z]{4,})?)\s+(?:rate|level|price|value|demand|supply|support|opposition)',
    )
)

STATISTIC_PATTERN = EntityPattern(
    re.compile(r'\b(\d+(?:\.\d+)?)\s*(?:percent|%|billion|million|thousand|points?)', re.IGNORECASE),
    "Statistic",
    0.9,
    0.4
)


class EntityExtractor:
    """
    Extracts entities from one sentence.

    Patterns run in a fixed order (persons, organizations, concepts,
    statistics) and matches are returned in that order.
    """

    def __init__(
        self,
        min_concept_length: int = MIN_CONCEPT_LENGTH,
        max_concept_length: int = MAX_CONCEPT_LENGTH
    ):
        self.min_concept_length = min_concept_length
        self.max_concept_length = max_concept_length

    def _concept_ok(self, text: str) -> bool:
        return (
            self.min_concept_length <= len(text) <= self.max_concept_length
            and not is_random_word(text)
        )

    def _extract_named(self, sentence: str, patterns: Tuple[EntityPattern, ...]) -> List[ExtractedEntity]:
        entities = []
        for pattern in patterns:
            for match in pattern.regex.finditer(sentence):
                text = clean_entity(match.group(1) or match.group(0))
                if not text:
                    continue
                entities.append(ExtractedEntity(
                    text=text,
                    entity_type=pattern.entity_type,
                    confidence=pattern.confidence,
                    importance=pattern.importance,
                    method="pattern"
                ))
        return entities

    def _extract_concepts(self, sentence: str) -> List[ExtractedEntity]:
        concepts = []
        for pattern in CONCEPT_PATTERNS:
            for match in pattern.regex.finditer(sentence):
                raw = match.group(1) or match.group(0)
                if not (
                    self._concept_ok(raw)
                    and not is_stop_word(raw)
                    and is_meaningful_concept(raw)
                ):
                    continue
                concept = clean_entity(raw)
                if not self._concept_ok(concept):
                    continue
                concepts.append(ExtractedEntity(
                    text=concept,
                    entity_type=pattern.entity_type,
                    confidence=pattern.confidence,
                    importance=pattern.importance,
                    method="pattern"
                ))
        return concepts

    def _extract_statistics(self, sentence: str) -> List[ExtractedEntity]:
        pattern = STATISTIC_PATTERN
        return [
            ExtractedEntity(
                text=match.group(0),
                entity_type=pattern.entity_type,
                confidence=pattern.confidence,
                importance=pattern.importance,
                method="pattern",
                value=float(match.group(1))
            )
            for match in pattern.regex.finditer(sentence)
        ]

    def extract(self, sentence: str) -> List[ExtractedEntity]:
        """
        Extract entities from a sentence.

        Args:
            sentence: One sentence of source text

        Returns:
            Entities in pattern order (unfiltered by the builder's quality gate)
        """
        entities: List[ExtractedEntity] = []
        entities.extend(self._extract_named(sentence, PERSON_PATTERNS))
        entities.extend(self._extract_named(sentence, ORGANIZATION_PATTERNS))
        entities.extend(self._extract_concepts(sentence))
        entities.extend(self._extract_statistics(sentence))

        logger.debug(f"Extracted {len(entities)} entities from sentence: {sentence[:60]!r}")
        return entities

    def get_type_counts(self, entities: List[ExtractedEntity]) -> Dict[str, int]:
        """Count entities per type."""
        counts: Dict[str, int] = {}
        for entity in entities:
            counts[entity.entity_type] = counts.get(entity.entity_type, 0) + 1
        return counts
