"""
Engine Configuration

Named calibration constants for extraction gates, graph construction,
enrichment, chain scoring and prediction. Defaults reproduce the
calibrated values; overrides can be loaded from a JSON file.

Note the entity gate (confidence >= 0.7, importance >= 0.6) and the
relationship gate (confidence >= 0.75) are asymmetric. They are kept as-is.
"""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


# Entity quality gate
ENTITY_MIN_CONFIDENCE = 0.7
ENTITY_MIN_IMPORTANCE = 0.6
ENTITY_MIN_LENGTH = 5
ENTITY_MAX_LENGTH = 40
MAX_ENTITIES_PER_SOURCE = 5

# Relationship quality gate
RELATIONSHIP_MIN_CONFIDENCE = 0.75
MAX_RELATIONSHIPS_PER_SOURCE = 3

# Entity -> event INFLUENCES edges
KEY_ENTITY_MIN_IMPORTANCE = 0.75
KEY_ENTITY_MIN_CONFIDENCE = 0.75
MAX_KEY_ENTITIES_PER_SOURCE = 2

# Edge strengths
FEATURES_MIN_IMPORTANCE = 0.7
ENTITY_INFORMS_FACTOR = 0.9
MENTIONS_STRENGTH = 0.7
DESCRIBES_FACTOR = 0.8

# Enrichment and chains
TRANSITIVE_DECAY = 0.8
MISSING_EDGE_PENALTY = 0.3
LENGTH_DECAY = 0.9
MAX_CAUSAL_CHAINS = 10

# Prediction
MIN_PROBABILITY = 0.1
MAX_PROBABILITY = 0.9
CI_HALF_WIDTH = 0.15
HIGH_CONFIDENCE_CUTOFF = 0.7
MEDIUM_CONFIDENCE_CUTOFF = 0.5
MAX_PREDICTIONS = 2
MAX_REASONING_SOURCES = 2


@dataclass
class EngineConfig:
    """
    All tunable constants of the engine in one place.

    Build with defaults, or via from_dict/load_config to override a subset.
    """
    entity_min_confidence: float = ENTITY_MIN_CONFIDENCE
    entity_min_importance: float = ENTITY_MIN_IMPORTANCE
    entity_min_length: int = ENTITY_MIN_LENGTH
    entity_max_length: int = ENTITY_MAX_LENGTH
    max_entities_per_source: int = MAX_ENTITIES_PER_SOURCE

    relationship_min_confidence: float = RELATIONSHIP_MIN_CONFIDENCE
    max_relationships_per_source: int = MAX_RELATIONSHIPS_PER_SOURCE

    key_entity_min_importance: float = KEY_ENTITY_MIN_IMPORTANCE
    key_entity_min_confidence: float = KEY_ENTITY_MIN_CONFIDENCE
    max_key_entities_per_source: int = MAX_KEY_ENTITIES_PER_SOURCE

    features_min_importance: float = FEATURES_MIN_IMPORTANCE
    entity_informs_factor: float = ENTITY_INFORMS_FACTOR
    mentions_strength: float = MENTIONS_STRENGTH
    describes_factor: float = DESCRIBES_FACTOR

    transitive_decay: float = TRANSITIVE_DECAY
    missing_edge_penalty: float = MISSING_EDGE_PENALTY
    length_decay: float = LENGTH_DECAY
    max_causal_chains: int = MAX_CAUSAL_CHAINS

    min_probability: float = MIN_PROBABILITY
    max_probability: float = MAX_PROBABILITY
    ci_half_width: float = CI_HALF_WIDTH
    high_confidence_cutoff: float = HIGH_CONFIDENCE_CUTOFF
    medium_confidence_cutoff: float = MEDIUM_CONFIDENCE_CUTOFF
    max_predictions: int = MAX_PREDICTIONS
    max_reasoning_sources: int = MAX_REASONING_SOURCES

    def __post_init__(self):
        if self.min_probability > self.max_probability:
            raise ValueError(
                f"min_probability ({self.min_probability}) must not exceed "
                f"max_probability ({self.max_probability})"
            )

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {unknown}")
        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(config_path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """
    Load engine configuration from a JSON file.

    Args:
        config_path: Path to a JSON object of overrides. None gives defaults.

    Returns:
        EngineConfig
    """
    if config_path is None:
        return EngineConfig()

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Engine configuration not found: {path}")

    logger.debug(f"Loading engine config from: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    return EngineConfig.from_dict(data)
