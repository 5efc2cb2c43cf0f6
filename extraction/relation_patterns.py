"""
Relationship Pattern Library

Static tables driving relationship extraction:
- RELATIONSHIP_TYPES: the full relation vocabulary
- GENERAL_PATTERNS: (regex, relation type, base confidence) records
- TEMPORAL_PATTERNS: explicit sequencing language
- QUANTITATIVE_PATTERNS: percentage changes

Every general pattern captures a left-hand phrase (group 1) and, where the
pattern has one, a right-hand phrase (group 2). Right-hand phrases run to
the end of the clause (next ',', '.' or ';').
"""

import re
from dataclasses import dataclass
from typing import Tuple

RELATIONSHIP_TYPES: Tuple[str, ...] = (
    # Causal
    "CAUSES", "LEADS_TO", "RESULTS_IN", "TRIGGERS", "BRINGS_ABOUT", "GIVES_RISE_TO",
    "PRODUCES", "CREATES", "GENERATES", "INDUCES", "STIMULATES", "PROMPTS",
    "DRIVES", "MOTIVATES", "COMPELS", "FORCES", "ENDS_IN", "CULMINATES_IN",
    "TERMINATES_IN", "CAUSED_BY", "RESULT_OF", "OUTCOME_OF", "CONSEQUENCE_OF",
    "EFFECT_OF", "DUE_TO", "BECAUSE_OF", "OWING_TO", "THANKS_TO", "ATTRIBUTABLE_TO",
    # Influence
    "INFLUENCES", "AFFECTS", "MODERATES", "INFLUENCED_BY", "SHAPED_BY", "FORMED_BY",
    "MOLDED_BY", "SCULPTED_BY", "CONTROLLED_BY", "GOVERNED_BY", "REGULATED_BY",
    "MANAGED_BY", "ADMINISTERED_BY",
    # Magnitude
    "ENHANCES", "IMPROVES", "STRENGTHENS", "BOOSTS", "AMPLIFIES", "INCREASES",
    "RAISES", "ELEVATES", "AUGMENTS", "EXPANDS", "REDUCES", "DECREASES",
    "DIMINISHES", "LOWERS", "MINIMIZES", "WEAKENS",
    # Temporal
    "PRECEDES", "FOLLOWS", "SUCCEEDS", "COMES_AFTER", "OCCURS_AFTER", "HAPPENS_AFTER",
    "PREDATES", "ANTECEDES", "COMES_BEFORE", "OCCURS_BEFORE", "HAPPENS_BEFORE",
    "TEMPORAL_BEFORE", "TEMPORAL_AFTER", "TEMPORAL_DURING", "TEMPORAL_OVERLAPS",
    "TEMPORAL_CONTAINS",
    # Association
    "CORRELATES_WITH", "ASSOCIATED_WITH", "RELATES_TO", "RELATED_TO", "LINKED_WITH",
    "CONNECTED_TO", "TIED_TO", "BOUND_TO", "ATTACHED_TO", "COUPLED_WITH",
    "PAIRED_WITH", "JOINED_WITH", "SIMILAR_TO", "ANALOGOUS_TO", "COMPARABLE_TO",
    "EQUIVALENT_TO", "PARALLEL_TO", "DIFFERENT_FROM", "DISTINCT_FROM",
    "SEPARATE_FROM", "DIVERGENT_FROM", "OPPOSITE_TO",
    # Dependency
    "DEPENDS_ON", "REQUIRES", "NECESSITATES", "DEMANDS", "ENTAILS", "INVOLVES",
    "BASED_ON", "FOUNDED_ON", "BUILT_ON", "ESTABLISHED_ON", "GROUNDED_IN",
    "ROOTED_IN", "ANCHORED_IN", "ORIGINATES_FROM", "ORIGINATES_IN", "ARISES_FROM",
    "EMERGES_FROM", "STEMS_FROM", "DERIVES_FROM", "BEGINS_WITH", "STARTS_WITH",
    "INITIATES_WITH", "COMMENCES_WITH",
    # Prevention
    "PREVENTS", "BLOCKS", "HINDERS", "OBSTRUCTS", "IMPAIRS", "ELIMINATES",
    "REMOVES", "ERADICATES", "ABOLISHES", "DESTROYS", "OPPOSES", "RESISTS",
    "COUNTERS", "COMBATS", "FIGHTS", "REFUTES", "DISPROVES", "CHALLENGES",
    "QUESTIONS", "DOUBTS", "CONTRADICTS",
    # Support
    "ENABLES", "SUPPORTS", "REINFORCES", "CONFIRMS", "VALIDATES", "VERIFIES",
    "SUBSTANTIATES", "CORROBORATES", "COMPLEMENTS", "SUPPLEMENTS", "EXTENDS",
    # Predictive / evidential
    "PREDICTS", "FORECASTS", "PROJECTS", "ESTIMATES", "CALCULATES", "MEASURES",
    "QUANTIFIES", "SUGGESTS", "INDICATES", "SIGNALS", "POINTS_TO", "HINTS_AT",
    "IMPLIES", "MEANS", "REVEALS", "SHOWS", "DEMONSTRATES", "PROVES", "ESTABLISHES",
    "EVALUATES", "ASSESSES", "ANALYZES", "EXAMINES", "STUDIES", "INVESTIGATES",
    "RESEARCHES", "EXPLORES", "PROBES",
    # Compositional
    "HAS", "CONTAINS", "INCLUDES", "CONSISTS_OF", "COMPRISES", "FEATURES",
    "CHARACTERIZED_BY", "DEFINED_BY", "OWNED_BY", "BELONGS_TO", "PART_OF",
    "MEMBER_OF", "COMPONENT_OF", "ELEMENT_OF", "ASPECT_OF", "FACET_OF",
    "FEATURE_OF", "ATTRIBUTE_OF",
    # Transformative
    "TRANSFORMS", "CONVERTS", "CHANGES", "ALTERS", "MODIFIES", "REPLACES",
    "SUBSTITUTES", "SUPERSEDES", "TAKES_OVER", "MAINTAINS", "PRESERVES", "KEEPS",
    "RETAINS", "SUSTAINS",
    # Competitive / cooperative
    "COMPETES_WITH", "RIVALS", "VIES_WITH", "CONTENDS_WITH", "STRUGGLES_WITH",
    "COOPERATES_WITH", "COLLABORATES_WITH", "WORKS_WITH", "PARTNERS_WITH",
    "ALLIES_WITH",
    # Spatial
    "SPATIAL_NEAR", "SPATIAL_FAR", "SPATIAL_CONTAINS", "SPATIAL_WITHIN",
    "SPATIAL_OVERLAPS", "LOCATED_IN", "POSITIONED_IN", "PLACED_IN", "SET_IN",
    "FIXED_IN", "EMBEDDED_IN", "IMMERSED_IN", "SITUATED_IN",
    # Provenance (graph builder)
    "INFORMS", "MENTIONS", "DESCRIBES",
)

# Edge types followed when searching for causal chains
CAUSAL_CHAIN_RELATIONSHIPS = frozenset({"CAUSES", "INFLUENCES", "AFFECTS", "PREDICTS"})

# Edge types composed by transitive enrichment
TRANSITIVE_RELATIONSHIPS = frozenset({"CAUSES", "INFLUENCES"})

CLAUSE = r"[^,.;]"
CLAUSE_END = r"(?=[,.;]|$)"
# Left-hand phrases start at a clause boundary; any match inside a clause
# has one starting there
CLAUSE_START = r"(?:^|(?<=[,.;]))\s*"
# Quantitative matches end at '%', so the next search may start right there
CHANGE_START = r"(?:^|(?<=[,.;%]))\s*"


@dataclass(frozen=True)
class RelationPattern:
    """A compiled relationship pattern with its fixed base confidence."""
    regex: re.Pattern
    relation_type: str
    confidence: float


def _binary(keywords: str, relation_type: str, confidence: float) -> RelationPattern:
    """Build '<phrase> <keyword> <phrase>' with a clause-terminated target."""
    regex = re.compile(
        rf"{CLAUSE_START}({CLAUSE}+?)\s+(?:{keywords})\s+({CLAUSE}+)",
        re.IGNORECASE
    )
    return RelationPattern(regex, relation_type, confidence)


GENERAL_PATTERNS: Tuple[RelationPattern, ...] = (
    # Causal
    _binary(r"causes?|leads?\s+to|results?\s+in|triggers?|brings?\s+about", "CAUSES", 0.85),
    RelationPattern(
        re.compile(
            rf"\b(?:because(?:\s+of)?|due\s+to|as\s+a\s+result\s+of|caused\s+by)\s+({CLAUSE}+?)"
            rf"(?:\s+(?:will|may|could|leads?\s+to)\s+({CLAUSE}+))?{CLAUSE_END}",
            re.IGNORECASE
        ),
        "CAUSES",
        0.8
    ),
    _binary(r"gives?\s+rise\s+to|produces?|creates?|generates?", "GIVES_RISE_TO", 0.8),
    _binary(r"induces?|stimulates?|prompts?|drives?", "INDUCES", 0.75),
    _binary(r"motivates?|compels?|forces?", "DRIVES", 0.75),
    _binary(r"results?\s+in|culminates?\s+in|ends?\s+in", "RESULTS_IN", 0.8),
    _binary(r"leads?\s+to|brings?\s+about|gives?\s+way\s+to", "LEADS_TO", 0.8),

    # Influence
    _binary(r"influences?|affects?|impacts?|shapes?", "INFLUENCES", 0.75),
    _binary(r"plays?\s+a\s+role\s+in|contributes?\s+to|affects?", "INFLUENCES", 0.7),
    _binary(r"shapes?|molds?|forms?|sculpts?", "SHAPED_BY", 0.7),
    _binary(r"controls?|governs?|regulates?|manages?", "CONTROLLED_BY", 0.8),
    _binary(r"influenced\s+by|shaped\s+by|formed\s+by", "INFLUENCED_BY", 0.75),
    _binary(r"moderates?|mediates?|adjusts?", "MODERATES", 0.7),

    # Affects / magnitude
    _binary(r"affects?|impacts?|touches?|reaches?", "AFFECTS", 0.75),
    _binary(r"enhances?|improves?|strengthens?|boosts?", "ENHANCES", 0.8),
    _binary(r"increases?|raises?|elevates?|augments?", "INCREASES", 0.8),
    _binary(r"decreases?|reduces?|lowers?|diminishes?", "REDUCES", 0.8),
    _binary(r"weakens?|undermines?|sabotages?", "WEAKENS", 0.75),

    # Temporal
    _binary(r"before|prior\s+to|precedes?|earlier\s+than", "PRECEDES", 0.8),
    _binary(r"after|following|subsequent\s+to|comes?\s+after", "TEMPORAL_AFTER", 0.8),
    _binary(r"then|next|afterwards?|subsequently", "PRECEDES", 0.75),
    _binary(r"predates?|antecedes?|comes?\s+before", "PREDATES", 0.8),
    _binary(r"succeeds?|follows?|comes?\s+after", "SUCCEEDS", 0.75),
    _binary(r"during|while|throughout|over\s+the\s+course\s+of", "TEMPORAL_DURING", 0.7),

    # Association
    _binary(r"correlates?\s+with|is\s+associated\s+with|linked\s+to|related\s+to", "CORRELATES_WITH", 0.6),
    _binary(r"linked\s+with|tied\s+to|bound\s+to|attached\s+to", "LINKED_WITH", 0.65),
    _binary(r"coupled\s+with|paired\s+with|joined\s+with", "COUPLED_WITH", 0.65),
    _binary(r"similar\s+to|analogous\s+to|comparable\s+to", "SIMILAR_TO", 0.7),
    _binary(r"parallel\s+to|equivalent\s+to|equal\s+to", "EQUIVALENT_TO", 0.75),
    _binary(r"different\s+from|distinct\s+from|separate\s+from", "DIFFERENT_FROM", 0.7),
    _binary(r"opposite\s+to|contrary\s+to|divergent\s+from", "OPPOSITE_TO", 0.75),

    # Dependency
    _binary(r"depends?\s+on|relies?\s+on|requires?", "DEPENDS_ON", 0.75),
    _binary(r"necessitates?|demands?|entails?|involves?", "NECESSITATES", 0.8),
    _binary(r"requires?|needs?|calls?\s+for", "REQUIRES", 0.8),
    _binary(r"based\s+on|founded\s+on|built\s+on", "BASED_ON", 0.75),
    _binary(r"rooted\s+in|anchored\s+in|grounded\s+in", "ROOTED_IN", 0.75),
    _binary(r"originates?\s+from|arises?\s+from|stems?\s+from", "ORIGINATES_FROM", 0.75),

    # Prevention
    _binary(r"prevents?|blocks?|stops?|hinders?|reduces?", "PREVENTS", 0.7),
    _binary(r"obstructs?|impedes?|impaired?", "BLOCKS", 0.75),
    _binary(r"eliminates?|removes?|eradicates?", "ELIMINATES", 0.8),
    _binary(r"destroys?|abolishes?|nullifies?", "DESTROYS", 0.8),
    _binary(r"opposes?|resists?|counters?|combats?", "OPPOSES", 0.75),
    _binary(r"refutes?|disproves?|challenges?", "REFUTES", 0.75),

    # Support
    _binary(r"enables?|allows?|permits?|facilitates?", "ENABLES", 0.8),
    _binary(r"supports?|backs?|endorses?|advocates?", "SUPPORTS", 0.75),
    _binary(r"reinforces?|strengthens?|bolsters?", "REINFORCES", 0.8),
    _binary(r"confirms?|validates?|verifies?", "CONFIRMS", 0.8),
    _binary(r"complements?|supplements?|augments?", "COMPLEMENTS", 0.75),
    _binary(r"cooperates?\s+with|collaborates?\s+with|works?\s+with", "COOPERATES_WITH", 0.75),

    # Predictive
    _binary(r"predicts?|forecasts?|suggests?|indicates?", "PREDICTS", 0.7),
    _binary(r"projects?|estimates?|calculates?|measures?", "FORECASTS", 0.75),
    _binary(r"signals?|points?\s+to|hints?\s+at", "SIGNALS", 0.7),
    _binary(r"reveals?|shows?|demonstrates?", "REVEALS", 0.75),
    _binary(r"proves?|establishes?|confirms?", "PROVES", 0.8),

    # Compositional
    _binary(r"has|contains?|includes?|features?", "HAS", 0.7),
    _binary(r"consists?\s+of|comprises?|made\s+up\s+of", "CONSISTS_OF", 0.75),
    _binary(r"characterized\s+by|defined\s+by|marked\s+by", "CHARACTERIZED_BY", 0.7),
    _binary(r"owned\s+by|belongs?\s+to|part\s+of", "BELONGS_TO", 0.75),
    _binary(r"member\s+of|component\s+of|element\s+of", "PART_OF", 0.75),
    _binary(r"aspect\s+of|facet\s+of|feature\s+of", "ASPECT_OF", 0.7),

    # Transformative
    _binary(r"transforms?|converts?|changes?|alters?", "TRANSFORMS", 0.75),
    _binary(r"replaces?|substitutes?|supersedes?", "REPLACES", 0.8),
    _binary(r"maintains?|preserves?|keeps?|retains?", "MAINTAINS", 0.75),

    # Competitive / cooperative
    _binary(r"competes?\s+with|rivals?|vies?\s+with", "COMPETES_WITH", 0.75),
    _binary(r"struggles?\s+with|contends?\s+with|fights?\s+with", "STRUGGLES_WITH", 0.7),
    _binary(r"partners?\s+with|allies?\s+with", "PARTNERS_WITH", 0.75),

    # Spatial
    _binary(r"near|close\s+to|adjacent\s+to", "SPATIAL_NEAR", 0.6),
    _binary(r"far\s+from|distant\s+from|away\s+from", "SPATIAL_FAR", 0.6),
    _binary(r"within|inside|contained\s+in", "SPATIAL_WITHIN", 0.7),
    _binary(r"located\s+in|positioned\s+in|situated\s+in", "LOCATED_IN", 0.7),

    # Evaluative
    _binary(r"implies?|suggests?|indicates?|hints?\s+at", "IMPLIES", 0.7),
    _binary(r"means?|signifies?|represents?", "MEANS", 0.75),
    _binary(r"studies?|investigates?|researches?", "STUDIES", 0.7),
    _binary(r"evaluates?|assesses?|analyzes?", "EVALUATES", 0.75),
)

TEMPORAL_PATTERNS: Tuple[RelationPattern, ...] = (
    RelationPattern(
        re.compile(
            rf"\b(?:after|following|subsequent\s+to)\s+({CLAUSE}+?)"
            rf"(?:\s+comes?\s+({CLAUSE}+))?{CLAUSE_END}",
            re.IGNORECASE
        ),
        "PRECEDES",
        0.8
    ),
    RelationPattern(
        re.compile(rf"{CLAUSE_START}({CLAUSE}+?)\s+(?:then|next|afterwards?)\s+({CLAUSE}+)", re.IGNORECASE),
        "PRECEDES",
        0.75
    ),
)

QUANTITATIVE_PATTERNS: Tuple[RelationPattern, ...] = (
    RelationPattern(
        re.compile(
            rf"{CHANGE_START}({CLAUSE}+?)\s+(increased?|decreased?|rose|fell|grew|dropped)\s+"
            r"(?:by\s+)?(\d+(?:\.\d+)?)\s*%",
            re.IGNORECASE
        ),
        "AFFECTS",
        0.9
    ),
)

DECREASE_VERBS = frozenset({"decrease", "decreased", "fell", "dropped"})

# Effect inference cues, tried in order on the text following the cause
EFFECT_CUES: Tuple[re.Pattern, ...] = (
    re.compile(rf"(?:will|may|could|leads?\s+to|results?\s+in)\s+({CLAUSE}+)", re.IGNORECASE),
    re.compile(rf"(?:outcome|result|consequence|impact)\s+({CLAUSE}+)", re.IGNORECASE),
)

DEFAULT_EFFECT = "outcome"
DEFAULT_SUBSEQUENT = "subsequent event"

TENSE_KEYWORDS = {
    "past": ("was", "were", "had", "occurred", "happened", "previous"),
    "present": ("is", "are", "current", "now", "ongoing"),
    "future": ("will", "may", "could", "might", "expected", "forecast", "predicted"),
}
