"""
Text Filters

Heuristic quality gates shared by entity and relationship extraction.
Rejects filler words, bare pronouns/auxiliaries and other fragments that
regex capture groups tend to pick up.
"""

import re
from typing import List

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "this", "that", "these", "those", "is", "are", "was", "were",
    "be", "been", "being", "have", "has", "had", "do", "does", "did", "will",
    "would", "could", "should", "may", "might", "must", "can"
})

# Generic nouns and fillers never worth a node of their own
RANDOM_WORDS = frozenset({
    "thing", "stuff", "something", "anything", "nothing", "everything",
    "way", "time", "day", "year", "month", "week", "hour", "minute",
    "place", "area", "part", "section", "piece", "bit", "lot",
    "people", "person", "someone", "anyone", "everyone", "nobody",
    "one", "two", "three", "first", "second", "third", "last",
    "more", "most", "less", "least", "many", "much", "few", "little",
    "other", "another", "same", "different", "new", "old", "good", "bad",
    "big", "small", "large", "long", "short", "high", "low",
    "right", "left", "up", "down", "here", "there", "where",
    "then", "now", "when", "before", "after", "during", "while",
    "also", "too", "very", "quite", "really", "just", "only", "even",
    "well", "still", "yet", "already", "again", "once", "twice"
})

MEANINGLESS_PATTERNS: List[re.Pattern] = [
    re.compile(r'^(the|a|an|this|that|these|those)\s+'),
    re.compile(r'\s+(the|a|an|this|that|these|those)$'),
    re.compile(r'^(is|are|was|were|be|been|being|have|has|had|do|does|did|will|would|could|should|may|might|must|can)$'),
    re.compile(r'^(it|they|we|you|he|she|him|her|them|us)$'),
    re.compile(r'^(what|when|where|why|how|which|who)$'),
]

NUMERIC_ONLY = re.compile(r'^[\d\s\-.,%$]+$')
LEADING_ARTICLE = re.compile(r'^(the|a|an)\s+', re.IGNORECASE)


def is_stop_word(word: str) -> bool:
    return word.lower() in STOP_WORDS


def is_meaningful_concept(concept: str) -> bool:
    """
    Check that a phrase names something rather than being grammar glue.

    Rejects leading/trailing articles and demonstratives, bare auxiliaries,
    pronouns and question words. Requires one non-stop-word of 4+ chars.
    """
    text = concept.lower()
    if any(pattern.search(text) for pattern in MEANINGLESS_PATTERNS):
        return False

    words = text.split()
    return any(len(w) >= 4 and not is_stop_word(w) for w in words)


def is_random_word(text: str) -> bool:
    """
    Check if text is a random/irrelevant word.

    Numeric and currency strings are always accepted so statistics survive.

    Args:
        text: Candidate entity text

    Returns:
        True if the text should be rejected
    """
    if not text or len(text) < 3:
        return True

    lower_text = text.lower().strip()

    if lower_text in RANDOM_WORDS:
        return True

    if len(lower_text) < 5 and is_stop_word(lower_text):
        return True

    if NUMERIC_ONLY.match(lower_text):
        return False

    meaningful_count = sum(
        1 for w in lower_text.split()
        if len(w) >= 5 and not is_stop_word(w) and w not in RANDOM_WORDS
    )
    return meaningful_count == 0


def clean_entity(text: str) -> str:
    """Trim, strip a leading article and collapse whitespace (max 100 chars)."""
    if not text:
        return ""
    cleaned = LEADING_ARTICLE.sub("", text.strip())
    return re.sub(r'\s+', ' ', cleaned)[:100]


def passes_phrase_gates(text: str, min_length: int, max_length: int) -> bool:
    """Length, random-word and meaningful-concept gates for a captured phrase."""
    return (
        bool(text)
        and min_length <= len(text) <= max_length
        and not is_random_word(text)
        and is_meaningful_concept(text)
    )
