"""
Text Segmenter

Splits raw source text into sentences on terminal punctuation.
"""

import re
from typing import Iterator

SENTENCE_BOUNDARY = re.compile(r'(?<=[.!?])\s+')
MIN_SENTENCE_LENGTH = 10


def split_into_sentences(text: str) -> Iterator[str]:
    """
    Yield sentences from text.

    Splits after '.', '!' or '?' followed by whitespace, trims each piece
    and skips fragments of MIN_SENTENCE_LENGTH characters or fewer.

    Args:
        text: Raw text

    Yields:
        Sentence strings in document order
    """
    if not text:
        return
    for piece in SENTENCE_BOUNDARY.split(text):
        sentence = piece.strip()
        if len(sentence) > MIN_SENTENCE_LENGTH:
            yield sentence
