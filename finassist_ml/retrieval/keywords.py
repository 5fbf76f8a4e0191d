"""Keyword extraction for snapshot documents."""

import re
from collections import Counter

STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "been", "be",
        "have", "has", "had", "do", "does", "did", "will", "would", "should",
        "could", "may", "might", "can", "this", "that", "these", "those",
    }
)  # fmt: skip

_NON_WORD = re.compile(r"[^\w\s]")


def extract_keywords(text: str, max_keywords: int = 5) -> list[str]:
    """Most frequent informative words (longer than 3 chars, no stop words).

    Ties keep first-occurrence order.
    """
    words = [
        word
        for word in _NON_WORD.sub("", (text or "").lower()).split()
        if len(word) > 3 and word not in STOP_WORDS
    ]
    return [word for word, _ in Counter(words).most_common(max_keywords)]
