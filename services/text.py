"""
Significant-word extraction and fuzzy textual identity.
"""

import re
from typing import List, Optional, Sequence, Tuple, TypeVar

from config import SIMILARITY_THRESHOLD

T = TypeVar("T")

STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "not", "no", "without", "before", "after", "about", "that", "this", "it",
])

_NON_WORD = re.compile(r"[^a-z0-9\s]")


def significant_words(text: str) -> List[str]:
    """
    Lower-cased tokens of `text` with punctuation, short tokens (<= 2 chars)
    and stop words removed. Order and repeats are preserved.
    """
    cleaned = _NON_WORD.sub("", text.lower())
    return [w for w in cleaned.split() if len(w) > 2 and w not in STOP_WORDS]


def _contained(words: List[str], others: List[str]) -> int:
    """Count tokens of `words` (with repeats) that occur anywhere in `others`."""
    lookup = set(others)
    return sum(1 for w in words if w in lookup)


def is_similar(text_a: str, text_b: str) -> bool:
    """
    Two texts denote the same concept when the significant words of either
    side are at least 80% contained in the other side.
    An empty signature never matches anything.
    """
    words_a = significant_words(text_a)
    words_b = significant_words(text_b)
    if not words_a or not words_b:
        return False

    ratio_a = _contained(words_a, words_b) / len(words_a)
    ratio_b = _contained(words_b, words_a) / len(words_b)
    return ratio_a >= SIMILARITY_THRESHOLD or ratio_b >= SIMILARITY_THRESHOLD


def find_best_match(title: str, candidates: Sequence[Tuple[str, T]]) -> Optional[T]:
    """
    Pick the candidate item whose text shares the most significant words with
    `title`. Candidates are (text, item) pairs; the first one wins ties.
    Returns None when nothing shares a word.
    """
    title_words = significant_words(title)
    best_item = None
    best_score = 0

    for text, item in candidates:
        score = _contained(title_words, significant_words(text))
        if score > best_score:
            best_score = score
            best_item = item

    return best_item
