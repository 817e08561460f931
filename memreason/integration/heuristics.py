"""
Text-overlap heuristics for support and contradiction detection.

These are approximations: negation is detected by substring, not meaning.
"""

import re
from typing import Set

SUPPORT_NEGATIONS = ("not", "never", "impossible")
CONTRADICTION_NEGATIONS = ("not", "never", "impossible", "false", "incorrect")

_NEGATION_WORD_PATTERN = re.compile(r"\b(not|never|impossible|false|incorrect)\b")


def _tokens(text: str) -> Set[str]:
    return set(text.lower().split())


def determine_support(memory_content: str, statement: str) -> float:
    """
    Score how much a memory supports a statement.

    Returns 1 or 0.5 for support, 0 for none. If the memory contains a
    negation substring anywhere, the negated overlap ratio is returned instead.
    """
    statement_words = _tokens(statement)
    if not statement_words:
        return 0.0

    overlap = _tokens(memory_content) & statement_words
    overlap_ratio = len(overlap) / len(statement_words)

    if any(word in memory_content for word in SUPPORT_NEGATIONS):
        return -overlap_ratio

    if overlap_ratio > 0.3:
        return 1.0
    if overlap_ratio > 0.1:
        return 0.5
    return 0.0


def calculate_similarity(text1: str, text2: str) -> float:
    """Jaccard similarity of whitespace tokens."""
    words1 = set(text1.split())
    words2 = set(text2.split())
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


def detect_contradiction(statement1: str, statement2: str) -> bool:
    """True when exactly one text is negated and the rest of them is near-identical."""
    lower1 = statement1.lower()
    lower2 = statement2.lower()

    has_negation1 = any(word in lower1 for word in CONTRADICTION_NEGATIONS)
    has_negation2 = any(word in lower2 for word in CONTRADICTION_NEGATIONS)
    if has_negation1 == has_negation2:
        return False

    clean1 = _NEGATION_WORD_PATTERN.sub("", lower1).strip()
    clean2 = _NEGATION_WORD_PATTERN.sub("", lower2).strip()
    return calculate_similarity(clean1, clean2) > 0.7
