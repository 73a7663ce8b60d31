"""Normalized edit-distance similarity between tokens."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def similarity(first: str, second: str) -> float:
    """Return ``1 - levenshtein(first, second) / max(len)`` in [0.0, 1.0].

    Symmetric; identical strings (including two empty strings) score 1.0.
    """
    longest = max(len(first), len(second))
    if longest == 0:
        return 1.0
    distance = Levenshtein.distance(first, second)
    return max(0.0, 1.0 - distance / longest)


def fuzzy_matches(
    token: str,
    target: str,
    threshold: float,
    case_sensitive: bool = False,
) -> tuple[bool, float]:
    """Check whether ``token`` fuzzy-matches ``target`` at ``threshold``.

    A threshold of 0 means plain equality (case-aware per ``case_sensitive``),
    identical to non-fuzzy matching. Returns (is_match, similarity_score).
    """
    if not case_sensitive:
        token = token.lower()
        target = target.lower()

    if threshold <= 0:
        is_equal = token == target
        return is_equal, 1.0 if is_equal else similarity(token, target)

    score = similarity(token, target)
    return score >= threshold, score
