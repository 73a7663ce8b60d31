"""Simple literal suffix variants of a keyword."""

from __future__ import annotations

VARIANT_SUFFIXES: tuple[str, ...] = ("s", "es", "ed", "ing", "al", "ally", "ity", "ities")


def get_word_variants(word: str) -> list[str]:
    """Return the word followed by its suffix variants, without duplicates.

    Words ending in "e" also get the stem without the "e" plus each suffix
    (e.g. "use" -> "used", "using").
    """
    variants: list[str] = [word]
    for suffix in VARIANT_SUFFIXES:
        candidates = [word + suffix]
        if word.endswith("e"):
            candidates.append(word[:-1] + suffix)
        for candidate in candidates:
            if candidate not in variants:
                variants.append(candidate)
    return variants
