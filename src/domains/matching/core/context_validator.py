"""Before/after context requirements for keyword candidates."""

from __future__ import annotations

import re
from collections.abc import Sequence

from src.domains.matching.core.similarity import fuzzy_matches
from src.domains.matching.core.tokenizer import TokenizedText
from src.models.keyword_configuration import (
    ContextLogic,
    ContextMatchMode,
    KeywordConfiguration,
)
from src.models.keyword_match import MatchCandidate


def window_contains_term(
    window: Sequence[str],
    terms: Sequence[str],
    mode: ContextMatchMode,
    fuzzy_threshold: float = 0.8,
) -> bool:
    """Check whether any term occurs in the window under the given mode.

    - exact: case-insensitive substring of the joined window text
    - fuzzy: any window word reaches ``fuzzy_threshold`` similarity to any term
    - whole_word: case-insensitive word-boundary match in the joined window text
    """
    if not window:
        return False

    window_text = " ".join(window)

    if mode is ContextMatchMode.EXACT:
        lowered = window_text.lower()
        return any(term.lower() in lowered for term in terms)

    if mode is ContextMatchMode.FUZZY:
        return any(
            fuzzy_matches(token, term, fuzzy_threshold)[0] for token in window for term in terms
        )

    return any(
        re.search(r"\b" + re.escape(term) + r"\b", window_text, re.IGNORECASE)
        for term in terms
    )


def check_side(
    terms: Sequence[str],
    window: Sequence[str],
    mode: ContextMatchMode,
    fuzzy_threshold: float = 0.8,
) -> bool:
    """Evaluate one side; a side with no configured terms is vacuously satisfied."""
    if not terms:
        return True
    return window_contains_term(window, terms, mode, fuzzy_threshold)


def before_window(
    tokens: TokenizedText, candidate: MatchCandidate, size: int
) -> list[str]:
    """The ``size`` words immediately preceding the candidate."""
    return tokens.words_before(candidate.word_index, size)


def after_window(tokens: TokenizedText, candidate: MatchCandidate, size: int) -> list[str]:
    """The ``size`` words immediately following the words the candidate covers."""
    return tokens.words_after(candidate.word_index + candidate.word_span, size)


def passes_context(
    tokens: TokenizedText,
    candidate: MatchCandidate,
    config: KeywordConfiguration,
) -> bool:
    """Accept or reject a candidate against the configured context requirement.

    AND: both sides must pass, where an unconfigured side passes on its own.
    OR: with no side configured the candidate is accepted; otherwise at least
    one configured side must pass. An unconfigured side never satisfies OR.
    """
    if not config.has_context_requirement:
        return True

    def before_ok() -> bool:
        return check_side(
            config.context_before,
            before_window(tokens, candidate, config.context_range_before),
            config.context_mode_before,
            config.fuzzy_context_threshold_before,
        )

    def after_ok() -> bool:
        return check_side(
            config.context_after,
            after_window(tokens, candidate, config.context_range_after),
            config.context_mode_after,
            config.fuzzy_context_threshold_after,
        )

    if config.context_logic is ContextLogic.AND:
        return before_ok() and after_ok()

    return (bool(config.context_before) and before_ok()) or (
        bool(config.context_after) and after_ok()
    )
