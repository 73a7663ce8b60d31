"""Candidate enumeration for a keyword configuration over one tokenized document."""

from __future__ import annotations

import re
from collections.abc import Iterator

from src.domains.matching.core.similarity import fuzzy_matches
from src.domains.matching.core.tokenizer import TokenizedText
from src.domains.matching.core.variants import get_word_variants
from src.models.keyword_configuration import KeywordConfiguration, MatchMode
from src.models.keyword_match import MatchCandidate


def locate_exact_text(
    tokens: TokenizedText, word: str, case_sensitive: bool = False
) -> Iterator[MatchCandidate]:
    """Find every occurrence of the literal ``word``, including inside other words.

    The cursor advances one character past each hit, so overlapping hits are
    reported ("aa" in "aaa" yields positions 0 and 1). ``matched_text`` is
    always sliced from the original text.
    """
    flags = 0 if case_sensitive else re.IGNORECASE
    pattern = re.compile(re.escape(word), flags)
    text = tokens.text

    cursor = 0
    while (hit := pattern.search(text, cursor)) is not None:
        start, end = hit.span()
        word_index = tokens.word_index_at(start)
        yield MatchCandidate(
            char_position=start,
            word_index=word_index,
            matched_text=text[start:end],
            word_span=tokens.word_index_at(end) - word_index,
        )
        cursor = start + 1


def locate_phrase(
    tokens: TokenizedText, word: str, case_sensitive: bool = False
) -> Iterator[MatchCandidate]:
    """Slide a window of n consecutive words and match every sub-term in order."""
    terms = word.split()
    if not case_sensitive:
        terms = [term.lower() for term in terms]

    size = len(terms)
    words = tokens.words
    for index in range(len(words) - size + 1):
        window = words[index : index + size]
        if not case_sensitive:
            window = tuple(token.lower() for token in window)
        if list(window) != terms:
            continue

        start = tokens.starts[index]
        last = index + size - 1
        end = tokens.starts[last] + len(words[last])
        yield MatchCandidate(
            char_position=start,
            word_index=index,
            matched_text=tokens.text[start:end],
            word_span=size,
        )


def locate_single_word(
    tokens: TokenizedText,
    terms: list[str],
    case_sensitive: bool = False,
    fuzzy_threshold: float | None = None,
) -> Iterator[MatchCandidate]:
    """Compare each document word against the search terms.

    With ``fuzzy_threshold`` set, a word matches when its similarity to any term
    reaches the threshold and the best score is reported; otherwise equality is
    required and similarity is 1.0.
    """
    folded_terms = terms if case_sensitive else [term.lower() for term in terms]

    for index, token in enumerate(tokens.words):
        if fuzzy_threshold is not None:
            best: float | None = None
            for term in terms:
                is_match, score = fuzzy_matches(token, term, fuzzy_threshold, case_sensitive)
                if is_match and (best is None or score > best):
                    best = score
            if best is None:
                continue
            score_value = best
        else:
            candidate = token if case_sensitive else token.lower()
            if candidate not in folded_terms:
                continue
            score_value = 1.0

        yield MatchCandidate(
            char_position=tokens.starts[index],
            word_index=index,
            matched_text=token,
            similarity=score_value,
        )


def locate_candidates(
    tokens: TokenizedText, config: KeywordConfiguration
) -> Iterator[MatchCandidate]:
    """Dispatch to the locator for the configuration's mode, in scan order."""
    if config.match_mode is MatchMode.EXACT_TEXT:
        return locate_exact_text(tokens, config.word, config.case_sensitive)

    if config.is_phrase and config.match_mode is not MatchMode.FUZZY:
        return locate_phrase(tokens, config.word, config.case_sensitive)

    terms = get_word_variants(config.word) if config.include_variants else [config.word]
    threshold = config.fuzzy_threshold if config.match_mode is MatchMode.FUZZY else None
    return locate_single_word(tokens, terms, config.case_sensitive, threshold)
