"""Assembly of accepted matches into per-document keyword results."""

from __future__ import annotations

from collections.abc import Iterable

from src.domains.matching.core.context_validator import (
    after_window,
    before_window,
    passes_context,
)
from src.domains.matching.core.match_locator import locate_candidates
from src.domains.matching.core.tokenizer import TokenizedText
from src.models.analysis_result import DocumentResult, KeywordResult
from src.models.keyword_configuration import KeywordConfiguration
from src.models.keyword_match import AcceptedMatch, MatchCandidate

DEFAULT_DISPLAY_WINDOW = 10


def unique_configurations(
    configurations: Iterable[KeywordConfiguration],
) -> dict[str, KeywordConfiguration]:
    """Key configurations by identity, keeping the first of any exact duplicates.

    Same word with different settings yields separate entries.
    """
    unique: dict[str, KeywordConfiguration] = {}
    for config in configurations:
        unique.setdefault(config.configuration_id, config)
    return unique


def build_accepted_match(
    tokens: TokenizedText,
    candidate: MatchCandidate,
    config: KeywordConfiguration,
    display_window: int = DEFAULT_DISPLAY_WINDOW,
    document_id: str | int | None = None,
) -> AcceptedMatch:
    """Attach literal text windows to a candidate.

    Each side spans the larger of the configured context range and ``display_window``.
    """
    before = before_window(tokens, candidate, max(config.context_range_before, display_window))
    after = after_window(tokens, candidate, max(config.context_range_after, display_window))
    words_before = " ".join(before)
    words_after = " ".join(after)

    return AcceptedMatch(
        **candidate.model_dump(),
        context=_context_slice(tokens, candidate, len(before), len(after)),
        words_before=words_before,
        words_after=words_after,
        document_id=document_id,
    )


def _context_slice(
    tokens: TokenizedText, candidate: MatchCandidate, n_before: int, n_after: int
) -> str:
    """Literal text from the first before-word to the last after-word, whitespace collapsed.

    A hit that starts inside a word never repeats that word.
    """
    start = candidate.char_position
    end = start + len(candidate.matched_text)
    if n_before:
        start = min(start, tokens.starts[candidate.word_index - n_before])
    if n_after:
        last = candidate.word_index + candidate.word_span + n_after - 1
        end = max(end, tokens.starts[last] + len(tokens.words[last]))
    return " ".join(tokens.text[start:end].split())


def find_accepted_matches(
    tokens: TokenizedText,
    config: KeywordConfiguration,
    display_window: int = DEFAULT_DISPLAY_WINDOW,
    document_id: str | int | None = None,
) -> list[AcceptedMatch]:
    """Locate candidates and keep those passing context validation, in scan order."""
    return [
        build_accepted_match(tokens, candidate, config, display_window, document_id)
        for candidate in locate_candidates(tokens, config)
        if passes_context(tokens, candidate, config)
    ]


def build_keyword_result(
    config: KeywordConfiguration,
    matches: list[AcceptedMatch],
    error: str | None = None,
) -> KeywordResult:
    """Wrap matches for one configuration; ``count`` always equals ``len(matches)``."""
    return KeywordResult(
        configuration_id=config.configuration_id,
        word=config.word,
        category=config.category,
        count=len(matches),
        matches=matches,
        error=error,
    )


def analyze_document_keyword(
    tokens: TokenizedText,
    config: KeywordConfiguration,
    display_window: int = DEFAULT_DISPLAY_WINDOW,
    document_id: str | int | None = None,
) -> KeywordResult:
    """Run locate and validate for a single (document, configuration) unit."""
    matches = find_accepted_matches(tokens, config, display_window, document_id)
    return build_keyword_result(config, matches)


def build_document_result(
    document_id: str | int,
    document_name: str,
    keyword_results: Iterable[KeywordResult],
) -> DocumentResult:
    """Group keyword results by configuration identity."""
    return DocumentResult(
        document_id=document_id,
        document_name=document_name,
        keywords={result.configuration_id: result for result in keyword_results},
    )
