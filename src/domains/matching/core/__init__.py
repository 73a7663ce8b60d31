"""Matching domain core -- pure functions for keyword location, context and word trees."""

from __future__ import annotations

from src.domains.matching.core.aggregation import (
    analyze_document_keyword,
    build_accepted_match,
    build_document_result,
    build_keyword_result,
    find_accepted_matches,
    unique_configurations,
)
from src.domains.matching.core.context_validator import (
    check_side,
    passes_context,
    window_contains_term,
)
from src.domains.matching.core.match_locator import (
    locate_candidates,
    locate_exact_text,
    locate_phrase,
    locate_single_word,
)
from src.domains.matching.core.preprocessing import (
    TextPreprocessingOptions,
    preprocess_text,
)
from src.domains.matching.core.similarity import fuzzy_matches, similarity
from src.domains.matching.core.tokenizer import TokenizedText, tokenize
from src.domains.matching.core.variants import get_word_variants
from src.domains.matching.core.word_tree import (
    WordTree,
    WordTreeNode,
    build_word_tree,
    build_word_trees_by_document,
)

__all__ = [
    # aggregation
    "analyze_document_keyword",
    "build_accepted_match",
    "build_document_result",
    "build_keyword_result",
    "find_accepted_matches",
    "unique_configurations",
    # context_validator
    "check_side",
    "passes_context",
    "window_contains_term",
    # match_locator
    "locate_candidates",
    "locate_exact_text",
    "locate_phrase",
    "locate_single_word",
    # preprocessing
    "TextPreprocessingOptions",
    "preprocess_text",
    # similarity
    "fuzzy_matches",
    "similarity",
    # tokenizer
    "TokenizedText",
    "tokenize",
    # variants
    "get_word_variants",
    # word_tree
    "WordTree",
    "WordTreeNode",
    "build_word_tree",
    "build_word_trees_by_document",
]
