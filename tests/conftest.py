"""Shared test fixtures for the keyword analysis engine."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest

from src.domains.matching.core.tokenizer import TokenizedText, tokenize
from src.models.config import AnalysisSettings
from src.models.document import Document
from src.models.keyword_configuration import KeywordConfiguration

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def make_config() -> Callable[..., KeywordConfiguration]:
    """Factory for keyword configurations with sensible defaults."""

    def _make(word: str = "fox", **overrides: Any) -> KeywordConfiguration:
        return KeywordConfiguration(word=word, **overrides)

    return _make


@pytest.fixture
def fox_tokens() -> TokenizedText:
    """Tokenized 'the quick brown fox jumps'."""
    return tokenize("the quick brown fox jumps")


@pytest.fixture
def settings() -> AnalysisSettings:
    """Explicit settings so environment variables cannot leak into tests."""
    return AnalysisSettings(
        log_level="INFO",
        max_workers=1,
        display_window=10,
        word_tree_window=5,
        strip_punctuation=False,
        normalize_text=False,
        ignore_references=False,
        progress_log_every=10,
    )


@pytest.fixture
def sample_documents() -> list[Document]:
    """A small corpus covering phrases, repeated context and an empty document."""
    return [
        Document(
            id="doc-1",
            name="Ecology.pdf",
            content="Net primary production rate increased. The quick brown fox jumps.",
        ),
        Document(
            id="doc-2",
            name="Notes.txt",
            content="the quick fox ran and the quick fox slept",
        ),
        Document(id="doc-3", name="Scan.pdf", content="   "),
    ]


@pytest.fixture
def documents_file(tmp_path: Path, sample_documents: list[Document]) -> Path:
    """Documents serialized as the ingestion layer would hand them over."""
    path = tmp_path / "documents.json"
    path.write_text(
        json.dumps([document.model_dump(mode="json") for document in sample_documents]),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def keywords_file(tmp_path: Path) -> Path:
    """Keyword records in the UI flag shape, including a blank entry."""
    path = tmp_path / "keywords.json"
    path.write_text(
        json.dumps(
            [
                {"word": "fox", "category": "animals", "contextRange": 5},
                {"word": "primary production", "category": "ecology"},
                {"word": "   ", "category": "blank"},
            ]
        ),
        encoding="utf-8",
    )
    return path
