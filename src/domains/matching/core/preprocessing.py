"""Optional text clean-up applied before tokenization."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass

BIBLIOGRAPHY_HEADER = re.compile(
    r"(?:references|bibliography|works cited|literature cited)(?:\s|:|$)",
    re.IGNORECASE,
)

# [1], [1,2], [1-3]
NUMBERED_CITATION = re.compile(r"\[\d+(?:[-,]\d+)*\]")
# (Smith et al., 2023), (IPCC, 2022)
AUTHOR_YEAR_CITATION = re.compile(r"\([A-Za-z\s]+(?:et al\.)?(?:,|\s)+\d{4}\)")
DOI_LINK = re.compile(r"\b(?:https?://)?(?:dx\.)?doi\.org/\S+")

_PUNCTUATION = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class TextPreprocessingOptions:
    """Which clean-up steps to run."""

    strip_punctuation: bool = False
    normalize: bool = False
    ignore_references: bool = False

    @property
    def enabled(self) -> bool:
        return self.strip_punctuation or self.normalize or self.ignore_references


def strip_punctuation(text: str) -> str:
    """Replace punctuation and underscores with spaces and collapse whitespace."""
    return _WHITESPACE.sub(" ", _PUNCTUATION.sub(" ", text)).strip()


def normalize_text(text: str) -> str:
    """Lower-case and remove diacritics."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def remove_references(text: str) -> str:
    """Drop everything from the bibliography header on, then strip in-text citations."""
    header = BIBLIOGRAPHY_HEADER.search(text)
    if header:
        text = text[: header.start()]

    text = NUMBERED_CITATION.sub("", text)
    text = AUTHOR_YEAR_CITATION.sub("", text)
    text = DOI_LINK.sub("", text)
    return _WHITESPACE.sub(" ", text)


def preprocess_text(text: str, options: TextPreprocessingOptions) -> str:
    """Apply the enabled clean-up steps in order: punctuation, normalization, references."""
    processed = text
    if options.strip_punctuation:
        processed = strip_punctuation(processed)
    if options.normalize:
        processed = normalize_text(processed)
    if options.ignore_references:
        processed = remove_references(processed)
    return processed
