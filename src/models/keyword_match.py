"""Match models for keyword analysis results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class MatchCandidate(BaseModel):
    """A raw keyword hit before context validation.

    ``char_position`` is the character offset of the hit in the analyzed text and
    ``word_index`` the number of words that begin before it; for a hit starting
    inside a word this is the index of the following word. ``word_span`` is the
    number of words the hit occupies, used to place the after-context window.
    """

    model_config = ConfigDict(frozen=True)

    char_position: int
    word_index: int
    matched_text: str
    similarity: float = 1.0
    word_span: int = 1

    @field_validator("char_position", "word_index")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        """Positions must be non-negative."""
        if value < 0:
            msg = "position must be >= 0"
            raise ValueError(msg)
        return value

    @field_validator("similarity")
    @classmethod
    def validate_similarity(cls, value: float) -> float:
        """Similarity must be between 0.0 and 1.0."""
        if value < 0.0 or value > 1.0:
            msg = "similarity must be between 0.0 and 1.0"
            raise ValueError(msg)
        return value


class AcceptedMatch(MatchCandidate):
    """A candidate that passed context validation, with its literal text windows."""

    context: str
    words_before: str
    words_after: str
    document_id: str | int | None = None
