"""Keyword configuration model: one independently-identified set of search rules."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_CONTEXT_RANGE = 5
DEFAULT_FUZZY_THRESHOLD = 0.8


class MatchMode(StrEnum):
    """How the keyword itself is located in a document."""

    WHOLE_WORD = "whole_word"
    EXACT_TEXT = "exact_text"
    FUZZY = "fuzzy"


class ContextMatchMode(StrEnum):
    """How context terms are looked for inside a context window."""

    WHOLE_WORD = "whole_word"
    EXACT = "exact"
    FUZZY = "fuzzy"


class ContextLogic(StrEnum):
    """Combination rule between the before-side and after-side requirements."""

    AND = "AND"
    OR = "OR"


def split_terms(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated term list, trimming and dropping empty entries."""
    if not value:
        return ()
    return tuple(term.strip() for term in value.split(",") if term.strip())


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


class KeywordConfiguration(BaseModel):
    """Search intent for a single keyword.

    Two configurations with the same ``word`` are distinct whenever any other
    field differs; see ``configuration_id``.
    """

    model_config = ConfigDict(frozen=True)

    word: str
    category: str = ""
    case_sensitive: bool = False
    match_mode: MatchMode = MatchMode.WHOLE_WORD
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    include_variants: bool = False
    context_before: tuple[str, ...] = ()
    context_after: tuple[str, ...] = ()
    context_range_before: int = DEFAULT_CONTEXT_RANGE
    context_range_after: int = DEFAULT_CONTEXT_RANGE
    context_mode_before: ContextMatchMode = ContextMatchMode.WHOLE_WORD
    context_mode_after: ContextMatchMode = ContextMatchMode.WHOLE_WORD
    fuzzy_context_threshold_before: float = DEFAULT_FUZZY_THRESHOLD
    fuzzy_context_threshold_after: float = DEFAULT_FUZZY_THRESHOLD
    context_logic: ContextLogic = ContextLogic.AND

    @field_validator("word")
    @classmethod
    def validate_word(cls, value: str) -> str:
        """Word is trimmed and must not be empty."""
        value = value.strip()
        if not value:
            msg = "word must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("context_before", "context_after", mode="before")
    @classmethod
    def parse_terms(cls, value: Any) -> Any:
        """Accept a comma-separated string or a sequence of terms."""
        if value is None:
            return ()
        if isinstance(value, str):
            return split_terms(value)
        return tuple(str(term).strip() for term in value if str(term).strip())

    @field_validator("context_range_before", "context_range_after")
    @classmethod
    def clamp_range(cls, value: int) -> int:
        """Context ranges are clamped to at least one word."""
        return max(1, value)

    @field_validator(
        "fuzzy_threshold",
        "fuzzy_context_threshold_before",
        "fuzzy_context_threshold_after",
    )
    @classmethod
    def clamp_threshold(cls, value: float) -> float:
        """Thresholds are clamped into [0, 1]."""
        return _clamp_unit(value)

    @property
    def has_context_requirement(self) -> bool:
        return bool(self.context_before or self.context_after)

    @property
    def is_phrase(self) -> bool:
        """True when the word holds more than one whitespace-separated term."""
        return len(self.word.split()) > 1

    @property
    def configuration_id(self) -> str:
        """Stable identity key derived from every field.

        The canonical JSON dump keeps term lists as arrays, so commas or other
        delimiter characters inside a term cannot make two settings collide.
        """
        payload = json.dumps(self.model_dump(mode="json"), sort_keys=True, ensure_ascii=False)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]

    @classmethod
    def from_flags(cls, data: Mapping[str, Any]) -> KeywordConfiguration:
        """Build a configuration from the UI record shape with boolean flag pairs.

        ``useExactText`` wins over ``useFuzzyMatch``; per context side an exact
        flag wins over a fuzzy flag, and neither means whole-word matching.
        A key holding null is treated as absent.
        """

        def value(key: str, default: Any) -> Any:
            found = data.get(key)
            return default if found is None else found

        if data.get("useExactText"):
            match_mode = MatchMode.EXACT_TEXT
        elif data.get("useFuzzyMatch"):
            match_mode = MatchMode.FUZZY
        else:
            match_mode = MatchMode.WHOLE_WORD

        def side_mode(side: str) -> ContextMatchMode:
            if data.get(f"exactContext{side}"):
                return ContextMatchMode.EXACT
            if data.get(f"fuzzyContext{side}"):
                return ContextMatchMode.FUZZY
            return ContextMatchMode.WHOLE_WORD

        shared_range = value("contextRange", DEFAULT_CONTEXT_RANGE)
        logic = str(data.get("contextLogicType") or ContextLogic.AND).upper()

        return cls(
            word=data.get("word") or "",
            category=data.get("category") or "",
            case_sensitive=bool(data.get("caseSensitive")),
            match_mode=match_mode,
            fuzzy_threshold=value("fuzzyMatchThreshold", DEFAULT_FUZZY_THRESHOLD),
            include_variants=bool(data.get("includeVariants")),
            context_before=data.get("contextBefore") or "",
            context_after=data.get("contextAfter") or "",
            context_range_before=value("contextRangeBefore", shared_range),
            context_range_after=value("contextRangeAfter", shared_range),
            context_mode_before=side_mode("Before"),
            context_mode_after=side_mode("After"),
            fuzzy_context_threshold_before=value(
                "fuzzyContextThresholdBefore", DEFAULT_FUZZY_THRESHOLD
            ),
            fuzzy_context_threshold_after=value(
                "fuzzyContextThresholdAfter", DEFAULT_FUZZY_THRESHOLD
            ),
            context_logic=ContextLogic(logic),
        )
