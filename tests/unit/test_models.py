"""Unit tests for the Pydantic models.

Tests validation logic, boundary conditions and identity rules for every model
in src/models/. These tests call actual Pydantic constructors with no mocking.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.models.analysis_result import AnalysisReport, DocumentResult, KeywordResult
from src.models.config import AnalysisSettings
from src.models.document import Document
from src.models.keyword_configuration import (
    ContextLogic,
    ContextMatchMode,
    KeywordConfiguration,
    MatchMode,
    split_terms,
)
from src.models.keyword_match import AcceptedMatch, MatchCandidate


def _accepted(document_id: str, position: int = 0) -> AcceptedMatch:
    return AcceptedMatch(
        char_position=position,
        word_index=position,
        matched_text="fox",
        context="fox",
        words_before="",
        words_after="",
        document_id=document_id,
    )


# ---------------------------------------------------------------------------
# KeywordConfiguration
# ---------------------------------------------------------------------------


class TestKeywordConfiguration:
    """Tests for KeywordConfiguration validation."""

    def test_defaults(self) -> None:
        config = KeywordConfiguration(word="fox")
        assert config.match_mode is MatchMode.WHOLE_WORD
        assert config.context_logic is ContextLogic.AND
        assert config.context_range_before == 5
        assert config.context_range_after == 5
        assert config.context_before == ()
        assert config.has_context_requirement is False

    def test_word_is_trimmed(self) -> None:
        assert KeywordConfiguration(word="  fox ").word == "fox"

    def test_empty_word_rejected(self) -> None:
        with pytest.raises(ValidationError, match="word must not be empty"):
            KeywordConfiguration(word="")

    def test_blank_word_rejected(self) -> None:
        with pytest.raises(ValidationError):
            KeywordConfiguration(word="   ")

    def test_context_string_split(self) -> None:
        config = KeywordConfiguration(word="fox", context_before="brown, red,, ")
        assert config.context_before == ("brown", "red")
        assert config.has_context_requirement is True

    def test_context_sequence_accepted(self) -> None:
        config = KeywordConfiguration(word="fox", context_after=["river ", "", "lake"])
        assert config.context_after == ("river", "lake")

    def test_range_clamped_to_one(self) -> None:
        config = KeywordConfiguration(word="fox", context_range_before=0, context_range_after=-3)
        assert config.context_range_before == 1
        assert config.context_range_after == 1

    def test_thresholds_clamped(self) -> None:
        config = KeywordConfiguration(
            word="fox",
            fuzzy_threshold=1.5,
            fuzzy_context_threshold_before=-0.2,
            fuzzy_context_threshold_after=0.4,
        )
        assert config.fuzzy_threshold == 1.0
        assert config.fuzzy_context_threshold_before == 0.0
        assert config.fuzzy_context_threshold_after == 0.4

    def test_is_phrase(self) -> None:
        assert KeywordConfiguration(word="primary production").is_phrase is True
        assert KeywordConfiguration(word="fox").is_phrase is False

    def test_frozen(self) -> None:
        config = KeywordConfiguration(word="fox")
        with pytest.raises(ValidationError):
            config.word = "cat"  # type: ignore[misc]


class TestConfigurationId:
    """Tests for configuration identity."""

    def test_stable(self) -> None:
        first = KeywordConfiguration(word="fox", context_before="brown")
        second = KeywordConfiguration(word="fox", context_before=["brown"])
        assert first.configuration_id == second.configuration_id

    def test_hex_digest_prefix(self) -> None:
        config_id = KeywordConfiguration(word="fox").configuration_id
        assert len(config_id) == 16
        assert all(c in "0123456789abcdef" for c in config_id)

    def test_case_sensitivity_changes_identity(self) -> None:
        plain = KeywordConfiguration(word="fox")
        strict = KeywordConfiguration(word="fox", case_sensitive=True)
        assert plain.configuration_id != strict.configuration_id

    @pytest.mark.parametrize(
        "overrides",
        [
            {"category": "animals"},
            {"match_mode": MatchMode.FUZZY},
            {"fuzzy_threshold": 0.5},
            {"include_variants": True},
            {"context_after": "river"},
            {"context_range_before": 3},
            {"context_mode_after": ContextMatchMode.EXACT},
            {"fuzzy_context_threshold_before": 0.6},
            {"context_logic": ContextLogic.OR},
        ],
    )
    def test_every_field_participates(self, overrides: dict) -> None:
        base = KeywordConfiguration(word="fox")
        changed = KeywordConfiguration(word="fox", **overrides)
        assert base.configuration_id != changed.configuration_id

    def test_delimiters_inside_terms_do_not_collide(self) -> None:
        joined = KeywordConfiguration(word="fox", context_before=["a,b"])
        split = KeywordConfiguration(word="fox", context_before=["a", "b"])
        assert joined.context_before == ("a,b",)
        assert joined.configuration_id != split.configuration_id


class TestFromFlags:
    """Tests for KeywordConfiguration.from_flags."""

    def test_exact_text_wins_over_fuzzy(self) -> None:
        config = KeywordConfiguration.from_flags(
            {"word": "aa", "useExactText": True, "useFuzzyMatch": True}
        )
        assert config.match_mode is MatchMode.EXACT_TEXT

    def test_fuzzy_mode(self) -> None:
        config = KeywordConfiguration.from_flags(
            {"word": "color", "useFuzzyMatch": True, "fuzzyMatchThreshold": 0.7}
        )
        assert config.match_mode is MatchMode.FUZZY
        assert config.fuzzy_threshold == 0.7

    def test_context_side_modes(self) -> None:
        config = KeywordConfiguration.from_flags(
            {
                "word": "fox",
                "exactContextBefore": True,
                "fuzzyContextBefore": True,
                "fuzzyContextAfter": True,
                "fuzzyContextThresholdAfter": 0.6,
            }
        )
        assert config.context_mode_before is ContextMatchMode.EXACT
        assert config.context_mode_after is ContextMatchMode.FUZZY
        assert config.fuzzy_context_threshold_after == 0.6

    def test_whole_word_context_by_default(self) -> None:
        config = KeywordConfiguration.from_flags({"word": "fox"})
        assert config.context_mode_before is ContextMatchMode.WHOLE_WORD
        assert config.context_mode_after is ContextMatchMode.WHOLE_WORD

    def test_shared_range_and_per_side_override(self) -> None:
        config = KeywordConfiguration.from_flags(
            {"word": "fox", "contextRange": 3, "contextRangeAfter": 7}
        )
        assert config.context_range_before == 3
        assert config.context_range_after == 7

    def test_logic_and_terms(self) -> None:
        config = KeywordConfiguration.from_flags(
            {
                "word": "fox",
                "category": "animals",
                "caseSensitive": True,
                "contextBefore": "brown, red",
                "contextLogicType": "or",
            }
        )
        assert config.context_logic is ContextLogic.OR
        assert config.context_before == ("brown", "red")
        assert config.category == "animals"
        assert config.case_sensitive is True

    def test_empty_word_rejected(self) -> None:
        with pytest.raises(ValidationError):
            KeywordConfiguration.from_flags({"word": ""})

    def test_null_values_use_defaults(self) -> None:
        config = KeywordConfiguration.from_flags(
            {
                "word": "fox",
                "contextRange": 3,
                "contextRangeBefore": None,
                "contextRangeAfter": None,
                "fuzzyMatchThreshold": None,
                "fuzzyContextThresholdBefore": None,
            }
        )
        assert config.context_range_before == 3
        assert config.context_range_after == 3
        assert config.fuzzy_threshold == 0.8
        assert config.fuzzy_context_threshold_before == 0.8

    def test_null_shared_range_uses_default(self) -> None:
        config = KeywordConfiguration.from_flags({"word": "fox", "contextRange": None})
        assert config.context_range_before == 5
        assert config.context_range_after == 5

    def test_numeric_string_range_coerced(self) -> None:
        config = KeywordConfiguration.from_flags({"word": "fox", "contextRangeBefore": "4"})
        assert config.context_range_before == 4

    def test_non_numeric_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            KeywordConfiguration.from_flags({"word": "fox", "contextRangeBefore": "wide"})


class TestSplitTerms:
    """Tests for split_terms."""

    def test_none_and_empty(self) -> None:
        assert split_terms(None) == ()
        assert split_terms("") == ()

    def test_trims_and_drops_blanks(self) -> None:
        assert split_terms(" a ,b,, c ") == ("a", "b", "c")


# ---------------------------------------------------------------------------
# Match and result models
# ---------------------------------------------------------------------------


class TestMatchCandidate:
    """Tests for MatchCandidate validation."""

    def test_defaults(self) -> None:
        candidate = MatchCandidate(char_position=0, word_index=0, matched_text="fox")
        assert candidate.similarity == 1.0
        assert candidate.word_span == 1

    def test_negative_position_rejected(self) -> None:
        with pytest.raises(ValidationError, match="position must be >= 0"):
            MatchCandidate(char_position=-1, word_index=0, matched_text="fox")

    def test_similarity_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            MatchCandidate(char_position=0, word_index=0, matched_text="fox", similarity=1.1)


class TestDocument:
    """Tests for Document."""

    def test_is_empty(self) -> None:
        assert Document(id=1, name="a", content=" \n\t").is_empty is True
        assert Document(id=1, name="a").is_empty is True
        assert Document(id=1, name="a", content="fox").is_empty is False

    def test_null_content_is_empty(self) -> None:
        document = Document.model_validate({"id": 1, "name": "scan.pdf", "content": None})
        assert document.content == ""
        assert document.is_empty is True


class TestAnalysisReport:
    """Tests for AnalysisReport helpers."""

    def _report(self) -> AnalysisReport:
        def result(document_id: str) -> KeywordResult:
            matches = [_accepted(document_id, 0), _accepted(document_id, 4)]
            return KeywordResult(
                configuration_id="cfg", word="fox", category="", count=2, matches=matches
            )

        return AnalysisReport(
            results=[
                DocumentResult(
                    document_id="d1", document_name="One", keywords={"cfg": result("d1")}
                ),
                DocumentResult(
                    document_id="d2", document_name="Two", keywords={"cfg": result("d2")}
                ),
            ],
            units_total=2,
            units_completed=2,
        )

    def test_matches_for_all_documents(self) -> None:
        assert len(self._report().matches_for("cfg")) == 4

    def test_matches_for_one_document(self) -> None:
        matches = self._report().matches_for("cfg", "d2")
        assert {m.document_id for m in matches} == {"d2"}
        assert [m.char_position for m in matches] == [0, 4]

    def test_unknown_configuration(self) -> None:
        assert self._report().matches_for("missing") == []

    def test_json_round_trip_keeps_document_ids(self) -> None:
        report = self._report()
        restored = AnalysisReport.model_validate(report.model_dump(mode="json"))
        assert restored == report


# ---------------------------------------------------------------------------
# AnalysisSettings
# ---------------------------------------------------------------------------


class TestAnalysisSettings:
    """Tests for AnalysisSettings validation."""

    def test_log_level_uppercased(self) -> None:
        assert AnalysisSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError, match="log_level must be one of"):
            AnalysisSettings(log_level="LOUD")

    @pytest.mark.parametrize("workers", [0, 33])
    def test_max_workers_bounds(self, workers: int) -> None:
        with pytest.raises(ValidationError):
            AnalysisSettings(max_workers=workers)

    def test_window_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            AnalysisSettings(display_window=0)

    def test_word_tree_window_within_display_window(self) -> None:
        with pytest.raises(ValidationError, match="word_tree_window must not exceed"):
            AnalysisSettings(display_window=5, word_tree_window=6)
        assert AnalysisSettings(display_window=6, word_tree_window=6).word_tree_window == 6

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_WORKERS", "4")
        monkeypatch.setenv("DISPLAY_WINDOW", "7")
        settings = AnalysisSettings()
        assert settings.max_workers == 4
        assert settings.display_window == 7
