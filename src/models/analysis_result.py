"""Result models produced by a keyword analysis run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from src.models.keyword_match import AcceptedMatch


class KeywordResult(BaseModel):
    """Accepted matches of one keyword configuration in one document."""

    model_config = ConfigDict(frozen=True)

    configuration_id: str
    word: str
    category: str
    count: int
    matches: list[AcceptedMatch] = []
    error: str | None = None


class DocumentResult(BaseModel):
    """Per-document results keyed by configuration identity."""

    model_config = ConfigDict(frozen=True)

    document_id: str | int
    document_name: str
    keywords: dict[str, KeywordResult] = {}

    @property
    def total_matches(self) -> int:
        return sum(result.count for result in self.keywords.values())


class AnalysisReport(BaseModel):
    """Outcome of one analysis run.

    ``is_complete`` is False when the run was cancelled before every
    (document, configuration) unit was evaluated; results already produced are kept.
    """

    model_config = ConfigDict(frozen=True)

    results: list[DocumentResult] = []
    is_complete: bool = True
    units_total: int = 0
    units_completed: int = 0
    errors: list[str] = []

    def matches_for(
        self,
        configuration_id: str,
        document_id: str | int | None = None,
    ) -> list[AcceptedMatch]:
        """Collect accepted matches for one configuration, optionally for one document."""
        matches: list[AcceptedMatch] = []
        for document in self.results:
            if document_id is not None and document.document_id != document_id:
                continue
            keyword_result = document.keywords.get(configuration_id)
            if keyword_result is not None:
                matches.extend(keyword_result.matches)
        return matches
