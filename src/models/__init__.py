"""Pydantic data models for the keyword analysis engine."""

from src.models.analysis_result import AnalysisReport, DocumentResult, KeywordResult
from src.models.config import AnalysisSettings
from src.models.document import Document
from src.models.keyword_configuration import (
    ContextLogic,
    ContextMatchMode,
    KeywordConfiguration,
    MatchMode,
)
from src.models.keyword_match import AcceptedMatch, MatchCandidate

__all__ = [
    "AcceptedMatch",
    "AnalysisReport",
    "AnalysisSettings",
    "ContextLogic",
    "ContextMatchMode",
    "Document",
    "DocumentResult",
    "KeywordConfiguration",
    "KeywordResult",
    "MatchCandidate",
    "MatchMode",
]
