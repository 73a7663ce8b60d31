"""Keyword analysis service: runs every keyword configuration over every document."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

import structlog

from src.domains.matching.core.aggregation import (
    analyze_document_keyword,
    build_document_result,
    build_keyword_result,
    unique_configurations,
)
from src.domains.matching.core.preprocessing import TextPreprocessingOptions, preprocess_text
from src.domains.matching.core.tokenizer import tokenize
from src.domains.matching.core.word_tree import WordTree, build_word_tree
from src.models.analysis_result import AnalysisReport, DocumentResult, KeywordResult
from src.models.config import AnalysisSettings
from src.models.document import Document
from src.models.keyword_configuration import KeywordConfiguration
from src.utils.progress import ProgressCallback, ProgressTracker


class KeywordAnalyzer:
    """Orchestrates locate, validate and aggregate for a batch of documents.

    Holds no state between ``analyze`` calls. Diagnostic events go to the
    injected ``logger`` (any structlog-compatible logger).
    """

    def __init__(
        self,
        settings: AnalysisSettings | None = None,
        logger: Any | None = None,
    ) -> None:
        self.settings = settings or AnalysisSettings()
        self.logger = logger or structlog.get_logger(__name__)
        self.preprocessing = TextPreprocessingOptions(
            strip_punctuation=self.settings.strip_punctuation,
            normalize=self.settings.normalize_text,
            ignore_references=self.settings.ignore_references,
        )

    def analyze(
        self,
        documents: list[Document],
        configurations: list[KeywordConfiguration],
        progress_callback: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> AnalysisReport:
        """Analyze all documents against all distinct keyword configurations.

        Results keep the input document order; matches inside each keyword
        result stay in scan order. When ``cancel_event`` is set, units not yet
        started are skipped and the report is marked incomplete.
        """
        if documents is None:
            msg = "documents must not be None"
            raise ValueError(msg)
        if configurations is None:
            msg = "configurations must not be None"
            raise ValueError(msg)

        configs = list(unique_configurations(configurations).values())
        tracker = ProgressTracker(
            total=len(documents) * len(configs),
            callback=progress_callback,
        )
        self.logger.info(
            "analysis_started",
            documents=len(documents),
            configurations=len(configs),
            max_workers=self.settings.max_workers,
        )

        slots: list[DocumentResult | None] = [None] * len(documents)

        if self.settings.max_workers <= 1 or len(documents) <= 1:
            for position, document in enumerate(documents):
                slots[position] = self._analyze_document(document, configs, tracker, cancel_event)
        else:
            with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
                futures = {
                    executor.submit(
                        self._analyze_document, document, configs, tracker, cancel_event
                    ): position
                    for position, document in enumerate(documents)
                }
                for future in as_completed(futures):
                    slots[futures[future]] = future.result()

        results = [result for result in slots if result is not None]
        is_complete = tracker.processed == tracker.total
        if not is_complete:
            self.logger.warning(
                "analysis_incomplete",
                completed=tracker.processed,
                total=tracker.total,
            )

        self.logger.info("analysis_finished", **tracker.summary())
        return AnalysisReport(
            results=results,
            is_complete=is_complete,
            units_total=tracker.total,
            units_completed=tracker.processed,
            errors=list(tracker.errors),
        )

    def _analyze_document(
        self,
        document: Document,
        configs: list[KeywordConfiguration],
        tracker: ProgressTracker,
        cancel_event: threading.Event | None,
    ) -> DocumentResult | None:
        """Evaluate every configuration for one document, isolating unit failures.

        Returns None when cancellation happened before any unit of this document ran.
        """
        if document.is_empty:
            self.logger.warning(
                "document_empty",
                document_id=document.id,
                document_name=document.name,
            )

        text = document.content
        if self.preprocessing.enabled:
            text = preprocess_text(text, self.preprocessing)
        tokens = tokenize(text)

        keyword_results: list[KeywordResult] = []
        for config in configs:
            if cancel_event is not None and cancel_event.is_set():
                break

            try:
                keyword_result = analyze_document_keyword(
                    tokens,
                    config,
                    display_window=self.settings.display_window,
                    document_id=document.id,
                )
            except Exception as exc:
                self.logger.error(
                    "keyword_unit_failed",
                    document_id=document.id,
                    configuration_id=config.configuration_id,
                    word=config.word,
                    error=str(exc),
                )
                keyword_results.append(build_keyword_result(config, [], error=str(exc)))
                tracker.record_failure(f"Document {document.id} / {config.word}: {exc}")
            else:
                keyword_results.append(keyword_result)
                if document.is_empty:
                    tracker.record_skip()
                else:
                    tracker.record_success()

            tracker.log_progress(every_n=self.settings.progress_log_every)

        if not keyword_results and configs:
            return None

        return build_document_result(document.id, document.name, keyword_results)

    def build_word_tree(
        self,
        report: AnalysisReport,
        configuration_id: str,
        window_size: int | None = None,
        document_id: str | int | None = None,
    ) -> WordTree:
        """Build the word tree for one configuration's accepted matches in a report."""
        keyword = ""
        for document in report.results:
            keyword_result = document.keywords.get(configuration_id)
            if keyword_result is not None:
                keyword = keyword_result.word
                break

        window_size = window_size or self.settings.word_tree_window
        if window_size > self.settings.display_window:
            self.logger.warning(
                "word_tree_window_truncated",
                requested=window_size,
                display_window=self.settings.display_window,
            )

        return build_word_tree(
            report.matches_for(configuration_id, document_id),
            keyword,
            window_size,
        )
