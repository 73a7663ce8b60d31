"""CLI command implementations for the keyword analysis engine."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from src.models.analysis_result import AnalysisReport
from src.models.config import AnalysisSettings
from src.models.document import Document
from src.models.keyword_configuration import KeywordConfiguration
from src.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def _get_settings(**overrides: Any) -> AnalysisSettings:
    """Load settings from the environment / .env, applying CLI overrides."""
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return AnalysisSettings(**values)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid settings: {exc}") from exc


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise click.ClickException(f"Could not read {path}: {exc}") from exc


def _load_documents(path: Path) -> list[Document]:
    data = _load_json(path)
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a JSON list of documents")
    try:
        return [Document.model_validate(item) for item in data]
    except ValidationError as exc:
        raise click.ClickException(f"Invalid document in {path}: {exc}") from exc


def _load_configurations(path: Path) -> list[KeywordConfiguration]:
    """Read keyword records, skipping entries whose word is blank."""
    data = _load_json(path)
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a JSON list of keyword settings")

    configurations: list[KeywordConfiguration] = []
    for item in data:
        if not isinstance(item, Mapping):
            raise click.ClickException(f"Invalid keyword settings {item!r}: expected an object")
        if not str(item.get("word") or "").strip():
            logger.warning("empty_keyword_skipped", entry=item)
            continue
        try:
            configurations.append(KeywordConfiguration.from_flags(item))
        except (ValidationError, ValueError, TypeError) as exc:
            raise click.ClickException(f"Invalid keyword settings {item!r}: {exc}") from exc
    return configurations


def _write_output(payload: Any, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        click.echo(text)
    else:
        output.write_text(text + "\n", encoding="utf-8")


def _print_summary(report: AnalysisReport) -> None:
    """Print per-document keyword counts to stderr."""
    status = "SUCCESS" if report.is_complete else "INCOMPLETE"
    click.echo(
        f"\n[{status}] Analyzed {report.units_completed}/{report.units_total} units",
        err=True,
    )
    for document in report.results:
        click.echo(f"  {document.document_name}:", err=True)
        for result in document.keywords.values():
            label = f"{result.word} [{result.category}]" if result.category else result.word
            suffix = f" (error: {result.error})" if result.error else ""
            click.echo(f"    {label}: {result.count}{suffix}", err=True)
    if report.errors:
        click.echo(f"  Errors ({len(report.errors)}):", err=True)
        for error in report.errors[:10]:
            click.echo(f"    - {error}", err=True)
        if len(report.errors) > 10:
            click.echo(f"    ... and {len(report.errors) - 10} more", err=True)


@click.command()
@click.argument("documents_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("keywords_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--workers", type=int, default=None, help="Documents analyzed in parallel")
@click.option("--strip-punctuation", is_flag=True, help="Remove punctuation first")
@click.option("--normalize", is_flag=True, help="Lower-case and drop diacritics")
@click.option("--ignore-references", is_flag=True, help="Drop bibliography")
def analyze(
    documents_path: Path,
    keywords_path: Path,
    output: Path | None,
    workers: int | None,
    strip_punctuation: bool,
    normalize: bool,
    ignore_references: bool,
) -> None:
    """Count keyword matches in DOCUMENTS_PATH using the rules in KEYWORDS_PATH."""
    settings = _get_settings(
        max_workers=workers,
        strip_punctuation=strip_punctuation or None,
        normalize_text=normalize or None,
        ignore_references=ignore_references or None,
    )
    configure_logging(settings.log_level)

    from src.domains.matching.services.keyword_analyzer import KeywordAnalyzer

    documents = _load_documents(documents_path)
    configurations = _load_configurations(keywords_path)

    report = KeywordAnalyzer(settings).analyze(documents, configurations)

    _write_output(report.model_dump(mode="json"), output)
    _print_summary(report)


@click.command()
@click.argument("results_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("configuration_id")
@click.option("--window", type=int, default=None, help="Words shown on each side")
@click.option("--document", "document_id", default=None, help="Restrict to one document id")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), default=None)
def word_tree(
    results_path: Path,
    configuration_id: str,
    window: int | None,
    document_id: str | None,
    output: Path | None,
) -> None:
    """Build the word tree for CONFIGURATION_ID from an analysis results file."""
    settings = _get_settings()
    configure_logging(settings.log_level)

    from src.domains.matching.services.keyword_analyzer import KeywordAnalyzer

    try:
        report = AnalysisReport.model_validate(_load_json(results_path))
    except ValidationError as exc:
        raise click.ClickException(f"Invalid results file {results_path}: {exc}") from exc

    if not any(configuration_id in document.keywords for document in report.results):
        raise click.ClickException(f"Unknown configuration id: {configuration_id}")

    resolved_document_id: str | int | None = None
    if document_id is not None:
        for document in report.results:
            if str(document.document_id) == document_id:
                resolved_document_id = document.document_id
                break
        else:
            raise click.ClickException(f"Unknown document id: {document_id}")

    tree = KeywordAnalyzer(settings).build_word_tree(
        report,
        configuration_id,
        window_size=window,
        document_id=resolved_document_id,
    )
    _write_output(tree.to_dict(), output)
