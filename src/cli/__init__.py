"""CLI entry point for the keyword analysis engine."""

from __future__ import annotations

import click

from src.cli.commands import analyze, word_tree


@click.group()
def cli() -> None:
    """Keyword match analysis over parsed documents."""


cli.add_command(analyze)
cli.add_command(word_tree)
