"""Frequency-weighted prefix/suffix trees of the words around a keyword."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from src.models.keyword_match import AcceptedMatch

DEFAULT_WINDOW_SIZE = 5


@dataclass
class WordTreeNode:
    """One word at one depth; ``count`` is how many matches passed through it."""

    token: str
    count: int = 0
    children: dict[str, WordTreeNode] = field(default_factory=dict)

    def insert(self, path: Iterable[str]) -> None:
        """Walk ``path`` from this node, creating nodes and counting each visit."""
        node = self
        for token in path:
            child = node.children.get(token)
            if child is None:
                child = WordTreeNode(token=token)
                node.children[token] = child
            child.count += 1
            node = child

    def sorted_children(self) -> list[WordTreeNode]:
        """Children by descending count, ties broken by token."""
        return sorted(self.children.values(), key=lambda node: (-node.count, node.token))

    def top_children(self, limit: int) -> list[WordTreeNode]:
        """The ``limit`` most frequent children, for display-time truncation."""
        return self.sorted_children()[:limit]

    def to_dict(self) -> dict[str, Any]:
        """Hierarchical ``{name, count, children}`` form for visualization."""
        return {
            "name": self.token,
            "count": self.count,
            "children": [child.to_dict() for child in self.sorted_children()],
        }


@dataclass
class WordTree:
    """Words flowing into the keyword (``before``, nearest first) and out of it."""

    keyword: str
    before: WordTreeNode
    after: WordTreeNode
    match_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "match_count": self.match_count,
            "before": self.before.to_dict(),
            "after": self.after.to_dict(),
        }


def build_word_tree(
    matches: Iterable[AcceptedMatch],
    keyword: str,
    window_size: int = DEFAULT_WINDOW_SIZE,
    document_id: str | int | None = None,
) -> WordTree:
    """Build before/after trees from accepted matches.

    Uses the last ``window_size`` words of ``words_before`` (inserted nearest
    word first) and the first ``window_size`` words of ``words_after``. When
    ``document_id`` is given, only matches from that document are used.
    The input is never modified, so repeated calls give equal trees.
    """
    window_size = max(1, window_size)
    before_root = WordTreeNode(token="")
    after_root = WordTreeNode(token=keyword)
    match_count = 0

    for match in matches:
        if document_id is not None and match.document_id != document_id:
            continue
        before_words = match.words_before.split()[-window_size:]
        after_words = match.words_after.split()[:window_size]
        before_root.insert(reversed(before_words))
        after_root.insert(after_words)
        match_count += 1

    before_root.count = match_count
    after_root.count = match_count
    return WordTree(keyword=keyword, before=before_root, after=after_root, match_count=match_count)


def build_word_trees_by_document(
    matches: Iterable[AcceptedMatch],
    keyword: str,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> dict[str | int | None, WordTree]:
    """One tree per document id, in order of first appearance."""
    grouped: dict[str | int | None, list[AcceptedMatch]] = {}
    for match in matches:
        grouped.setdefault(match.document_id, []).append(match)
    return {
        document_id: build_word_tree(document_matches, keyword, window_size)
        for document_id, document_matches in grouped.items()
    }
