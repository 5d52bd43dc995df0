"""Structural queries over Java syntax trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache

from tree_sitter import Node, Query, QueryCursor, QueryError as TreeSitterQueryError
from tree_sitter_language_pack import get_language

from jpa_forge.errors import CaptureNotFound, QueryCompilationError

logger = logging.getLogger(__name__)

LANGUAGE = "java"

CaptureSet = dict[str, Node]


@dataclass(frozen=True)
class StructuralQuery:
    """A tree-sitter pattern plus the capture names callers read from it."""

    pattern: str
    captures: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in self.captures:
            if f"@{name}" not in self.pattern:
                raise CaptureNotFound(f"Capture '@{name}' is not declared in query: {self.pattern.strip()}")

    def compile(self) -> Query:
        return _compile(self.pattern)


@lru_cache(maxsize=128)
def _compile(pattern: str) -> Query:
    try:
        return Query(get_language(LANGUAGE), pattern)
    except TreeSitterQueryError as exc:
        raise QueryCompilationError(f"Unable to compile query: {exc}") from exc


def quote(value: str) -> str:
    """Render a string literal usable inside an ``#eq?`` predicate."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def execute(query: StructuralQuery, scope: Node) -> list[CaptureSet]:
    """Run ``query`` over the sub-tree rooted at ``scope``.

    Each match keeps the first node of every capture, matches are ordered by the
    start byte of their earliest captured node.
    """
    cursor = QueryCursor(query.compile())
    results: list[CaptureSet] = []
    for _, captures in cursor.matches(scope):
        capture_set = {name: nodes[0] for name, nodes in captures.items() if nodes}
        if capture_set:
            results.append(capture_set)
    results.sort(key=lambda cs: min(n.start_byte for n in cs.values()))
    logger.debug("Query matched %d time(s) within %s", len(results), scope.type)
    return results


def capture_nodes(query: StructuralQuery, scope: Node, name: str) -> list[Node]:
    """All nodes captured as ``name``, sorted by start byte and de-duplicated."""
    if name not in query.captures:
        raise CaptureNotFound(f"Capture '@{name}' is not part of the declared captures {query.captures}")
    cursor = QueryCursor(query.compile())
    captured = cursor.captures(scope).get(name, [])
    seen: set[tuple[int, int]] = set()
    nodes: list[Node] = []
    for node in sorted(captured, key=lambda n: (n.start_byte, n.end_byte)):
        span = (node.start_byte, node.end_byte)
        if span in seen:
            continue
        seen.add(span)
        nodes.append(node)
    return nodes
