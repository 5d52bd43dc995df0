from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path

from tree_sitter import Node, Tree
from tree_sitter_language_pack import get_parser

from jpa_forge.core.query import LANGUAGE, CaptureSet, StructuralQuery, capture_nodes, execute
from jpa_forge.errors import ParseFailure

logger = logging.getLogger(__name__)


class ParsedFile:
    """A Java source buffer together with its syntax tree.

    Instances never change: editing produces a new ``ParsedFile`` because offsets
    captured against the old tree are meaningless after a patch.
    """

    __slots__ = ("_path", "_source", "_tree")

    def __init__(self, source: bytes, tree: Tree, path: Path | None = None) -> None:
        self._source = source
        self._tree = tree
        self._path = path

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, source: str | bytes, path: str | Path | None = None) -> ParsedFile:
        source_bytes = source.encode("utf-8") if isinstance(source, str) else source
        if not source_bytes.strip():
            raise ParseFailure("Cannot parse an empty source buffer")
        try:
            source_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseFailure(f"{path or '<buffer>'} is not valid UTF-8: {exc}") from exc
        tree = get_parser(LANGUAGE).parse(source_bytes)
        if tree is None or tree.root_node is None:
            raise ParseFailure(f"Parser produced no syntax tree for {path or '<buffer>'}")
        if tree.root_node.has_error:
            logger.debug("Syntax errors tolerated while parsing %s", path or "<buffer>")
        return cls(source_bytes, tree, Path(path) if path is not None else None)

    @classmethod
    def from_path(cls, path: str | Path) -> ParsedFile:
        file_path = Path(path)
        try:
            source_bytes = file_path.read_bytes()
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None
        return cls.parse(source_bytes, file_path)

    @classmethod
    def from_base64(cls, data: str, path: str | Path | None = None) -> ParsedFile:
        try:
            source_bytes = base64.b64decode(data, validate=True)
        except binascii.Error as exc:
            raise ParseFailure(f"Invalid base64 source buffer: {exc}") from exc
        return cls.parse(source_bytes, path)

    def reparse(self, source: bytes) -> ParsedFile:
        return ParsedFile.parse(source, self._path)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def source(self) -> bytes:
        return self._source

    @property
    def text(self) -> str:
        return self._source.decode("utf-8")

    @property
    def root(self) -> Node:
        return self._tree.root_node

    def text_of(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def file_stem(self) -> str | None:
        if self._path is None:
            return None
        return self._path.stem or None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def run_query(self, query: StructuralQuery, within: Node | None = None) -> list[CaptureSet]:
        """All matches of ``query``, over the whole file or only inside ``within``."""
        return execute(query, within if within is not None else self.root)

    def first_match(self, query: StructuralQuery, within: Node | None = None) -> CaptureSet | None:
        matches = self.run_query(query, within)
        return matches[0] if matches else None

    def nodes(self, query: StructuralQuery, capture: str, within: Node | None = None) -> list[Node]:
        return capture_nodes(query, within if within is not None else self.root, capture)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self._path
        if target is None:
            raise ValueError("No path to save the source buffer to.")
        target.write_bytes(self._source)
        logger.info("Wrote %d bytes to %s", len(self._source), target)
        return target

    def with_path(self, path: str | Path) -> ParsedFile:
        return ParsedFile(self._source, self._tree, Path(path))
