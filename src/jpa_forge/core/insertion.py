"""Where new imports, fields and annotations go, and with which line breaks.

``compute_insertion_point`` is a pure function of the file, the scope node and the
kind of edit. Results are only valid for the exact ``ParsedFile`` they were computed
from; recompute after every patch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from tree_sitter import Node

from jpa_forge.config import get_default_indent
from jpa_forge.core.locator import (
    declared_annotations,
    find_field_declarations,
    find_import_declarations,
    find_method_declarations,
    find_package_declaration,
    find_type_body,
)
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.patch import EditOperation
from jpa_forge.errors import SemanticNodeNotFound

logger = logging.getLogger(__name__)

_COMMENT_TYPES = frozenset({"line_comment", "block_comment"})


class PositionKind(str, Enum):
    BEFORE_FIRST_DECLARATION_OF_KIND = "before_first_declaration_of_kind"
    AFTER_LAST_DECLARATION_OF_KIND = "after_last_declaration_of_kind"
    AFTER_SCOPE_HEADER = "after_scope_header"
    END_OF_SCOPE_BODY = "end_of_scope_body"


@dataclass(frozen=True)
class InsertionPoint:
    kind: PositionKind
    offset: int
    break_before: bool = False
    break_after: bool = False
    blank_line: bool = False
    indent: str = ""
    trailing_indent: str = ""

    @property
    def newlines(self) -> str:
        return "\n\n" if self.blank_line else "\n"


@dataclass(frozen=True)
class ImportEdit:
    """A top-level import; the scope is ignored."""


@dataclass(frozen=True)
class FieldEdit:
    """A member of the type body of the scope declaration."""


@dataclass(frozen=True)
class AnnotationEdit:
    """An annotation on the scope declaration itself."""


EditKind = ImportEdit | FieldEdit | AnnotationEdit


def _line_indent(file: ParsedFile, node: Node) -> str:
    line_start = file.source.rfind(b"\n", 0, node.start_byte) + 1
    prefix = file.source[line_start : node.start_byte]
    return prefix.decode("utf-8") if not prefix.strip() else ""


def _starts_line(file: ParsedFile, node: Node) -> bool:
    line_start = file.source.rfind(b"\n", 0, node.start_byte) + 1
    return not file.source[line_start : node.start_byte].strip()


def _leading_comments_start(file: ParsedFile, node: Node) -> Node:
    """The first of the comments (Javadoc included) stacked directly above ``node``."""
    anchor = node
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in _COMMENT_TYPES and _starts_line(file, sibling):
        anchor = sibling
        sibling = sibling.prev_sibling
    return anchor


def _end_with_trailing_comment(node: Node) -> int:
    """End of ``node``, or of the comment that follows it on the same line."""
    sibling = node.next_sibling
    if sibling is not None and sibling.type in _COMMENT_TYPES and sibling.start_point.row == node.end_point.row:
        return sibling.end_byte
    return node.end_byte


def _import_point(file: ParsedFile) -> InsertionPoint:
    imports = find_import_declarations(file)
    if imports:
        return InsertionPoint(
            PositionKind.AFTER_LAST_DECLARATION_OF_KIND, _end_with_trailing_comment(imports[-1]), break_before=True
        )
    package = find_package_declaration(file)
    if package is not None:
        return InsertionPoint(PositionKind.AFTER_SCOPE_HEADER, package.end_byte, break_before=True, blank_line=True)
    return InsertionPoint(PositionKind.BEFORE_FIRST_DECLARATION_OF_KIND, 0, break_after=True, blank_line=True)


def _field_point(file: ParsedFile, declaration: Node) -> InsertionPoint:
    body = find_type_body(declaration)
    if body is None:
        raise SemanticNodeNotFound(f"Declaration '{declaration.type}' has no body to insert a field into")
    fields = find_field_declarations(file, declaration)
    if fields:
        last = fields[-1]
        return InsertionPoint(
            PositionKind.AFTER_LAST_DECLARATION_OF_KIND,
            _end_with_trailing_comment(last),
            break_before=True,
            indent=_line_indent(file, last),
        )
    methods = find_method_declarations(file, declaration)
    if methods:
        first = _leading_comments_start(file, methods[0])
        return InsertionPoint(
            PositionKind.BEFORE_FIRST_DECLARATION_OF_KIND,
            first.start_byte,
            break_after=True,
            blank_line=True,
            indent=_line_indent(file, first),
            trailing_indent=_line_indent(file, first),
        )
    indent = _line_indent(file, declaration)
    if b"\n" in file.source[body.start_byte : body.end_byte]:
        # Closing brace already sits on its own line.
        return InsertionPoint(
            PositionKind.AFTER_SCOPE_HEADER,
            body.start_byte + 1,
            break_before=True,
            indent=indent + get_default_indent(),
        )
    return InsertionPoint(
        PositionKind.END_OF_SCOPE_BODY,
        body.end_byte - 1,
        break_before=True,
        break_after=True,
        indent=indent + get_default_indent(),
        trailing_indent=indent,
    )


def _annotation_point(file: ParsedFile, declaration: Node) -> InsertionPoint:
    annotations = declared_annotations(file, declaration)
    anchor = annotations[0] if annotations else declaration
    indent = _line_indent(file, anchor)
    return InsertionPoint(
        PositionKind.BEFORE_FIRST_DECLARATION_OF_KIND,
        anchor.start_byte,
        break_after=True,
        indent=indent,
        trailing_indent=indent,
    )


def compute_insertion_point(file: ParsedFile, scope: Node | None, kind: EditKind) -> InsertionPoint:
    match kind:
        case ImportEdit():
            point = _import_point(file)
        case FieldEdit():
            if scope is None:
                raise SemanticNodeNotFound("A field insertion needs a type declaration")
            point = _field_point(file, scope)
        case AnnotationEdit():
            if scope is None:
                raise SemanticNodeNotFound("An annotation insertion needs a declaration")
            point = _annotation_point(file, scope)
        case _:
            assert_never(kind)
    logger.debug("%s insertion at byte %d (%s)", type(kind).__name__, point.offset, point.kind.value)
    return point


def render_edit(point: InsertionPoint, text: str) -> EditOperation:
    """Turn ``text`` (one or more unindented lines) into an edit at ``point``.

    After a leading break every line is indented. Without one, the first line sits on
    the indentation already in front of the offset. ``trailing_indent`` is replayed
    after a trailing break so the anchor keeps its column.
    """
    lines = text.split("\n")
    if point.break_before:
        rendered = point.newlines + "\n".join(point.indent + line if line else line for line in lines)
    else:
        rendered = lines[0] + "".join("\n" + point.indent + line if line else "\n" for line in lines[1:])
    if point.break_after:
        rendered += ("\n" if point.break_before else point.newlines) + point.trailing_indent
    return EditOperation(point.offset, rendered)
