"""Domain-level lookups over a parsed Java file.

Every function answers ``None`` or an empty list when the construct is absent; that
is an expected outcome ("not an entity", "no imports yet"), not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tree_sitter import Node

from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.query import StructuralQuery, quote
from jpa_forge.core.types import JavaFileType

logger = logging.getLogger(__name__)

_PACKAGE_DECLARATION = StructuralQuery("(package_declaration) @package", ("package",))
_PACKAGE_NAME = StructuralQuery(
    "(package_declaration [(scoped_identifier) (identifier)] @name)",
    ("name",),
)
_IMPORT_DECLARATION = StructuralQuery("(import_declaration) @import", ("import",))
_ANNOTATION = StructuralQuery(
    """
    [
      (annotation name: (_) @name) @annotation
      (marker_annotation name: (_) @name) @annotation
    ]
    """,
    ("annotation", "name"),
)
_ELEMENT_VALUE_PAIR = StructuralQuery(
    "(element_value_pair key: (identifier) @key value: (_) @value) @pair",
    ("pair", "key", "value"),
)
_BODY_MEMBER = StructuralQuery(
    "[(field_declaration) (method_declaration) (constructor_declaration)] @member",
    ("member",),
)


def _type_by_name(kind: JavaFileType, name: str) -> StructuralQuery:
    return StructuralQuery(
        f"({kind.declaration_node_type} name: (identifier) @name (#eq? @name {quote(name)})) @declaration",
        ("declaration", "name"),
    )


def _type_with_modifiers(kind: JavaFileType) -> StructuralQuery:
    return StructuralQuery(
        f"({kind.declaration_node_type} (modifiers) @modifiers) @declaration",
        ("declaration", "modifiers"),
    )


# ---------------------------------------------------------------------------
# Package
# ---------------------------------------------------------------------------


def find_package_declaration(file: ParsedFile) -> Node | None:
    nodes = file.nodes(_PACKAGE_DECLARATION, "package")
    return nodes[0] if nodes else None


def find_package_name_scope(file: ParsedFile, package_node: Node) -> Node | None:
    """The dotted-name child of a package declaration."""
    match = file.first_match(_PACKAGE_NAME, within=package_node)
    return match["name"] if match else None


def package_name(file: ParsedFile) -> str | None:
    package_node = find_package_declaration(file)
    if package_node is None:
        return None
    scope = find_package_name_scope(file, package_node)
    return file.text_of(scope) if scope is not None else None


# ---------------------------------------------------------------------------
# Type declarations
# ---------------------------------------------------------------------------


def _has_public_modifier(modifiers: Node) -> bool:
    return any(child.type == "public" for child in modifiers.children)


def find_public_type_declaration(file: ParsedFile, kind: JavaFileType = JavaFileType.CLASS) -> Node | None:
    """Locate the type a file is about.

    A declaration named like the file wins; otherwise the first ``public`` one.
    """
    stem = file.file_stem()
    if stem:
        match = file.first_match(_type_by_name(kind, stem))
        if match is not None:
            return match["declaration"]
    for match in file.run_query(_type_with_modifiers(kind)):
        if _has_public_modifier(match["modifiers"]):
            return match["declaration"]
    logger.debug("No public %s declaration in %s", kind.value, file.path or "<buffer>")
    return None


def declaration_name(file: ParsedFile, declaration: Node) -> str | None:
    name = declaration.child_by_field_name("name")
    return file.text_of(name) if name is not None else None


def find_modifiers(declaration: Node) -> Node | None:
    for child in declaration.children:
        if child.type == "modifiers":
            return child
    return None


def find_superclass_name(file: ParsedFile, declaration: Node) -> str | None:
    superclass = declaration.child_by_field_name("superclass")
    if superclass is None:
        return None
    for child in superclass.named_children:
        if child.type == "generic_type":
            child = child.named_children[0]
        return file.text_of(child)
    return None


def find_type_body(declaration: Node) -> Node | None:
    return declaration.child_by_field_name("body")


# ---------------------------------------------------------------------------
# Annotations
# ---------------------------------------------------------------------------


def _name_matches(annotation_name: str, wanted: str) -> bool:
    simple = annotation_name.rpartition(".")[2]
    return annotation_name == wanted or simple == wanted.rpartition(".")[2]


def find_annotations(file: ParsedFile, scope: Node) -> list[Node]:
    return file.nodes(_ANNOTATION, "annotation", within=scope)


def find_annotation(file: ParsedFile, scope: Node, name: str) -> Node | None:
    """First annotation named ``name`` anywhere within ``scope``.

    ``name`` may be simple (``Entity``) or qualified (``jakarta.persistence.Entity``).
    """
    for match in file.run_query(_ANNOTATION, within=scope):
        if _name_matches(file.text_of(match["name"]), name):
            return match["annotation"]
    return None


def declared_annotations(file: ParsedFile, declaration: Node) -> list[Node]:
    """Annotations written on the declaration itself, not on its members."""
    modifiers = find_modifiers(declaration)
    if modifiers is None:
        return []
    return [n for n in find_annotations(file, modifiers) if n.parent == modifiers]


def declared_annotation(file: ParsedFile, declaration: Node, name: str) -> Node | None:
    for annotation in declared_annotations(file, declaration):
        name_node = annotation.child_by_field_name("name")
        if name_node is not None and _name_matches(file.text_of(name_node), name):
            return annotation
    return None


def annotation_argument(file: ParsedFile, annotation: Node, key: str) -> str | None:
    """Source text of the value bound to ``key`` in ``@X(key = value)``."""
    for match in file.run_query(_ELEMENT_VALUE_PAIR, within=annotation):
        if file.text_of(match["key"]) == key:
            return file.text_of(match["value"])
    return None


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


def _direct_members(file: ParsedFile, declaration: Node, node_types: set[str]) -> list[Node]:
    body = find_type_body(declaration)
    if body is None:
        return []
    return [n for n in file.nodes(_BODY_MEMBER, "member", within=body) if n.parent == body and n.type in node_types]


def find_field_declarations(file: ParsedFile, declaration: Node) -> list[Node]:
    return _direct_members(file, declaration, {"field_declaration"})


def find_method_declarations(file: ParsedFile, declaration: Node) -> list[Node]:
    """Methods and constructors declared directly in the type body."""
    return _direct_members(file, declaration, {"method_declaration", "constructor_declaration"})


def field_name(file: ParsedFile, field: Node) -> str | None:
    declarator = field.child_by_field_name("declarator")
    if declarator is None:
        return None
    name = declarator.child_by_field_name("name")
    return file.text_of(name) if name is not None else None


def field_type(file: ParsedFile, field: Node) -> str | None:
    type_node = field.child_by_field_name("type")
    return file.text_of(type_node) if type_node is not None else None


def find_field_by_name(file: ParsedFile, declaration: Node, name: str) -> Node | None:
    for field in find_field_declarations(file, declaration):
        if field_name(file, field) == name:
            return field
    return None


def find_id_field(file: ParsedFile, declaration: Node) -> Node | None:
    """First field of the type annotated with ``@Id``."""
    for field in find_field_declarations(file, declaration):
        if declared_annotation(file, field, "Id") is not None:
            return field
    return None


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImportInfo:
    node: Node
    qualified_name: str
    is_static: bool
    is_wildcard: bool

    @property
    def package(self) -> str:
        if self.is_wildcard:
            return self.qualified_name
        return self.qualified_name.rpartition(".")[0]

    @property
    def simple_name(self) -> str | None:
        return None if self.is_wildcard else self.qualified_name.rpartition(".")[2]


def find_import_declarations(file: ParsedFile) -> list[Node]:
    return file.nodes(_IMPORT_DECLARATION, "import")


def describe_import(file: ParsedFile, node: Node) -> ImportInfo | None:
    name = next((c for c in node.named_children if c.type in ("scoped_identifier", "identifier")), None)
    if name is None:
        return None
    return ImportInfo(
        node=node,
        qualified_name=file.text_of(name),
        is_static=any(c.type == "static" for c in node.children),
        is_wildcard=any(c.type == "asterisk" for c in node.children),
    )


def find_import(file: ParsedFile, package: str, name: str) -> Node | None:
    """The import that makes ``package.name`` visible, wildcards included."""
    for node in find_import_declarations(file):
        info = describe_import(file, node)
        if info is None or info.is_static:
            continue
        if info.is_wildcard and info.package == package:
            return node
        if info.qualified_name == f"{package}.{name}":
            return node
    return None


def imported_package_of(file: ParsedFile, simple_name: str) -> str | None:
    """Package of a single-type import ending in ``simple_name``."""
    for node in find_import_declarations(file):
        info = describe_import(file, node)
        if info is not None and not info.is_static and info.simple_name == simple_name:
            return info.package
    return None
