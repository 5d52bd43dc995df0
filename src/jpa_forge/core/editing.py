"""Single-purpose edits: each locates, computes one insertion point, patches, re-parses.

Every function takes a ``ParsedFile`` and returns a new one; nothing is written to disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from tree_sitter import Node

from jpa_forge.core.annotations import Annotation, FieldSpec
from jpa_forge.core.insertion import AnnotationEdit, FieldEdit, ImportEdit, compute_insertion_point, render_edit
from jpa_forge.core.locator import (
    find_field_by_name,
    find_import,
    find_public_type_declaration,
    package_name,
)
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.patch import patch
from jpa_forge.core.types import JavaFileType
from jpa_forge.errors import SemanticNodeNotFound, ValidationError

logger = logging.getLogger(__name__)

_IMPLICIT_PACKAGES = frozenset({"java.lang"})


@dataclass
class ProcessedImports:
    """Imports one side of an edit needs: the other entity, then everything else."""

    entity_import: tuple[str, str] | None = None
    imports: list[tuple[str, str]] = field(default_factory=list)

    def set_entity_import(self, package: str, name: str) -> None:
        self.entity_import = (package, name)

    def add(self, package: str, name: str) -> None:
        if (package, name) not in self.imports:
            self.imports.append((package, name))

    def all(self) -> list[tuple[str, str]]:
        ordered = list(self.imports)
        if self.entity_import is not None and self.entity_import not in ordered:
            ordered.append(self.entity_import)
        return ordered


def needs_import(file: ParsedFile, package: str | None, name: str) -> bool:
    if not package or package in _IMPLICIT_PACKAGES:
        return False
    if package == package_name(file):
        return False
    return find_import(file, package, name) is None


def add_import(file: ParsedFile, package: str | None, name: str) -> ParsedFile:
    """Add ``import package.name;`` unless it is already visible."""
    base_name = name.removesuffix("[]")
    if not needs_import(file, package, base_name):
        return file
    point = compute_insertion_point(file, None, ImportEdit())
    new_file, _ = patch(file, [render_edit(point, f"import {package}.{base_name};")])
    logger.debug("Imported %s.%s", package, base_name)
    return new_file


def add_imports(file: ParsedFile, imports: Iterable[tuple[str | None, str]]) -> ParsedFile:
    for package, name in imports:
        file = add_import(file, package, name)
    return file


def require_public_class(file: ParsedFile) -> Node:
    declaration = find_public_type_declaration(file, JavaFileType.CLASS)
    if declaration is None:
        raise SemanticNodeNotFound(f"No public class found in {file.path or '<buffer>'}")
    return declaration


def add_field(file: ParsedFile, spec: FieldSpec) -> ParsedFile:
    """Insert ``spec`` (annotations included) into the file's public class."""
    declaration = require_public_class(file)
    if find_field_by_name(file, declaration, spec.name) is not None:
        raise ValidationError(spec.name, "a field with this name already exists")
    point = compute_insertion_point(file, declaration, FieldEdit())
    new_file, _ = patch(file, [render_edit(point, spec.render())])
    logger.info("Added field %s %s (%s)", spec.type, spec.name, point.kind.value)
    return new_file


def annotate_public_class(file: ParsedFile, *annotations: Annotation) -> ParsedFile:
    """Place ``annotations`` above the public class, before any existing ones."""
    declaration = require_public_class(file)
    point = compute_insertion_point(file, declaration, AnnotationEdit())
    text = "\n".join(a.render() for a in annotations)
    new_file, _ = patch(file, [render_edit(point, text)])
    return new_file
