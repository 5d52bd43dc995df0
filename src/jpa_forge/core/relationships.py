"""Two-file association wiring: the owning entity first, then the inverse one.

The two writes are not transactional. Once the owning side is saved, a failure on
the inverse side is reported as a partial result and nothing is rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from jpa_forge.config import get_persistence_package
from jpa_forge.core.annotations import Annotation, FieldSpec, array_literal
from jpa_forge.core.discovery import file_response, find_entity_file
from jpa_forge.core.editing import ProcessedImports, add_field, add_imports, require_public_class
from jpa_forge.core.fields import load_edit_target
from jpa_forge.core.locator import declaration_name, package_name
from jpa_forge.core.naming import field_name_for_type, to_snake_case
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.paths import resolve_within
from jpa_forge.core.types import CascadeType, FetchType, OtherType
from jpa_forge.errors import JpaForgeError, SemanticNodeNotFound
from jpa_forge.models import (
    AssociationConfig,
    FileResponse,
    ManyToOneFieldConfig,
    OneToOneFieldConfig,
    RelationshipResponse,
)

logger = logging.getLogger(__name__)


class RelationshipStep(str, Enum):
    START = "start"
    OWNING_LOCATED = "owning_located"
    OWNING_PATCHED = "owning_patched"
    INVERSE_LOCATED = "inverse_located"
    INVERSE_PATCHED = "inverse_patched"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class EntityRef:
    type: str
    package: str | None
    path: Path


@dataclass(frozen=True)
class SideEdit:
    field: FieldSpec
    imports: ProcessedImports


SideBuilder = Callable[[EntityRef, EntityRef], SideEdit]


def render_cascades(cascades: tuple[CascadeType, ...]) -> str | None:
    """``CascadeType.ALL`` when every operation is selected, one value bare, else a list."""
    if not cascades:
        return None
    selected = set(cascades)
    operations = set(CascadeType) - {CascadeType.ALL}
    if CascadeType.ALL in selected or operations <= selected:
        return "CascadeType.ALL"
    ordered = [c for c in CascadeType if c in selected]
    return array_literal(f"CascadeType.{c.java_name}" for c in ordered)


def _with_cascades(annotation: Annotation, cascades: tuple[CascadeType, ...], imports: ProcessedImports) -> None:
    rendered = render_cascades(cascades)
    if rendered is not None:
        imports.add(get_persistence_package(), "CascadeType")
        annotation.with_argument("cascade", rendered)


def _join_column(field_name: str, other: tuple[OtherType, ...], imports: ProcessedImports) -> Annotation:
    imports.add(get_persistence_package(), "JoinColumn")
    join_column = Annotation("JoinColumn").with_string("name", f"{to_snake_case(field_name)}_id")
    join_column.with_bool("nullable", OtherType.MANDATORY not in other)
    if OtherType.UNIQUE in other:
        join_column.with_bool("unique", True)
    return join_column


class RelationshipWiring:
    """Drives one association through its steps and records where it stopped."""

    def __init__(self, cwd: str | Path, config: AssociationConfig) -> None:
        self.cwd = cwd
        self.config = config
        self.step = RelationshipStep.START
        self.owning: EntityRef | None = None
        self.inverse: EntityRef | None = None
        self.owning_side: FileResponse | None = None
        self.inverse_side: FileResponse | None = None

    def advance(self, step: RelationshipStep) -> None:
        logger.debug("Relationship %s -> %s", self.step.value, step.value)
        self.step = step

    def locate_owning(self, owning_path: str | Path, source_b64: str | None) -> ParsedFile:
        file = load_edit_target(self.cwd, owning_path, source_b64)
        declaration = require_public_class(file)
        owning_type = declaration_name(file, declaration)
        assert owning_type is not None and file.path is not None

        inverse_type = self.config.inverse_field_type
        inverse_path = find_entity_file(self.cwd, inverse_type)
        if inverse_path is None:
            raise SemanticNodeNotFound(f"No entity '{inverse_type}' found under {self.cwd}")
        inverse_path = resolve_within(self.cwd, inverse_path)
        inverse_package = package_name(ParsedFile.from_path(inverse_path))

        self.owning = EntityRef(owning_type, package_name(file), file.path)
        self.inverse = EntityRef(inverse_type, inverse_package, inverse_path)
        self.advance(RelationshipStep.OWNING_LOCATED)
        return file

    def patch_side(self, file: ParsedFile, edit: SideEdit) -> ParsedFile:
        file = add_field(file, edit.field)
        file = add_imports(file, edit.imports.all())
        file.save()
        return file

    def run(
        self,
        owning_path: str | Path,
        source_b64: str | None,
        owning_builder: SideBuilder,
        inverse_builder: SideBuilder,
    ) -> RelationshipResponse:
        # Failures up to and including the owning write leave nothing behind on disk.
        owning_file = self.locate_owning(owning_path, source_b64)
        assert self.owning is not None and self.inverse is not None
        owning_file = self.patch_side(owning_file, owning_builder(self.owning, self.inverse))
        self.owning_side = file_response(owning_file)
        self.advance(RelationshipStep.OWNING_PATCHED)

        if not self.config.is_bidirectional:
            self.advance(RelationshipStep.DONE)
            return self._response("Unidirectional relationship created")

        attempted = RelationshipStep.INVERSE_LOCATED
        try:
            inverse_file = load_edit_target(self.cwd, self.inverse.path)
            self.advance(RelationshipStep.INVERSE_LOCATED)
            attempted = RelationshipStep.INVERSE_PATCHED
            inverse_file = self.patch_side(inverse_file, inverse_builder(self.inverse, self.owning))
        except (JpaForgeError, OSError) as exc:
            self.advance(RelationshipStep.FAILED)
            logger.error("Inverse side %s failed at %s: %s", self.inverse.path, attempted.value, exc)
            return self._response(
                "Owning side updated but inverse side failed",
                failed_step=attempted,
                error=str(exc),
            )
        self.inverse_side = file_response(inverse_file)
        self.advance(RelationshipStep.INVERSE_PATCHED)
        self.advance(RelationshipStep.DONE)
        return self._response("Bidirectional relationship created")

    def _response(
        self, message: str, failed_step: RelationshipStep | None = None, error: str | None = None
    ) -> RelationshipResponse:
        return RelationshipResponse(
            success=failed_step is None,
            message=message,
            owning_side_entity_path=str(self.owning.path) if self.owning else None,
            inverse_side_entity_path=str(self.inverse.path) if self.inverse else None,
            owning_side_updated=self.owning_side is not None,
            inverse_side_updated=self.inverse_side is not None,
            owning_side=self.owning_side,
            inverse_side=self.inverse_side,
            failed_step=failed_step.value if failed_step is not None else None,
            error=error,
        )


# ---------------------------------------------------------------------------
# Many-to-one
# ---------------------------------------------------------------------------


def _many_to_one_names(config: AssociationConfig, owning: EntityRef, inverse: EntityRef) -> tuple[str, str]:
    owning_field = config.owning_side_field_name or field_name_for_type(inverse.type)
    inverse_field = config.inverse_side_field_name or field_name_for_type(owning.type, plural=True)
    return owning_field, inverse_field


def create_many_to_one_relationship(
    cwd: str | Path,
    owning_path: str | Path,
    config: ManyToOneFieldConfig,
    owning_source_b64: str | None = None,
) -> RelationshipResponse:
    """``@ManyToOne`` on the owning entity, ``@OneToMany`` collection on the target."""
    persistence = get_persistence_package()

    def owning_side(owning: EntityRef, inverse: EntityRef) -> SideEdit:
        owning_field, _ = _many_to_one_names(config, owning, inverse)
        imports = ProcessedImports()
        imports.add(persistence, "ManyToOne")
        many_to_one = Annotation("ManyToOne")
        if config.fetch_type is not FetchType.NONE:
            imports.add(persistence, "FetchType")
            many_to_one.with_argument("fetch", f"FetchType.{config.fetch_type.java_name}")
        _with_cascades(many_to_one, config.owning_side_cascades, imports)
        many_to_one.with_bool("optional", OtherType.MANDATORY not in config.owning_side_other)
        join_column = _join_column(owning_field, config.owning_side_other, imports)
        if inverse.package:
            imports.set_entity_import(inverse.package, inverse.type)
        return SideEdit(FieldSpec(inverse.type, owning_field, (many_to_one, join_column)), imports)

    def inverse_side(inverse: EntityRef, owning: EntityRef) -> SideEdit:
        owning_field, inverse_field = _many_to_one_names(config, owning, inverse)
        collection = config.collection_type.java_type
        imports = ProcessedImports()
        imports.add(persistence, "OneToMany")
        imports.add("java.util", collection)
        one_to_many = Annotation("OneToMany").with_string("mappedBy", owning_field)
        _with_cascades(one_to_many, config.inverse_side_cascades, imports)
        if OtherType.ORPHAN_REMOVAL in config.inverse_side_other:
            one_to_many.with_bool("orphanRemoval", True)
        if owning.package:
            imports.set_entity_import(owning.package, owning.type)
        return SideEdit(FieldSpec(f"{collection}<{owning.type}>", inverse_field, (one_to_many,)), imports)

    wiring = RelationshipWiring(cwd, config)
    return wiring.run(owning_path, owning_source_b64, owning_side, inverse_side)


# ---------------------------------------------------------------------------
# One-to-one
# ---------------------------------------------------------------------------


def _one_to_one_names(config: AssociationConfig, owning: EntityRef, inverse: EntityRef) -> tuple[str, str]:
    owning_field = config.owning_side_field_name or field_name_for_type(inverse.type)
    inverse_field = config.inverse_side_field_name or field_name_for_type(owning.type)
    return owning_field, inverse_field


def _one_to_one(
    cascades: tuple[CascadeType, ...], other: tuple[OtherType, ...], imports: ProcessedImports
) -> Annotation:
    imports.add(get_persistence_package(), "OneToOne")
    annotation = Annotation("OneToOne")
    _with_cascades(annotation, cascades, imports)
    annotation.with_bool("optional", OtherType.MANDATORY not in other)
    if OtherType.ORPHAN_REMOVAL in other:
        annotation.with_bool("orphanRemoval", True)
    return annotation


def create_one_to_one_relationship(
    cwd: str | Path,
    owning_path: str | Path,
    config: OneToOneFieldConfig,
    owning_source_b64: str | None = None,
) -> RelationshipResponse:
    """``@OneToOne`` with a join column on the owning entity, ``mappedBy`` on the target."""

    def owning_side(owning: EntityRef, inverse: EntityRef) -> SideEdit:
        owning_field, _ = _one_to_one_names(config, owning, inverse)
        imports = ProcessedImports()
        one_to_one = _one_to_one(config.owning_side_cascades, config.owning_side_other, imports)
        join_column = _join_column(owning_field, config.owning_side_other, imports)
        if inverse.package:
            imports.set_entity_import(inverse.package, inverse.type)
        return SideEdit(FieldSpec(inverse.type, owning_field, (one_to_one, join_column)), imports)

    def inverse_side(inverse: EntityRef, owning: EntityRef) -> SideEdit:
        owning_field, inverse_field = _one_to_one_names(config, owning, inverse)
        imports = ProcessedImports()
        one_to_one = Annotation("OneToOne").with_string("mappedBy", owning_field)
        mapped = _one_to_one(config.inverse_side_cascades, config.inverse_side_other, imports)
        one_to_one.arguments.extend(mapped.arguments)
        if owning.package:
            imports.set_entity_import(owning.package, owning.type)
        return SideEdit(FieldSpec(owning.type, inverse_field, (one_to_one,)), imports)

    wiring = RelationshipWiring(cwd, config)
    return wiring.run(owning_path, owning_source_b64, owning_side, inverse_side)
