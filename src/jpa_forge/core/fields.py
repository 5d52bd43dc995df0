"""Id, basic and enum field creation on existing JPA entities."""

from __future__ import annotations

import logging
from pathlib import Path

from jpa_forge.config import get_persistence_package
from jpa_forge.core.annotations import Annotation, FieldSpec
from jpa_forge.core.catalogs import get_basic_types, type_names
from jpa_forge.core.discovery import file_response
from jpa_forge.core.editing import ProcessedImports, add_field, add_imports
from jpa_forge.core.naming import to_snake_case
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.paths import resolve_within
from jpa_forge.core.types import (
    JavaBasicFieldTypeKind,
    JavaEnumType,
    JavaFieldTimeZoneStorage,
    JavaIdGeneration,
    JavaIdGenerationType,
)
from jpa_forge.errors import ValidationError
from jpa_forge.models import BasicFieldConfig, EnumFieldConfig, FileResponse, IdFieldConfig

logger = logging.getLogger(__name__)

_HIBERNATE_ANNOTATIONS = "org.hibernate.annotations"
# Matched by simple name, so java.util.Date and java.sql.Date both qualify.
_TEMPORAL_TYPES = frozenset({"Date", "Calendar"})
_DEFAULT_SEQUENCE_INITIAL_VALUE = 1
_DEFAULT_SEQUENCE_ALLOCATION_SIZE = 50
_DEFAULT_ENUM_STRING_LENGTH = 255


def load_edit_target(cwd: str | Path, path: str | Path, source_b64: str | None = None) -> ParsedFile:
    """Parse the file an edit will be written to.

    The path is always checked against ``cwd``; when the editor supplies its unsaved
    buffer, that buffer is parsed instead of the file on disk.
    """
    target = resolve_within(cwd, path)
    if source_b64 is not None:
        return ParsedFile.from_base64(source_b64, target)
    return ParsedFile.from_path(target)


def _catalog_package(type_name: str) -> str | None:
    candidates = {t.package_path for t in get_basic_types(JavaBasicFieldTypeKind.ALL) if t.id.endswith(f".{type_name}")}
    return candidates.pop() if len(candidates) == 1 else None


def _write(file: ParsedFile, spec: FieldSpec, imports: ProcessedImports) -> FileResponse:
    file = add_field(file, spec)
    file = add_imports(file, imports.all())
    file.save()
    return file_response(file)


# ---------------------------------------------------------------------------
# Id field
# ---------------------------------------------------------------------------


def build_id_field(config: IdFieldConfig) -> tuple[FieldSpec, ProcessedImports]:
    persistence = get_persistence_package()
    imports = ProcessedImports()
    imports.add(persistence, "Id")
    annotations = [Annotation("Id")]

    if config.id_generation is not JavaIdGeneration.NONE:
        imports.add(persistence, "GeneratedValue")
        imports.add(persistence, "GenerationType")
        generated = Annotation("GeneratedValue").with_argument(
            "strategy", f"GenerationType.{config.id_generation.java_name}"
        )
        annotations.append(generated)
        exclusive_sequence = (
            config.id_generation is JavaIdGeneration.SEQUENCE
            and config.id_generation_type is JavaIdGenerationType.ENTITY_EXCLUSIVE_GENERATION
        )
        if exclusive_sequence and config.generator_name:
            imports.add(persistence, "SequenceGenerator")
            generated.with_string("generator", config.generator_name)
            sequence = Annotation("SequenceGenerator").with_string("name", config.generator_name)
            if config.sequence_name:
                sequence.with_string("sequenceName", config.sequence_name)
            if config.initial_value is not None and config.initial_value != _DEFAULT_SEQUENCE_INITIAL_VALUE:
                sequence.with_argument("initialValue", str(config.initial_value))
            if config.allocation_size is not None and config.allocation_size != _DEFAULT_SEQUENCE_ALLOCATION_SIZE:
                sequence.with_argument("allocationSize", str(config.allocation_size))
            annotations.append(sequence)

    imports.add(persistence, "Column")
    annotations.append(
        Annotation("Column").with_string("name", to_snake_case(config.field_name)).with_bool("nullable", config.nullable)
    )
    type_package = config.field_type_package_name or _catalog_package(config.field_type)
    if type_package:
        imports.add(type_package, config.field_type)
    return FieldSpec(config.field_type, config.field_name, tuple(annotations)), imports


def create_id_field(
    cwd: str | Path, entity_path: str | Path, config: IdFieldConfig, source_b64: str | None = None
) -> FileResponse:
    file = load_edit_target(cwd, entity_path, source_b64)
    spec, imports = build_id_field(config)
    return _write(file, spec, imports)


# ---------------------------------------------------------------------------
# Basic field
# ---------------------------------------------------------------------------


def build_basic_field(config: BasicFieldConfig) -> tuple[FieldSpec, ProcessedImports]:
    persistence = get_persistence_package()
    field_type = config.field_type
    imports = ProcessedImports()
    annotations: list[Annotation] = []

    if config.time_zone_storage is not None and config.time_zone_storage is not JavaFieldTimeZoneStorage.AUTO:
        if field_type not in type_names(JavaBasicFieldTypeKind.TYPES_WITH_TIME_ZONE_STORAGE):
            raise ValidationError(field_type, "time zone storage only applies to zoned date/time types")
        imports.add(_HIBERNATE_ANNOTATIONS, "TimeZoneStorage")
        imports.add(_HIBERNATE_ANNOTATIONS, "TimeZoneStorageType")
        annotations.append(
            Annotation("TimeZoneStorage", value=f"TimeZoneStorageType.{config.time_zone_storage.java_name}")
        )

    if config.temporal is not None:
        if field_type not in _TEMPORAL_TYPES:
            raise ValidationError(field_type, "temporal precision only applies to Date and Calendar")
        imports.add(persistence, "Temporal")
        imports.add(persistence, "TemporalType")
        annotations.append(Annotation("Temporal", value=f"TemporalType.{config.temporal.java_name}"))

    if config.large_object:
        if field_type not in type_names(JavaBasicFieldTypeKind.TYPES_WITH_EXTRA_OTHER):
            raise ValidationError(field_type, "only string, binary and LOB types can be large objects")
        imports.add(persistence, "Lob")
        annotations.append(Annotation("Lob"))

    column = Annotation("Column").with_string("name", to_snake_case(config.field_name))
    if config.length is not None:
        if field_type not in type_names(JavaBasicFieldTypeKind.TYPES_WITH_LENGTH):
            raise ValidationError(field_type, "length only applies to character and textual types")
        column.with_argument("length", str(config.length))
    if config.precision is not None or config.scale is not None:
        if field_type not in type_names(JavaBasicFieldTypeKind.TYPES_WITH_PRECISION_AND_SCALE):
            raise ValidationError(field_type, "precision and scale only apply to BigDecimal")
        if config.precision is not None:
            column.with_argument("precision", str(config.precision))
        if config.scale is not None:
            column.with_argument("scale", str(config.scale))
    if config.unique:
        column.with_bool("unique", True)
    if not config.nullable:
        column.with_bool("nullable", False)
    imports.add(persistence, "Column")
    annotations.append(column)

    type_package = config.field_type_package_name or _catalog_package(field_type)
    if type_package:
        imports.add(type_package, field_type)
    return FieldSpec(field_type, config.field_name, tuple(annotations)), imports


def create_basic_field(
    cwd: str | Path, entity_path: str | Path, config: BasicFieldConfig, source_b64: str | None = None
) -> FileResponse:
    file = load_edit_target(cwd, entity_path, source_b64)
    spec, imports = build_basic_field(config)
    return _write(file, spec, imports)


# ---------------------------------------------------------------------------
# Enum field
# ---------------------------------------------------------------------------


def build_enum_field(config: EnumFieldConfig) -> tuple[FieldSpec, ProcessedImports]:
    persistence = get_persistence_package()
    imports = ProcessedImports()
    imports.add(persistence, "Enumerated")
    imports.add(persistence, "EnumType")
    imports.add(persistence, "Column")

    column = Annotation("Column").with_string("name", to_snake_case(config.field_name))
    if (
        config.enum_type_storage is JavaEnumType.STRING
        and config.length is not None
        and config.length != _DEFAULT_ENUM_STRING_LENGTH
    ):
        column.with_argument("length", str(config.length))
    if not config.nullable:
        column.with_bool("nullable", False)
    if config.unique:
        column.with_bool("unique", True)

    annotations = (
        Annotation("Enumerated", value=f"EnumType.{config.enum_type_storage.java_name}"),
        column,
    )
    imports.set_entity_import(config.enum_package_name, config.enum_type)
    return FieldSpec(config.enum_type, config.field_name, annotations), imports


def create_enum_field(
    cwd: str | Path, entity_path: str | Path, config: EnumFieldConfig, source_b64: str | None = None
) -> FileResponse:
    file = load_edit_target(cwd, entity_path, source_b64)
    spec, imports = build_enum_field(config)
    return _write(file, spec, imports)
