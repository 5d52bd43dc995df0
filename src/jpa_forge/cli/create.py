"""Commands that write Java sources: new files, entity fields and relationships."""

from typing import Annotated, Any

import typer

from jpa_forge.cli.discover import CwdOption
from jpa_forge.cli.output import emit
from jpa_forge.core import commands
from jpa_forge.core.types import (
    CascadeType,
    CollectionType,
    FetchType,
    JavaEnumType,
    JavaFieldTemporal,
    JavaFieldTimeZoneStorage,
    JavaFileType,
    JavaIdGeneration,
    JavaIdGenerationType,
    JavaSourceDirectoryType,
    MappingType,
    OtherType,
)

EntityPathOption = Annotated[str, typer.Option("--entity-path", help="Entity source file to edit.")]
SourceOption = Annotated[
    str | None, typer.Option("--source-b64", help="Unsaved editor buffer of the edited file, base64.")
]
FieldNameOption = Annotated[str, typer.Option("--field-name", help="Name of the new field.")]
PackageOption = Annotated[str, typer.Option("--package", help="Package of the new type.")]
NameOption = Annotated[str, typer.Option("--name", help="Name of the new type.")]


def _given(**options: Any) -> dict[str, Any]:
    """Drop unset options so the configuration defaults apply."""
    return {k: v for k, v in options.items() if v is not None}


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def create_java_file(
    package: PackageOption,
    name: NameOption,
    cwd: CwdOption = ".",
    file_type: Annotated[JavaFileType, typer.Option("--type", help="Kind of type to create.")] = JavaFileType.CLASS,
    source_directory: Annotated[
        JavaSourceDirectoryType, typer.Option(help="Source set to create the file in.")
    ] = JavaSourceDirectoryType.MAIN,
) -> None:
    """Create a class, interface, enum, record or annotation skeleton."""
    emit(commands.create_java_file(cwd, package, name, file_type, source_directory))


def create_jpa_entity(
    package: PackageOption,
    name: NameOption,
    cwd: CwdOption = ".",
    superclass_type: Annotated[str | None, typer.Option(help="Superclass to extend.")] = None,
    superclass_package: Annotated[str | None, typer.Option(help="Package of the superclass.")] = None,
) -> None:
    """Create an @Entity class mapped to a snake_case table."""
    emit(commands.create_jpa_entity(cwd, package, name, superclass_type, superclass_package))


def create_jpa_repository(
    entity_path: EntityPathOption,
    cwd: CwdOption = ".",
    superclass_b64: Annotated[
        str | None, typer.Option("--superclass-b64", help="Superclass source holding the @Id field, base64.")
    ] = None,
) -> None:
    """Create a Spring Data repository interface for an entity."""
    emit(commands.create_jpa_repository(cwd, entity_path, superclass_b64))


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def create_jpa_entity_id_field(
    entity_path: EntityPathOption,
    field_name: FieldNameOption,
    field_type: Annotated[str, typer.Option("--field-type", help="Identifier type, e.g. Long.")],
    cwd: CwdOption = ".",
    field_type_package: Annotated[str | None, typer.Option(help="Package of the identifier type.")] = None,
    id_generation: Annotated[
        JavaIdGeneration, typer.Option(help="Generation strategy.")
    ] = JavaIdGeneration.NONE,
    id_generation_type: Annotated[
        JavaIdGenerationType, typer.Option(help="Where the generator is declared.")
    ] = JavaIdGenerationType.NONE,
    generator_name: Annotated[str | None, typer.Option(help="Sequence generator name.")] = None,
    sequence_name: Annotated[str | None, typer.Option(help="Database sequence name.")] = None,
    initial_value: Annotated[int | None, typer.Option(help="Sequence initial value.")] = None,
    allocation_size: Annotated[int | None, typer.Option(help="Sequence allocation size.")] = None,
    nullable: Annotated[bool, typer.Option("--nullable/--not-nullable", help="Column nullability.")] = False,
    source_b64: SourceOption = None,
) -> None:
    """Add an @Id field to an entity."""
    options = _given(
        field_name=field_name,
        field_type=field_type,
        field_type_package_name=field_type_package,
        id_generation=id_generation,
        id_generation_type=id_generation_type,
        generator_name=generator_name,
        sequence_name=sequence_name,
        initial_value=initial_value,
        allocation_size=allocation_size,
        nullable=nullable,
    )
    emit(commands.create_jpa_entity_id_field(cwd, entity_path, source_b64, **options))


def create_jpa_entity_basic_field(
    entity_path: EntityPathOption,
    field_name: FieldNameOption,
    field_type: Annotated[str, typer.Option("--field-type", help="Field type, e.g. BigDecimal.")],
    cwd: CwdOption = ".",
    field_type_package: Annotated[str | None, typer.Option(help="Package of the field type.")] = None,
    length: Annotated[int | None, typer.Option(help="Column length.")] = None,
    precision: Annotated[int | None, typer.Option(help="Column precision.")] = None,
    scale: Annotated[int | None, typer.Option(help="Column scale.")] = None,
    temporal: Annotated[JavaFieldTemporal | None, typer.Option(help="Legacy temporal precision.")] = None,
    time_zone_storage: Annotated[
        JavaFieldTimeZoneStorage | None, typer.Option(help="Time zone storage strategy.")
    ] = None,
    unique: Annotated[bool, typer.Option("--unique", help="Unique column.")] = False,
    nullable: Annotated[bool, typer.Option("--nullable/--not-nullable", help="Column nullability.")] = True,
    large_object: Annotated[bool, typer.Option("--large-object", help="Map as @Lob.")] = False,
    source_b64: SourceOption = None,
) -> None:
    """Add a @Column field to an entity."""
    options = _given(
        field_name=field_name,
        field_type=field_type,
        field_type_package_name=field_type_package,
        length=length,
        precision=precision,
        scale=scale,
        temporal=temporal,
        time_zone_storage=time_zone_storage,
        unique=unique,
        nullable=nullable,
        large_object=large_object,
    )
    emit(commands.create_jpa_entity_basic_field(cwd, entity_path, source_b64, **options))


def create_jpa_entity_enum_field(
    entity_path: EntityPathOption,
    field_name: FieldNameOption,
    enum_type: Annotated[str, typer.Option("--enum-type", help="Enum class name.")],
    enum_package: Annotated[str, typer.Option("--enum-package", help="Package of the enum.")],
    cwd: CwdOption = ".",
    enum_type_storage: Annotated[
        JavaEnumType, typer.Option(help="Store the name or the ordinal.")
    ] = JavaEnumType.STRING,
    length: Annotated[int | None, typer.Option(help="Column length.")] = None,
    unique: Annotated[bool, typer.Option("--unique", help="Unique column.")] = False,
    nullable: Annotated[bool, typer.Option("--nullable/--not-nullable", help="Column nullability.")] = True,
    source_b64: SourceOption = None,
) -> None:
    """Add an @Enumerated field to an entity."""
    options = _given(
        field_name=field_name,
        enum_type=enum_type,
        enum_package_name=enum_package,
        enum_type_storage=enum_type_storage,
        length=length,
        unique=unique,
        nullable=nullable,
    )
    emit(commands.create_jpa_entity_enum_field(cwd, entity_path, source_b64, **options))


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------

InverseTypeOption = Annotated[str, typer.Option("--inverse-type", help="Target entity class.")]
OwningFieldOption = Annotated[str | None, typer.Option(help="Field name on the owning side.")]
InverseFieldOption = Annotated[str | None, typer.Option(help="Field name on the inverse side.")]
MappingOption = Annotated[MappingType | None, typer.Option(help="Unidirectional or bidirectional.")]
CascadeOption = Annotated[list[CascadeType] | None, typer.Option(help="Cascade type, repeatable.")]
OtherOption = Annotated[list[OtherType] | None, typer.Option(help="Extra option, repeatable.")]


def _association_options(
    inverse_type: str,
    owning_field_name: str | None,
    inverse_field_name: str | None,
    mapping_type: MappingType | None,
    owning_cascade: list[CascadeType] | None,
    inverse_cascade: list[CascadeType] | None,
    owning_other: list[OtherType] | None,
    inverse_other: list[OtherType] | None,
) -> dict[str, Any]:
    return _given(
        inverse_field_type=inverse_type,
        owning_side_field_name=owning_field_name,
        inverse_side_field_name=inverse_field_name,
        mapping_type=mapping_type,
        owning_side_cascades=tuple(owning_cascade or ()),
        inverse_side_cascades=tuple(inverse_cascade or ()),
        owning_side_other=tuple(owning_other or ()),
        inverse_side_other=tuple(inverse_other or ()),
    )


def create_jpa_many_to_one_relationship(
    entity_path: EntityPathOption,
    inverse_type: InverseTypeOption,
    cwd: CwdOption = ".",
    owning_field_name: OwningFieldOption = None,
    inverse_field_name: InverseFieldOption = None,
    mapping_type: MappingOption = None,
    fetch_type: Annotated[FetchType, typer.Option(help="Fetch strategy of the owning side.")] = FetchType.LAZY,
    collection_type: Annotated[
        CollectionType, typer.Option(help="Collection interface on the inverse side.")
    ] = CollectionType.SET,
    owning_cascade: CascadeOption = None,
    inverse_cascade: CascadeOption = None,
    owning_other: OtherOption = None,
    inverse_other: OtherOption = None,
    source_b64: SourceOption = None,
) -> None:
    """Wire @ManyToOne on the owning entity and @OneToMany on the target."""
    options = _association_options(
        inverse_type,
        owning_field_name,
        inverse_field_name,
        mapping_type,
        owning_cascade,
        inverse_cascade,
        owning_other,
        inverse_other,
    )
    options.update(fetch_type=fetch_type, collection_type=collection_type)
    emit(commands.create_jpa_many_to_one_relationship(cwd, entity_path, source_b64, **options))


def create_jpa_one_to_one_relationship(
    entity_path: EntityPathOption,
    inverse_type: InverseTypeOption,
    cwd: CwdOption = ".",
    owning_field_name: OwningFieldOption = None,
    inverse_field_name: InverseFieldOption = None,
    mapping_type: MappingOption = None,
    owning_cascade: CascadeOption = None,
    inverse_cascade: CascadeOption = None,
    owning_other: OtherOption = None,
    inverse_other: OtherOption = None,
    source_b64: SourceOption = None,
) -> None:
    """Wire @OneToOne with a join column on the owning entity."""
    options = _association_options(
        inverse_type,
        owning_field_name,
        inverse_field_name,
        mapping_type,
        owning_cascade,
        inverse_cascade,
        owning_other,
        inverse_other,
    )
    emit(commands.create_jpa_one_to_one_relationship(cwd, entity_path, source_b64, **options))
