"""FastMCP server exposing jpa-forge commands as tools."""

from __future__ import annotations

from typing import Any

from fastmcp import FastMCP

from jpa_forge.core import commands
from jpa_forge.core.types import (
    CascadeType,
    CollectionType,
    FetchType,
    JavaBasicFieldTypeKind,
    JavaFileType,
    JavaSourceDirectoryType,
    MappingType,
    OtherType,
)


def _given(**options: Any) -> dict[str, Any]:
    return {k: v for k, v in options.items() if v is not None}


def create_mcp_server() -> FastMCP:
    """Create a FastMCP server whose tools return command envelopes."""

    mcp = FastMCP("jpa-forge", instructions="Inspect and edit JPA entities in a Java project.")

    @mcp.tool()
    def get_all_files(cwd: str, extension: str = ".java") -> dict[str, Any]:
        """List every file with the given extension under the project."""
        return commands.get_all_files(cwd, extension).model_dump(mode="json")

    @mcp.tool()
    def get_java_files(cwd: str, file_type: JavaFileType = JavaFileType.CLASS) -> dict[str, Any]:
        """List main sources whose public type is of the given kind."""
        return commands.get_java_files(cwd, file_type).model_dump(mode="json")

    @mcp.tool()
    def get_all_jpa_entities(cwd: str) -> dict[str, Any]:
        """List classes annotated with @Entity."""
        return commands.get_all_jpa_entities(cwd).model_dump(mode="json")

    @mcp.tool()
    def get_all_jpa_mapped_superclasses(cwd: str) -> dict[str, Any]:
        """List classes annotated with @MappedSuperclass."""
        return commands.get_all_jpa_mapped_superclasses(cwd).model_dump(mode="json")

    @mcp.tool()
    def get_all_packages(
        cwd: str, source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN
    ) -> dict[str, Any]:
        """List declared packages and the root package."""
        return commands.get_all_packages(cwd, source_directory).model_dump(mode="json")

    @mcp.tool()
    def get_java_basic_types(
        cwd: str = ".", kind: JavaBasicFieldTypeKind = JavaBasicFieldTypeKind.ALL
    ) -> dict[str, Any]:
        """List the Java basic types offered for a field kind."""
        return commands.get_java_basic_types(cwd, kind).model_dump(mode="json")

    @mcp.tool()
    def get_jpa_entity_info(cwd: str, entity_path: str, source_b64: str | None = None) -> dict[str, Any]:
        """Describe an entity: type, package, superclass and identifier."""
        return commands.get_jpa_entity_info(cwd, entity_path, source_b64).model_dump(mode="json")

    @mcp.tool()
    def create_java_file(
        cwd: str,
        package: str,
        name: str,
        file_type: JavaFileType = JavaFileType.CLASS,
        source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN,
    ) -> dict[str, Any]:
        """Create a class, interface, enum, record or annotation skeleton."""
        return commands.create_java_file(cwd, package, name, file_type, source_directory).model_dump(mode="json")

    @mcp.tool()
    def create_jpa_entity(
        cwd: str,
        package: str,
        name: str,
        superclass_type: str | None = None,
        superclass_package_name: str | None = None,
    ) -> dict[str, Any]:
        """Create an @Entity class mapped to a snake_case table."""
        response = commands.create_jpa_entity(cwd, package, name, superclass_type, superclass_package_name)
        return response.model_dump(mode="json")

    @mcp.tool()
    def create_jpa_repository(cwd: str, entity_path: str, superclass_b64: str | None = None) -> dict[str, Any]:
        """Create a Spring Data repository interface for an entity."""
        return commands.create_jpa_repository(cwd, entity_path, superclass_b64).model_dump(mode="json")

    @mcp.tool()
    def create_jpa_entity_id_field(
        cwd: str,
        entity_path: str,
        field_name: str,
        field_type: str,
        field_type_package_name: str | None = None,
        id_generation: str = "none",
        id_generation_type: str = "none",
        generator_name: str | None = None,
        sequence_name: str | None = None,
        initial_value: int | None = None,
        allocation_size: int | None = None,
        nullable: bool = False,
        source_b64: str | None = None,
    ) -> dict[str, Any]:
        """Add an @Id field to an entity."""
        options = _given(
            field_name=field_name,
            field_type=field_type,
            field_type_package_name=field_type_package_name,
            id_generation=id_generation,
            id_generation_type=id_generation_type,
            generator_name=generator_name,
            sequence_name=sequence_name,
            initial_value=initial_value,
            allocation_size=allocation_size,
            nullable=nullable,
        )
        return commands.create_jpa_entity_id_field(cwd, entity_path, source_b64, **options).model_dump(mode="json")

    @mcp.tool()
    def create_jpa_entity_basic_field(
        cwd: str,
        entity_path: str,
        field_name: str,
        field_type: str,
        field_type_package_name: str | None = None,
        length: int | None = None,
        precision: int | None = None,
        scale: int | None = None,
        temporal: str | None = None,
        time_zone_storage: str | None = None,
        unique: bool = False,
        nullable: bool = True,
        large_object: bool = False,
        source_b64: str | None = None,
    ) -> dict[str, Any]:
        """Add a @Column field to an entity."""
        options = _given(
            field_name=field_name,
            field_type=field_type,
            field_type_package_name=field_type_package_name,
            length=length,
            precision=precision,
            scale=scale,
            temporal=temporal,
            time_zone_storage=time_zone_storage,
            unique=unique,
            nullable=nullable,
            large_object=large_object,
        )
        response = commands.create_jpa_entity_basic_field(cwd, entity_path, source_b64, **options)
        return response.model_dump(mode="json")

    @mcp.tool()
    def create_jpa_entity_enum_field(
        cwd: str,
        entity_path: str,
        field_name: str,
        enum_type: str,
        enum_package_name: str,
        enum_type_storage: str = "string",
        length: int | None = None,
        unique: bool = False,
        nullable: bool = True,
        source_b64: str | None = None,
    ) -> dict[str, Any]:
        """Add an @Enumerated field to an entity."""
        options = _given(
            field_name=field_name,
            enum_type=enum_type,
            enum_package_name=enum_package_name,
            enum_type_storage=enum_type_storage,
            length=length,
            unique=unique,
            nullable=nullable,
        )
        response = commands.create_jpa_entity_enum_field(cwd, entity_path, source_b64, **options)
        return response.model_dump(mode="json")

    @mcp.tool()
    def create_jpa_many_to_one_relationship(
        cwd: str,
        entity_path: str,
        inverse_field_type: str,
        owning_side_field_name: str | None = None,
        inverse_side_field_name: str | None = None,
        mapping_type: MappingType | None = None,
        fetch_type: FetchType = FetchType.LAZY,
        collection_type: CollectionType = CollectionType.SET,
        owning_side_cascades: list[CascadeType] | None = None,
        inverse_side_cascades: list[CascadeType] | None = None,
        owning_side_other: list[OtherType] | None = None,
        inverse_side_other: list[OtherType] | None = None,
        source_b64: str | None = None,
    ) -> dict[str, Any]:
        """Wire @ManyToOne on the owning entity and @OneToMany on the target."""
        options = _given(
            inverse_field_type=inverse_field_type,
            owning_side_field_name=owning_side_field_name,
            inverse_side_field_name=inverse_side_field_name,
            mapping_type=mapping_type,
            fetch_type=fetch_type,
            collection_type=collection_type,
            owning_side_cascades=tuple(owning_side_cascades or ()),
            inverse_side_cascades=tuple(inverse_side_cascades or ()),
            owning_side_other=tuple(owning_side_other or ()),
            inverse_side_other=tuple(inverse_side_other or ()),
        )
        response = commands.create_jpa_many_to_one_relationship(cwd, entity_path, source_b64, **options)
        return response.model_dump(mode="json")

    @mcp.tool()
    def create_jpa_one_to_one_relationship(
        cwd: str,
        entity_path: str,
        inverse_field_type: str,
        owning_side_field_name: str | None = None,
        inverse_side_field_name: str | None = None,
        mapping_type: MappingType | None = None,
        owning_side_cascades: list[CascadeType] | None = None,
        inverse_side_cascades: list[CascadeType] | None = None,
        owning_side_other: list[OtherType] | None = None,
        inverse_side_other: list[OtherType] | None = None,
        source_b64: str | None = None,
    ) -> dict[str, Any]:
        """Wire @OneToOne with a join column on the owning entity."""
        options = _given(
            inverse_field_type=inverse_field_type,
            owning_side_field_name=owning_side_field_name,
            inverse_side_field_name=inverse_side_field_name,
            mapping_type=mapping_type,
            owning_side_cascades=tuple(owning_side_cascades or ()),
            inverse_side_cascades=tuple(inverse_side_cascades or ()),
            owning_side_other=tuple(owning_side_other or ()),
            inverse_side_other=tuple(inverse_side_other or ()),
        )
        response = commands.create_jpa_one_to_one_relationship(cwd, entity_path, source_b64, **options)
        return response.model_dump(mode="json")

    return mcp
