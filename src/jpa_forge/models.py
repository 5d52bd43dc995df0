from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jpa_forge.core.types import (
    CascadeType,
    CollectionType,
    FetchType,
    JavaEnumType,
    JavaFieldTemporal,
    JavaFieldTimeZoneStorage,
    JavaIdGeneration,
    JavaIdGenerationType,
    MappingType,
    OtherType,
)
from jpa_forge.core.validators import validate_class_name, validate_identifier, validate_package_name
from jpa_forge.errors import ValidationError

# --- Response envelope ---


class Response(BaseModel):
    command: str
    cwd: str
    success: bool
    data: Any | None = None
    error: str | None = None
    error_kind: str | None = None

    @classmethod
    def ok(cls, command: str, cwd: str, data: Any) -> Response:
        return cls(command=command, cwd=cwd, success=True, data=data)

    @classmethod
    def failure(cls, command: str, cwd: str, error: str, error_kind: str, data: Any | None = None) -> Response:
        return cls(command=command, cwd=cwd, success=False, data=data, error=error, error_kind=error_kind)


# --- Payloads ---


class FileResponse(BaseModel):
    file_type: str
    file_package_name: str
    file_path: str


class GetFilesResponse(BaseModel):
    files: list[FileResponse]
    files_count: int


class GetPackagesResponse(BaseModel):
    packages: list[str]
    packages_count: int
    root_package_name: str | None = None


class BasicJavaType(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    package_path: str | None = None


class JpaEntityInfo(BaseModel):
    is_jpa_entity: bool
    entity_type: str | None = None
    entity_package_name: str | None = None
    entity_path: str | None = None
    superclass_type: str | None = None
    id_field_type: str | None = None
    id_field_package_name: str | None = None


class RelationshipResponse(BaseModel):
    """Outcome of wiring an association, one status per side."""

    success: bool
    message: str
    owning_side_entity_path: str | None = None
    inverse_side_entity_path: str | None = None
    owning_side_updated: bool = False
    inverse_side_updated: bool = False
    owning_side: FileResponse | None = None
    inverse_side: FileResponse | None = None
    failed_step: str | None = None
    error: str | None = None


# --- Field configurations ---


class IdFieldConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_name: str
    field_type: str
    field_type_package_name: str | None = None
    id_generation: JavaIdGeneration = JavaIdGeneration.NONE
    id_generation_type: JavaIdGenerationType = JavaIdGenerationType.NONE
    generator_name: str | None = None
    sequence_name: str | None = None
    initial_value: int | None = None
    allocation_size: int | None = None
    nullable: bool = False

    @field_validator("field_name")
    @classmethod
    def check_field_name(cls, value: str) -> str:
        return validate_identifier(value)

    @field_validator("field_type_package_name")
    @classmethod
    def check_package(cls, value: str | None) -> str | None:
        return validate_package_name(value) if value is not None else None


class BasicFieldConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_name: str
    field_type: str
    field_type_package_name: str | None = None
    length: int | None = Field(default=None, ge=0)
    precision: int | None = Field(default=None, ge=0)
    scale: int | None = Field(default=None, ge=0)
    temporal: JavaFieldTemporal | None = None
    time_zone_storage: JavaFieldTimeZoneStorage | None = None
    unique: bool = False
    nullable: bool = True
    large_object: bool = False

    @field_validator("field_name")
    @classmethod
    def check_field_name(cls, value: str) -> str:
        return validate_identifier(value)

    @field_validator("field_type_package_name")
    @classmethod
    def check_package(cls, value: str | None) -> str | None:
        return validate_package_name(value) if value is not None else None


class EnumFieldConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_name: str
    enum_type: str
    enum_package_name: str
    enum_type_storage: JavaEnumType = JavaEnumType.STRING
    length: int | None = Field(default=None, ge=0)
    nullable: bool = True
    unique: bool = False

    @field_validator("field_name")
    @classmethod
    def check_field_name(cls, value: str) -> str:
        return validate_identifier(value)

    @field_validator("enum_type")
    @classmethod
    def check_enum_type(cls, value: str) -> str:
        return validate_class_name(value)

    @field_validator("enum_package_name")
    @classmethod
    def check_package(cls, value: str) -> str:
        return validate_package_name(value)


class AssociationConfig(BaseModel):
    """Shape of an association shared by the to-one mappings."""

    model_config = ConfigDict(frozen=True)

    inverse_field_type: str
    owning_side_field_name: str | None = None
    inverse_side_field_name: str | None = None
    mapping_type: MappingType | None = None
    owning_side_cascades: tuple[CascadeType, ...] = ()
    inverse_side_cascades: tuple[CascadeType, ...] = ()
    owning_side_other: tuple[OtherType, ...] = ()
    inverse_side_other: tuple[OtherType, ...] = ()

    @field_validator("inverse_field_type")
    @classmethod
    def check_inverse_type(cls, value: str) -> str:
        return validate_class_name(value)

    @field_validator("owning_side_field_name", "inverse_side_field_name")
    @classmethod
    def check_field_names(cls, value: str | None) -> str | None:
        return validate_identifier(value) if value is not None else None

    @property
    def is_bidirectional(self) -> bool:
        return self.mapping_type is not MappingType.UNIDIRECTIONAL_JOIN_COLUMN


class ManyToOneFieldConfig(AssociationConfig):
    fetch_type: FetchType = FetchType.LAZY
    collection_type: CollectionType = CollectionType.SET


class OneToOneFieldConfig(AssociationConfig):
    pass


class EntityCreationConfig(BaseModel):
    """Superclass information for a new entity; both parts or neither."""

    superclass_type: str | None = None
    superclass_package_name: str | None = None

    @model_validator(mode="after")
    def check_superclass(self) -> EntityCreationConfig:
        if (self.superclass_type is None) != (self.superclass_package_name is None):
            raise ValidationError(
                self.superclass_type or self.superclass_package_name or "",
                "superclass type and superclass package must be given together",
            )
        if self.superclass_type is not None:
            validate_class_name(self.superclass_type)
        if self.superclass_package_name is not None:
            validate_package_name(self.superclass_package_name)
        return self
