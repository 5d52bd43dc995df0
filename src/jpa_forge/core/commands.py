"""Command entry points shared by the CLI and the MCP server.

Each function runs one operation and wraps the outcome in a ``Response`` envelope.
Expected failures never escape: they come back with ``success=False`` and the
error's ``kind``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pydantic
from pydantic import BaseModel

from jpa_forge.core import discovery, entities, fields, relationships
from jpa_forge.core.catalogs import get_basic_types
from jpa_forge.core.types import JavaBasicFieldTypeKind, JavaFileType, JavaSourceDirectoryType
from jpa_forge.errors import JpaForgeError, PartialFailure, ValidationError
from jpa_forge.models import (
    BasicFieldConfig,
    EntityCreationConfig,
    EnumFieldConfig,
    IdFieldConfig,
    ManyToOneFieldConfig,
    OneToOneFieldConfig,
    RelationshipResponse,
    Response,
)

logger = logging.getLogger(__name__)


def _to_data(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_data(item) for item in value]
    return value


def run_command(command: str, cwd: str | Path, action: Callable[[], Any]) -> Response:
    cwd_text = str(cwd)
    try:
        result = action()
    except JpaForgeError as exc:
        logger.debug("%s failed: %s", command, exc)
        return Response.failure(command, cwd_text, str(exc), exc.kind)
    except pydantic.ValidationError as exc:
        return Response.failure(command, cwd_text, str(exc), ValidationError.kind)
    except OSError as exc:
        logger.debug("%s failed with I/O error: %s", command, exc)
        return Response.failure(command, cwd_text, str(exc), "IOError")
    if isinstance(result, RelationshipResponse) and not result.success:
        return Response.failure(
            command,
            cwd_text,
            result.error or result.message,
            PartialFailure.kind,
            data=_to_data(result),
        )
    return Response.ok(command, cwd_text, _to_data(result))


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def get_all_files(cwd: str, extension: str = ".java") -> Response:
    return run_command("get-all-files", cwd, lambda: discovery.get_all_files(cwd, extension))


def get_java_files(cwd: str, file_type: JavaFileType = JavaFileType.CLASS) -> Response:
    return run_command("get-java-files", cwd, lambda: discovery.get_java_files(cwd, file_type))


def get_all_jpa_entities(cwd: str) -> Response:
    return run_command("get-all-jpa-entities", cwd, lambda: discovery.get_all_jpa_entities(cwd))


def get_all_jpa_mapped_superclasses(cwd: str) -> Response:
    return run_command(
        "get-all-jpa-mapped-superclasses", cwd, lambda: discovery.get_all_jpa_mapped_superclasses(cwd)
    )


def get_all_packages(cwd: str, source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN) -> Response:
    return run_command("get-all-packages", cwd, lambda: discovery.get_all_packages(cwd, source_directory))


def get_java_basic_types(cwd: str, kind: JavaBasicFieldTypeKind = JavaBasicFieldTypeKind.ALL) -> Response:
    return run_command("get-java-basic-types", cwd, lambda: get_basic_types(kind))


def get_jpa_entity_info(cwd: str, entity_path: str, source_b64: str | None = None) -> Response:
    return run_command(
        "get-jpa-entity-info", cwd, lambda: entities.get_jpa_entity_info(cwd, entity_path, source_b64)
    )


# ---------------------------------------------------------------------------
# File creation
# ---------------------------------------------------------------------------


def create_java_file(
    cwd: str,
    package: str,
    name: str,
    file_type: JavaFileType = JavaFileType.CLASS,
    source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN,
) -> Response:
    return run_command(
        "create-java-file",
        cwd,
        lambda: entities.create_java_file(cwd, package, name, file_type, source_directory),
    )


def create_jpa_entity(
    cwd: str,
    package: str,
    name: str,
    superclass_type: str | None = None,
    superclass_package_name: str | None = None,
) -> Response:
    def action() -> Any:
        config = EntityCreationConfig(
            superclass_type=superclass_type, superclass_package_name=superclass_package_name
        )
        return entities.create_jpa_entity(cwd, package, name, config)

    return run_command("create-jpa-entity", cwd, action)


def create_jpa_repository(cwd: str, entity_path: str, superclass_b64: str | None = None) -> Response:
    return run_command(
        "create-jpa-repository", cwd, lambda: entities.create_jpa_repository(cwd, entity_path, superclass_b64)
    )


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def create_jpa_entity_id_field(cwd: str, entity_path: str, source_b64: str | None = None, **options: Any) -> Response:
    return run_command(
        "create-jpa-entity-id-field",
        cwd,
        lambda: fields.create_id_field(cwd, entity_path, IdFieldConfig(**options), source_b64),
    )


def create_jpa_entity_basic_field(
    cwd: str, entity_path: str, source_b64: str | None = None, **options: Any
) -> Response:
    return run_command(
        "create-jpa-entity-basic-field",
        cwd,
        lambda: fields.create_basic_field(cwd, entity_path, BasicFieldConfig(**options), source_b64),
    )


def create_jpa_entity_enum_field(
    cwd: str, entity_path: str, source_b64: str | None = None, **options: Any
) -> Response:
    return run_command(
        "create-jpa-entity-enum-field",
        cwd,
        lambda: fields.create_enum_field(cwd, entity_path, EnumFieldConfig(**options), source_b64),
    )


# ---------------------------------------------------------------------------
# Relationships
# ---------------------------------------------------------------------------


def create_jpa_many_to_one_relationship(
    cwd: str, owning_path: str, source_b64: str | None = None, **options: Any
) -> Response:
    return run_command(
        "create-jpa-many-to-one-relationship",
        cwd,
        lambda: relationships.create_many_to_one_relationship(
            cwd, owning_path, ManyToOneFieldConfig(**options), source_b64
        ),
    )


def create_jpa_one_to_one_relationship(
    cwd: str, owning_path: str, source_b64: str | None = None, **options: Any
) -> Response:
    return run_command(
        "create-jpa-one-to-one-relationship",
        cwd,
        lambda: relationships.create_one_to_one_relationship(
            cwd, owning_path, OneToOneFieldConfig(**options), source_b64
        ),
    )
