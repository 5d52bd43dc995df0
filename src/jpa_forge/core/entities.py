"""New Java sources, JPA entities and repositories, and reading entity metadata."""

from __future__ import annotations

import logging
from pathlib import Path

from jpa_forge.config import get_persistence_package
from jpa_forge.core.annotations import Annotation
from jpa_forge.core.catalogs import KNOWN_TYPE_PACKAGES
from jpa_forge.core.discovery import file_response
from jpa_forge.core.editing import add_imports, annotate_public_class
from jpa_forge.core.fields import load_edit_target
from jpa_forge.core.locator import (
    declaration_name,
    declared_annotation,
    field_type,
    find_id_field,
    find_public_type_declaration,
    find_superclass_name,
    imported_package_of,
    package_name,
)
from jpa_forge.core.naming import to_snake_case
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.paths import package_directory, resolve_within
from jpa_forge.core.types import JavaFileType, JavaSourceDirectoryType
from jpa_forge.core.validators import validate_class_name, validate_package_name
from jpa_forge.errors import SemanticNodeNotFound, ValidationError
from jpa_forge.models import EntityCreationConfig, FileResponse, JpaEntityInfo

logger = logging.getLogger(__name__)

_SPRING_DATA_JPA = "org.springframework.data.jpa.repository"

_DECLARATION_TEMPLATES = {
    JavaFileType.CLASS: "public class {name} {{}}",
    JavaFileType.INTERFACE: "public interface {name} {{}}",
    JavaFileType.ENUM: "public enum {name} {{}}",
    JavaFileType.RECORD: "public record {name}() {{}}",
    JavaFileType.ANNOTATION: "public @interface {name} {{}}",
}

_BOXED_PRIMITIVES = {
    "boolean": "Boolean",
    "byte": "Byte",
    "char": "Character",
    "short": "Short",
    "int": "Integer",
    "long": "Long",
    "float": "Float",
    "double": "Double",
}


def _skeleton(package: str, name: str, file_type: JavaFileType, superclass: str | None = None) -> str:
    declaration = _DECLARATION_TEMPLATES[file_type].format(name=name)
    if superclass:
        declaration = declaration.replace(f"class {name} ", f"class {name} extends {superclass} ", 1)
    return f"package {package};\n\n{declaration}\n"


def _new_file_path(
    cwd: str | Path, package: str, name: str, source_directory: JavaSourceDirectoryType
) -> tuple[str, Path]:
    name = validate_class_name(name.removesuffix(".java"))
    validate_package_name(package)
    target = resolve_within(cwd, package_directory(cwd, package, source_directory) / f"{name}.java")
    if target.exists():
        raise ValidationError(str(target), "file already exists")
    return name, target


def _write_new(target: Path, text: str) -> ParsedFile:
    target.parent.mkdir(parents=True, exist_ok=True)
    file = ParsedFile.parse(text, target)
    file.save()
    return file


def create_java_file(
    cwd: str | Path,
    package: str,
    name: str,
    file_type: JavaFileType = JavaFileType.CLASS,
    source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN,
) -> FileResponse:
    name, target = _new_file_path(cwd, package, name, source_directory)
    file = _write_new(target, _skeleton(package, name, file_type))
    return file_response(file, name)


def create_jpa_entity(
    cwd: str | Path,
    package: str,
    name: str,
    config: EntityCreationConfig | None = None,
) -> FileResponse:
    """Create ``@Entity @Table`` class ``name``, optionally extending a superclass."""
    config = config or EntityCreationConfig()
    name, target = _new_file_path(cwd, package, name, JavaSourceDirectoryType.MAIN)
    persistence = get_persistence_package()

    file = ParsedFile.parse(_skeleton(package, name, JavaFileType.CLASS, config.superclass_type), target)
    file = annotate_public_class(
        file,
        Annotation("Entity"),
        Annotation("Table").with_string("name", to_snake_case(name)),
    )
    imports: list[tuple[str | None, str]] = [(persistence, "Entity"), (persistence, "Table")]
    if config.superclass_type is not None:
        imports.append((config.superclass_package_name, config.superclass_type))
    file = add_imports(file, imports)

    target.parent.mkdir(parents=True, exist_ok=True)
    file.save()
    return file_response(file, name)


# ---------------------------------------------------------------------------
# Entity metadata
# ---------------------------------------------------------------------------


def _type_package(file: ParsedFile, type_name: str) -> str | None:
    """Package a simple type name refers to from inside ``file``."""
    return imported_package_of(file, type_name) or KNOWN_TYPE_PACKAGES.get(type_name) or package_name(file)


def _id_field(file: ParsedFile) -> tuple[str, str | None] | None:
    declaration = find_public_type_declaration(file, JavaFileType.CLASS)
    if declaration is None:
        return None
    id_field = find_id_field(file, declaration)
    if id_field is None:
        return None
    type_name = field_type(file, id_field)
    if type_name is None:
        return None
    if type_name in _BOXED_PRIMITIVES:
        return _BOXED_PRIMITIVES[type_name], "java.lang"
    return type_name, _type_package(file, type_name)


def describe_entity(file: ParsedFile) -> JpaEntityInfo:
    entity_path = str(file.path) if file.path is not None else None
    declaration = find_public_type_declaration(file, JavaFileType.CLASS)
    if declaration is None or declared_annotation(file, declaration, "Entity") is None:
        return JpaEntityInfo(is_jpa_entity=False, entity_path=entity_path)
    id_info = _id_field(file)
    return JpaEntityInfo(
        is_jpa_entity=True,
        entity_type=declaration_name(file, declaration),
        entity_package_name=package_name(file),
        entity_path=entity_path,
        superclass_type=find_superclass_name(file, declaration),
        id_field_type=id_info[0] if id_info else None,
        id_field_package_name=id_info[1] if id_info else None,
    )


def get_jpa_entity_info(cwd: str | Path, entity_path: str | Path, source_b64: str | None = None) -> JpaEntityInfo:
    return describe_entity(load_edit_target(cwd, entity_path, source_b64))


def create_jpa_repository(
    cwd: str | Path, entity_path: str | Path, superclass_b64: str | None = None
) -> FileResponse:
    """Write ``<Entity>Repository`` next to the entity.

    The identifier type comes from the entity's ``@Id`` field or, for entities that
    inherit it, from the superclass source passed as ``superclass_b64``.
    """
    entity = load_edit_target(cwd, entity_path)
    info = describe_entity(entity)
    if not info.is_jpa_entity or info.entity_type is None:
        raise ValidationError(str(entity_path), "file is not a JPA entity")
    if info.entity_package_name is None:
        raise SemanticNodeNotFound(f"Entity {info.entity_type} has no package declaration")

    id_type, id_package = info.id_field_type, info.id_field_package_name
    if id_type is None and superclass_b64 is not None:
        superclass_id = _id_field(ParsedFile.from_base64(superclass_b64))
        if superclass_id is not None:
            id_type, id_package = superclass_id
    if id_type is None:
        raise SemanticNodeNotFound(f"No @Id field found for entity {info.entity_type}")

    repository_name = f"{info.entity_type}Repository"
    assert entity.path is not None
    target = resolve_within(cwd, entity.path.parent / f"{repository_name}.java")
    if target.exists():
        raise ValidationError(str(target), "file already exists")

    package = info.entity_package_name
    import_lines = [f"import {_SPRING_DATA_JPA}.JpaRepository;"]
    if id_package and id_package not in ("java.lang", package):
        import_lines.append(f"import {id_package}.{id_type};")
    text = (
        f"package {package};\n\n"
        + "\n".join(import_lines)
        + f"\n\npublic interface {repository_name} extends JpaRepository<{info.entity_type}, {id_type}> {{\n}}\n"
    )
    file = _write_new(target, text)
    logger.info("Created repository %s for %s", repository_name, info.entity_type)
    return file_response(file, repository_name)
