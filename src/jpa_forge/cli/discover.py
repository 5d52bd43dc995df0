"""Read-only commands: listings, catalogs and entity metadata."""

from typing import Annotated

import typer

from jpa_forge.cli.output import FILE_HEADERS, emit, file_rows
from jpa_forge.core import commands
from jpa_forge.core.types import JavaBasicFieldTypeKind, JavaFileType, JavaSourceDirectoryType

CwdOption = Annotated[str, typer.Option("--cwd", help="Project root directory.")]
TableOption = Annotated[bool, typer.Option("--table", help="Render a table instead of JSON.")]


def get_all_files(
    cwd: CwdOption = ".",
    extension: Annotated[str, typer.Option(help="File extension to list.")] = ".java",
    table: TableOption = False,
) -> None:
    """List every file with the given extension under the project."""
    emit(commands.get_all_files(cwd, extension), table, FILE_HEADERS, file_rows)


def get_java_files(
    cwd: CwdOption = ".",
    file_type: Annotated[JavaFileType, typer.Option("--type", help="Kind of public type.")] = JavaFileType.CLASS,
    table: TableOption = False,
) -> None:
    """List main sources whose public type is of the given kind."""
    emit(commands.get_java_files(cwd, file_type), table, FILE_HEADERS, file_rows)


def get_all_jpa_entities(cwd: CwdOption = ".", table: TableOption = False) -> None:
    """List classes annotated with @Entity."""
    emit(commands.get_all_jpa_entities(cwd), table, FILE_HEADERS, file_rows)


def get_all_jpa_mapped_superclasses(cwd: CwdOption = ".", table: TableOption = False) -> None:
    """List classes annotated with @MappedSuperclass."""
    emit(commands.get_all_jpa_mapped_superclasses(cwd), table, FILE_HEADERS, file_rows)


def get_all_packages(
    cwd: CwdOption = ".",
    source_directory: Annotated[
        JavaSourceDirectoryType, typer.Option(help="Source set to scan.")
    ] = JavaSourceDirectoryType.MAIN,
    table: TableOption = False,
) -> None:
    """List declared packages, shortest first as the root package."""
    emit(
        commands.get_all_packages(cwd, source_directory),
        table,
        ("package",),
        lambda data: [(p,) for p in data["packages"]],
    )


def get_java_basic_types(
    cwd: CwdOption = ".",
    kind: Annotated[
        JavaBasicFieldTypeKind, typer.Option("--kind", help="Catalog to list.")
    ] = JavaBasicFieldTypeKind.ALL,
    table: TableOption = False,
) -> None:
    """List the Java basic types offered for a field kind."""
    emit(
        commands.get_java_basic_types(cwd, kind),
        table,
        ("id", "name", "package"),
        lambda data: [(t["id"], t["name"], t["package_path"] or "") for t in data],
    )


def get_jpa_entity_info(
    entity_path: Annotated[str, typer.Option("--entity-path", help="Entity source file.")],
    cwd: CwdOption = ".",
    source_b64: Annotated[str | None, typer.Option("--source-b64", help="Unsaved buffer, base64.")] = None,
) -> None:
    """Describe an entity: type, package, superclass and identifier."""
    emit(commands.get_jpa_entity_info(cwd, entity_path, source_b64))
