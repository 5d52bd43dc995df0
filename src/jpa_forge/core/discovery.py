"""Project-wide listings: files, typed Java sources, entities and packages."""

from __future__ import annotations

import logging
from pathlib import Path

from jpa_forge.core.locator import declared_annotation, find_public_type_declaration, package_name
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.paths import iter_files, parse_all, source_root, validate_directory
from jpa_forge.core.types import JavaFileType, JavaSourceDirectoryType
from jpa_forge.errors import ParseFailure
from jpa_forge.models import FileResponse, GetFilesResponse, GetPackagesResponse

logger = logging.getLogger(__name__)

NO_PACKAGE = "No package"


def file_response(file: ParsedFile, file_type: str | None = None) -> FileResponse:
    return FileResponse(
        file_type=file_type or file.file_stem() or "Unknown",
        file_package_name=package_name(file) or NO_PACKAGE,
        file_path=str(file.path) if file.path is not None else "",
    )


def _files_response(files: list[FileResponse]) -> GetFilesResponse:
    return GetFilesResponse(files=files, files_count=len(files))


def get_all_files(cwd: str | Path, extension: str = ".java") -> GetFilesResponse:
    base = validate_directory(cwd)
    files: list[FileResponse] = []
    for path in iter_files(base, extension):
        if path.suffix != ".java":
            files.append(FileResponse(file_type=path.stem, file_package_name=NO_PACKAGE, file_path=str(path)))
            continue
        try:
            files.append(file_response(ParsedFile.from_path(path)))
        except (OSError, ParseFailure) as exc:
            logger.debug("Skipping %s: %s", path, exc)
    return _files_response(files)


def get_java_files(cwd: str | Path, file_type: JavaFileType) -> GetFilesResponse:
    """Main sources whose public type is of ``file_type`` and that declare a package."""
    base = validate_directory(cwd)
    files = [
        file_response(f)
        for f in parse_all(source_root(base))
        if find_public_type_declaration(f, file_type) is not None and package_name(f) is not None
    ]
    return _files_response(files)


def _annotated_classes(cwd: str | Path, annotation: str) -> list[ParsedFile]:
    base = validate_directory(cwd)
    matches: list[ParsedFile] = []
    for f in parse_all(source_root(base)):
        declaration = find_public_type_declaration(f, JavaFileType.CLASS)
        if declaration is None or package_name(f) is None:
            continue
        if declared_annotation(f, declaration, annotation) is not None:
            matches.append(f)
    return matches


def get_all_jpa_entities(cwd: str | Path) -> GetFilesResponse:
    return _files_response([file_response(f) for f in _annotated_classes(cwd, "Entity")])


def get_all_jpa_mapped_superclasses(cwd: str | Path) -> GetFilesResponse:
    return _files_response([file_response(f) for f in _annotated_classes(cwd, "MappedSuperclass")])


def get_all_packages(
    cwd: str | Path, source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN
) -> GetPackagesResponse:
    base = validate_directory(cwd)
    packages = sorted({name for f in parse_all(source_root(base, source_directory)) if (name := package_name(f))})
    root = min(packages, key=len) if packages else None
    return GetPackagesResponse(packages=packages, packages_count=len(packages), root_package_name=root)


def find_entity_file(cwd: str | Path, class_name: str) -> Path | None:
    """The main source ``<class_name>.java`` whose public class carries ``@Entity``."""
    for f in _annotated_classes(cwd, "Entity"):
        if f.file_stem() == class_name and f.path is not None:
            return f.path
    return None
