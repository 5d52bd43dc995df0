"""Working-directory checks and file discovery.

Every path a command writes to goes through ``resolve_within`` before any I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.types import JavaSourceDirectoryType
from jpa_forge.errors import ParseFailure, PathSecurityViolation, ValidationError

logger = logging.getLogger(__name__)

_SKIPPED_DIRECTORIES = frozenset({".git", ".idea", ".gradle", "build", "target", "node_modules", "out"})


def validate_directory(cwd: str | Path) -> Path:
    base = Path(cwd).expanduser()
    if not base.exists():
        raise ValidationError(str(cwd), "working directory does not exist")
    if not base.is_dir():
        raise ValidationError(str(cwd), "working directory is not a directory")
    return base.resolve()


def resolve_within(cwd: str | Path, target: str | Path) -> Path:
    """Canonical form of ``target`` (relative paths are joined to ``cwd``).

    Raises ``PathSecurityViolation`` when the result escapes ``cwd``.
    """
    base = validate_directory(cwd)
    candidate = Path(target).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    # Non-strict resolve: symlinks of existing parents are followed, missing tails kept.
    resolved = candidate.resolve()
    if not resolved.is_relative_to(base):
        logger.warning("Path traversal attempt: %s resolves outside %s", target, base)
        raise PathSecurityViolation(f"Path '{target}' is outside the working directory '{base}'")
    return resolved


def source_root(cwd: str | Path, source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN) -> Path:
    return Path(cwd).joinpath(*source_directory.relative_path)


def package_directory(
    cwd: str | Path,
    package: str,
    source_directory: JavaSourceDirectoryType = JavaSourceDirectoryType.MAIN,
) -> Path:
    return source_root(cwd, source_directory).joinpath(*package.split("."))


def iter_files(root: Path, extension: str) -> Iterator[Path]:
    suffix = extension if extension.startswith(".") else f".{extension}"
    if not root.is_dir():
        return
    for path in sorted(root.rglob(f"*{suffix}")):
        if any(part in _SKIPPED_DIRECTORIES for part in path.relative_to(root).parts[:-1]):
            continue
        if path.is_file():
            yield path


def parse_all(root: Path, extension: str = ".java") -> Iterator[ParsedFile]:
    """Parse every file under ``root``; unreadable or empty files are skipped."""
    for path in iter_files(root, extension):
        try:
            yield ParsedFile.from_path(path)
        except (OSError, ParseFailure) as exc:
            logger.debug("Skipping %s: %s", path, exc)
