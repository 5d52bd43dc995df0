from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jpa_forge.errors import InvalidOffset

if TYPE_CHECKING:
    from jpa_forge.core.parsed_file import ParsedFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditOperation:
    """Insert ``text`` at byte ``offset``; ``text=None`` is a no-op."""

    offset: int
    text: str | None = None


@dataclass(frozen=True)
class PatchResult:
    source: str
    applied: list[EditOperation] = field(default_factory=list)
    success: bool = True


def apply_edits(source: str | bytes, edits: Sequence[EditOperation]) -> PatchResult:
    """Apply ``edits`` to ``source``, all offsets relative to the unmodified buffer.

    Edits run back to front so no pending offset moves. Edits sharing an offset keep
    their input order in the output.
    """
    buffer = source.encode("utf-8") if isinstance(source, str) else source
    length = len(buffer)
    for edit in edits:
        if not 0 <= edit.offset <= length:
            raise InvalidOffset(edit.offset, length)
        if edit.offset < length and 0x80 <= buffer[edit.offset] < 0xC0:
            # UTF-8 continuation byte: the offset splits a character.
            raise InvalidOffset(edit.offset, length)

    indexed = [(i, e) for i, e in enumerate(edits) if e.text is not None]
    ordered = sorted(indexed, key=lambda item: (item[1].offset, item[0]), reverse=True)

    patched = buffer
    for _, edit in ordered:
        assert edit.text is not None
        patched = patched[: edit.offset] + edit.text.encode("utf-8") + patched[edit.offset :]

    applied = [e for _, e in sorted(indexed, key=lambda item: (item[1].offset, item[0]))]
    logger.debug("Applied %d edit(s) to a %d byte buffer", len(applied), length)
    return PatchResult(source=patched.decode("utf-8"), applied=applied, success=True)


def patch(file: ParsedFile, edits: Sequence[EditOperation]) -> tuple[ParsedFile, PatchResult]:
    """Apply ``edits`` to ``file`` and re-parse the result into a new ``ParsedFile``."""
    result = apply_edits(file.source, edits)
    return file.reparse(result.source.encode("utf-8")), result
