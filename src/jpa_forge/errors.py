"""Exception hierarchy surfaced through the response envelope.

Every error carries a ``kind`` that callers can check without parsing the message.
"""

from __future__ import annotations


class JpaForgeError(Exception):
    kind = "Error"


class ParseFailure(JpaForgeError):
    """The buffer could not be parsed at all."""

    kind = "ParseFailure"


class QueryError(JpaForgeError):
    kind = "QueryError"


class QueryCompilationError(QueryError):
    pass


class CaptureNotFound(QueryError):
    pass


class SemanticNodeNotFound(JpaForgeError):
    """An expected construct (public class, package, class body ...) is absent."""

    kind = "SemanticNodeNotFound"


class ValidationError(JpaForgeError):
    """A supplied name or configuration breaks a naming rule."""

    kind = "ValidationError"

    def __init__(self, value: str, rule: str) -> None:
        super().__init__(f"Invalid value '{value}': {rule}")
        self.value = value
        self.rule = rule


class PathSecurityViolation(JpaForgeError):
    kind = "PathSecurityViolation"


class InvalidOffset(JpaForgeError):
    """An edit offset lies outside the buffer, or inside one of its characters."""

    kind = "InvalidOffset"

    def __init__(self, offset: int, length: int) -> None:
        super().__init__(f"Edit offset {offset} is not a character boundary of a {length} byte buffer")
        self.offset = offset
        self.length = length


class PartialFailure(JpaForgeError):
    """One side of a two-file edit was written, the other was not."""

    kind = "PartialFailure"
