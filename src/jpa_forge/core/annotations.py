from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class Annotation:
    """Builder for one annotation application, e.g. ``@Column(name = "total")``.

    Arguments render in insertion order. A single ``value`` renders as ``@X(value)``.
    """

    name: str
    value: str | None = None
    arguments: list[tuple[str, str]] = field(default_factory=list)

    def with_argument(self, key: str, value: str) -> Annotation:
        self.arguments.append((key, value))
        return self

    def with_string(self, key: str, value: str) -> Annotation:
        return self.with_argument(key, string_literal(value))

    def with_bool(self, key: str, value: bool) -> Annotation:
        return self.with_argument(key, "true" if value else "false")

    def render(self) -> str:
        if self.arguments:
            args = ", ".join(f"{k} = {v}" for k, v in self.arguments)
            return f"@{self.name}({args})"
        if self.value is not None:
            return f"@{self.name}({self.value})"
        return f"@{self.name}"


def string_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def array_literal(values: Iterable[str]) -> str:
    items = list(values)
    if len(items) == 1:
        return items[0]
    return "{" + ", ".join(items) + "}"


@dataclass(frozen=True)
class FieldSpec:
    """A field declaration with the annotations written above it."""

    type: str
    name: str
    annotations: tuple[Annotation, ...] = ()
    visibility: str = "private"
    modifiers: tuple[str, ...] = ()
    initializer: str | None = None

    def render(self) -> str:
        parts = [p for p in (self.visibility, *self.modifiers) if p]
        declaration = " ".join([*parts, self.type, self.name])
        if self.initializer:
            declaration += f" = {self.initializer}"
        lines = [a.render() for a in self.annotations]
        lines.append(declaration + ";")
        return "\n".join(lines)
