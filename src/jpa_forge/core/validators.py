"""Naming rules for Java class names, identifiers and packages.

Each validator returns the value unchanged or raises ``ValidationError`` naming the
rule that failed.
"""

from jpa_forge.errors import ValidationError

JAVA_RESERVED_WORDS = frozenset(
    {
        "abstract",
        "assert",
        "boolean",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "class",
        "const",
        "continue",
        "default",
        "do",
        "double",
        "else",
        "enum",
        "extends",
        "final",
        "finally",
        "float",
        "for",
        "goto",
        "if",
        "implements",
        "import",
        "instanceof",
        "int",
        "interface",
        "long",
        "native",
        "new",
        "package",
        "private",
        "protected",
        "public",
        "return",
        "short",
        "static",
        "strictfp",
        "super",
        "switch",
        "synchronized",
        "this",
        "throw",
        "throws",
        "transient",
        "try",
        "void",
        "volatile",
        "while",
        "true",
        "false",
        "null",
        "var",
        "record",
        "yield",
        "sealed",
        "permits",
    }
)


def validate_class_name(name: str) -> str:
    if not name:
        raise ValidationError(name, "class name cannot be empty")
    if not all(c.isascii() and (c.isalnum() or c in "_-") for c in name):
        raise ValidationError(name, "class name may only contain letters, digits, '_' and '-'")
    if name.lower() in JAVA_RESERVED_WORDS:
        raise ValidationError(name, "class name cannot be a Java reserved word")
    if "__" in name:
        raise ValidationError(name, "class name cannot contain consecutive underscores")
    if name.startswith("_") or name.endswith("_"):
        raise ValidationError(name, "class name cannot start or end with an underscore")
    return name


def validate_identifier(name: str) -> str:
    if not name:
        raise ValidationError(name, "identifier cannot be empty")
    first = name[0]
    if not (first.isascii() and (first.isalpha() or first == "_")):
        raise ValidationError(name, "identifier must start with a letter or underscore")
    if not all(c.isascii() and (c.isalnum() or c == "_") for c in name[1:]):
        raise ValidationError(name, "identifier may only contain letters, digits and '_'")
    if name in JAVA_RESERVED_WORDS:
        raise ValidationError(name, "identifier cannot be a Java reserved word")
    return name


def validate_package_name(name: str) -> str:
    if not name:
        raise ValidationError(name, "package name cannot be empty")
    if not all(c.isascii() and (c.isalnum() or c in "._") for c in name):
        raise ValidationError(name, "package name may only contain letters, digits, '.' and '_'")
    if name.startswith(".") or name.endswith("."):
        raise ValidationError(name, "package name cannot start or end with a dot")
    if ".." in name:
        raise ValidationError(name, "package name cannot contain consecutive dots")
    return name
