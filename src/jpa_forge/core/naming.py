"""Case conversion and English pluralization for generated Java names.

Pluralization is table driven: uncountable words, then irregular words, then
ordered suffix rules. Only the last word of a camel-cased name is inflected.
"""

from __future__ import annotations

import re

_WORD_BOUNDARY = re.compile(r"[A-Z]?[a-z0-9]+|[A-Z]+(?![a-z])")

_UNCOUNTABLE = frozenset(
    {
        "data",
        "equipment",
        "feedback",
        "information",
        "metadata",
        "money",
        "news",
        "rice",
        "series",
        "sheep",
        "species",
        "staff",
    }
)

_IRREGULAR = {
    "child": "children",
    "criterion": "criteria",
    "datum": "data",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
}

# First match wins.
_PLURAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(quiz)$"), r"\1zes"),
    (re.compile(r"(matr|vert|ind)(?:ix|ex)$"), r"\1ices"),
    (re.compile(r"(analy|ba|diagno|parenthe|synop|the)sis$"), r"\1ses"),
    (re.compile(r"([^aeiouy]|qu)y$"), r"\1ies"),
    (re.compile(r"(?:([^f])fe|([lr])f)$"), r"\1\2ves"),
    (re.compile(r"(x|ch|ss|sh|s|z)$"), r"\1es"),
    (re.compile(r"$"), "s"),
)


def split_words(name: str) -> list[str]:
    """Split ``camelCase``, ``PascalCase``, ``snake_case`` or ``kebab-case`` into words."""
    words: list[str] = []
    for chunk in re.split(r"[\s_\-]+", name):
        words.extend(_WORD_BOUNDARY.findall(chunk))
    return words


def to_snake_case(name: str) -> str:
    return "_".join(w.lower() for w in split_words(name))


def to_camel_case(name: str) -> str:
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(w[:1].upper() + w[1:].lower() for w in words[1:])


def to_pascal_case(name: str) -> str:
    return "".join(w[:1].upper() + w[1:].lower() for w in split_words(name))


def pluralize_word(word: str) -> str:
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower in _IRREGULAR:
        plural = _IRREGULAR[lower]
        return plural[:1].upper() + plural[1:] if word[:1].isupper() else plural
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(lower):
            inflected = pattern.sub(replacement, lower, count=1)
            return word[:1] + inflected[1:] if word[:1].isupper() else inflected
    return word


def pluralize(name: str) -> str:
    """Plural of a camel-cased name, e.g. ``orderItem`` -> ``orderItems``."""
    words = split_words(name)
    if not words:
        return name
    last = words[-1]
    index = name.rfind(last)
    return name[:index] + pluralize_word(last)


def field_name_for_type(type_name: str, plural: bool = False) -> str:
    """Field name derived from a type: ``Customer`` -> ``customer`` / ``customers``."""
    name = to_camel_case(type_name)
    return pluralize(name) if plural else name
