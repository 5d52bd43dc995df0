import os

_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_INDENT_WIDTH = 4
_DEFAULT_PERSISTENCE_PACKAGE = "jakarta.persistence"


def get_log_level() -> str:
    return os.getenv("JPA_FORGE_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()


def get_default_indent() -> str:
    """Indentation for members of a type body that has no member to copy it from."""
    raw = os.getenv("JPA_FORGE_INDENT_WIDTH", str(_DEFAULT_INDENT_WIDTH))
    try:
        width = int(raw)
    except ValueError:
        width = _DEFAULT_INDENT_WIDTH
    return " " * max(width, 0)


def get_persistence_package() -> str:
    return os.getenv("JPA_FORGE_PERSISTENCE_PACKAGE", _DEFAULT_PERSISTENCE_PACKAGE)
