"""Static catalogs of Java basic types offered to the editor.

The tables are process-wide constants; lookups hand out the shared immutable models.
"""

from __future__ import annotations

from jpa_forge.core.types import JavaBasicFieldTypeKind
from jpa_forge.models import BasicJavaType


def _t(qualified: str, name: str | None = None) -> BasicJavaType:
    package, _, simple = qualified.rpartition(".")
    return BasicJavaType(id=qualified, name=name or simple, package_path=package or None)


def _primitive(name: str) -> BasicJavaType:
    return BasicJavaType(id=name, name=name, package_path=None)


_ALL_TYPES: tuple[BasicJavaType, ...] = (
    _t("java.lang.String"),
    _t("java.lang.Long"),
    _t("java.lang.Integer"),
    _t("java.lang.Boolean"),
    _t("java.lang.Double"),
    _t("java.math.BigDecimal"),
    _t("java.time.Instant"),
    _t("java.time.LocalDateTime"),
    _t("java.time.LocalDate"),
    _t("java.time.LocalTime"),
    _t("java.time.OffsetDateTime"),
    _t("java.time.OffsetTime"),
    _t("java.util.Date", "Date (util)"),
    _t("java.sql.Date", "Date (sql)"),
    _t("java.sql.Time"),
    _t("java.sql.Timestamp"),
    _t("java.util.TimeZone"),
    _t("java.lang.Byte[]"),
    _t("java.sql.Blob"),
    _t("java.lang.Byte"),
    _t("java.lang.Character"),
    _t("java.lang.Short"),
    _t("java.lang.Float"),
    _t("java.math.BigInteger"),
    _t("java.net.URL"),
    _t("java.time.Duration"),
    _t("java.time.ZonedDateTime"),
    _t("java.util.Calendar"),
    _t("java.util.Locale"),
    _t("java.util.Currency"),
    _t("java.lang.Class"),
    _t("java.util.UUID"),
    _t("java.lang.Character[]"),
    _t("java.sql.Clob"),
    _t("java.sql.NClob"),
    _primitive("boolean"),
    _primitive("byte"),
    _primitive("float"),
    _primitive("char"),
    _primitive("int"),
    _primitive("double"),
    _primitive("short"),
    _primitive("long"),
    _primitive("byte[]"),
    _primitive("char[]"),
    _t("org.geolatte.geom.Geometry", "Geometry (geolatte)"),
    _t("com.vividsolutions.jts.geom.Geometry", "Geometry (jts)"),
    _t("java.net.InetAddress"),
    _t("java.time.ZoneOffset"),
)

_BY_ID = {t.id: t for t in _ALL_TYPES}


def _pick(*ids: str) -> tuple[BasicJavaType, ...]:
    return tuple(_BY_ID[i] for i in ids)


_CATALOGS: dict[JavaBasicFieldTypeKind, tuple[BasicJavaType, ...]] = {
    JavaBasicFieldTypeKind.ALL: _ALL_TYPES,
    JavaBasicFieldTypeKind.ID: _pick("java.lang.Long", "java.lang.Integer", "java.lang.String", "java.util.UUID"),
    JavaBasicFieldTypeKind.TYPES_WITH_LENGTH: _pick(
        "java.lang.String",
        "java.net.URL",
        "java.util.Locale",
        "java.util.Currency",
        "java.lang.Class",
        "java.lang.Character[]",
        "char[]",
        "java.util.TimeZone",
        "java.time.ZoneOffset",
    ),
    JavaBasicFieldTypeKind.TYPES_WITH_TIME_ZONE_STORAGE: _pick(
        "java.time.OffsetDateTime", "java.time.OffsetTime", "java.time.ZonedDateTime"
    ),
    JavaBasicFieldTypeKind.TYPES_WITH_TEMPORAL: _pick("java.util.Calendar"),
    JavaBasicFieldTypeKind.TYPES_WITH_EXTRA_OTHER: _pick(
        "java.lang.String",
        "java.lang.Byte[]",
        "byte[]",
        "char[]",
        "java.lang.Character[]",
        "java.sql.Blob",
        "java.sql.Clob",
        "java.sql.NClob",
    ),
    JavaBasicFieldTypeKind.TYPES_WITH_PRECISION_AND_SCALE: _pick("java.math.BigDecimal"),
}

# Simple names that are resolvable without an explicit import, or whose package is
# well known, used when reading an existing identifier field back.
KNOWN_TYPE_PACKAGES: dict[str, str] = {
    "String": "java.lang",
    "Integer": "java.lang",
    "Long": "java.lang",
    "Short": "java.lang",
    "Double": "java.lang",
    "Float": "java.lang",
    "Boolean": "java.lang",
    "BigDecimal": "java.math",
    "BigInteger": "java.math",
    "UUID": "java.util",
    "Date": "java.util",
    "LocalDate": "java.time",
    "LocalDateTime": "java.time",
    "Instant": "java.time",
}


def get_basic_types(kind: JavaBasicFieldTypeKind) -> list[BasicJavaType]:
    return list(_CATALOGS[kind])


def type_names(kind: JavaBasicFieldTypeKind) -> frozenset[str]:
    """Simple names (``String``, ``byte[]`` ...) of a catalog, for membership checks."""
    return frozenset(t.id.rpartition(".")[2] for t in _CATALOGS[kind])
