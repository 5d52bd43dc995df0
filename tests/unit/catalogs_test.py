"""Unit tests for the Java basic type catalogs."""

import pytest

from jpa_forge.core.catalogs import get_basic_types, type_names
from jpa_forge.core.types import JavaBasicFieldTypeKind


def test_every_kind_has_a_catalog() -> None:
    for kind in JavaBasicFieldTypeKind:
        assert get_basic_types(kind)


def test_id_types() -> None:
    assert [t.id for t in get_basic_types(JavaBasicFieldTypeKind.ID)] == [
        "java.lang.Long",
        "java.lang.Integer",
        "java.lang.String",
        "java.util.UUID",
    ]


def test_ambiguous_names_are_labelled() -> None:
    names = {t.id: t.name for t in get_basic_types(JavaBasicFieldTypeKind.ALL)}
    assert names["java.util.Date"] == "Date (util)"
    assert names["java.sql.Date"] == "Date (sql)"


def test_primitives_have_no_package() -> None:
    by_id = {t.id: t for t in get_basic_types(JavaBasicFieldTypeKind.ALL)}
    assert by_id["int"].package_path is None
    assert by_id["byte[]"].package_path is None
    assert by_id["java.math.BigDecimal"].package_path == "java.math"


@pytest.mark.parametrize(
    ("kind", "included", "excluded"),
    [
        (JavaBasicFieldTypeKind.TYPES_WITH_LENGTH, "String", "BigDecimal"),
        (JavaBasicFieldTypeKind.TYPES_WITH_PRECISION_AND_SCALE, "BigDecimal", "String"),
        (JavaBasicFieldTypeKind.TYPES_WITH_TIME_ZONE_STORAGE, "OffsetDateTime", "LocalDateTime"),
        (JavaBasicFieldTypeKind.TYPES_WITH_EXTRA_OTHER, "byte[]", "Integer"),
    ],
)
def test_type_names(kind: JavaBasicFieldTypeKind, included: str, excluded: str) -> None:
    names = type_names(kind)
    assert included in names
    assert excluded not in names


def test_catalogs_are_not_shared_lists() -> None:
    first = get_basic_types(JavaBasicFieldTypeKind.ID)
    first.clear()
    assert get_basic_types(JavaBasicFieldTypeKind.ID)
