"""Unit tests for name validators, path security and configuration models."""

from pathlib import Path

import pytest

from jpa_forge.core.paths import resolve_within, validate_directory
from jpa_forge.core.types import CascadeType, MappingType
from jpa_forge.core.validators import validate_class_name, validate_identifier, validate_package_name
from jpa_forge.errors import PathSecurityViolation, ValidationError
from jpa_forge.models import BasicFieldConfig, EntityCreationConfig, ManyToOneFieldConfig, OneToOneFieldConfig


class TestClassNames:
    @pytest.mark.parametrize("name", ["Order", "OrderItem", "Order2", "Legacy_Order", "my-type"])
    def test_valid(self, name: str) -> None:
        assert validate_class_name(name) == name

    @pytest.mark.parametrize(
        ("name", "rule"),
        [
            ("", "empty"),
            ("Order$", "letters"),
            ("Class", "reserved"),
            ("RECORD", "reserved"),
            ("Order__Item", "consecutive"),
            ("_Order", "underscore"),
            ("Order_", "underscore"),
        ],
    )
    def test_invalid(self, name: str, rule: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_class_name(name)
        assert rule in exc_info.value.rule


class TestIdentifiers:
    @pytest.mark.parametrize("name", ["id", "totalCents", "_hidden", "line2"])
    def test_valid(self, name: str) -> None:
        assert validate_identifier(name) == name

    @pytest.mark.parametrize("name", ["", "2line", "total-cents", "class", "has space"])
    def test_invalid(self, name: str) -> None:
        with pytest.raises(ValidationError):
            validate_identifier(name)


class TestPackages:
    @pytest.mark.parametrize("name", ["com", "com.shop.order", "com.shop_v2"])
    def test_valid(self, name: str) -> None:
        assert validate_package_name(name) == name

    @pytest.mark.parametrize("name", ["", ".com", "com.", "com..shop", "com/shop", "com-shop"])
    def test_invalid(self, name: str) -> None:
        with pytest.raises(ValidationError):
            validate_package_name(name)


class TestPaths:
    def test_relative_target_inside(self, tmp_path: Path) -> None:
        resolved = resolve_within(tmp_path, "src/main/java/A.java")
        assert resolved == tmp_path.resolve() / "src" / "main" / "java" / "A.java"

    def test_absolute_target_inside(self, tmp_path: Path) -> None:
        target = tmp_path / "A.java"
        assert resolve_within(tmp_path, target) == target.resolve()

    @pytest.mark.parametrize("target", ["../outside.java", "src/../../outside.java", "/etc/passwd"])
    def test_escape_is_rejected(self, tmp_path: Path, target: str) -> None:
        project = tmp_path / "project"
        project.mkdir()
        with pytest.raises(PathSecurityViolation):
            resolve_within(project, target)

    def test_symlink_escape_is_rejected(self, tmp_path: Path) -> None:
        project = tmp_path / "project"
        outside = tmp_path / "outside"
        project.mkdir()
        outside.mkdir()
        (project / "link").symlink_to(outside, target_is_directory=True)
        with pytest.raises(PathSecurityViolation):
            resolve_within(project, "link/A.java")

    def test_missing_working_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            validate_directory(tmp_path / "missing")

    def test_working_directory_must_be_a_directory(self, tmp_path: Path) -> None:
        file = tmp_path / "file.txt"
        file.write_text("x")
        with pytest.raises(ValidationError):
            validate_directory(file)


class TestConfigs:
    def test_field_name_is_validated(self) -> None:
        with pytest.raises(ValidationError):
            BasicFieldConfig(field_name="class", field_type="String")

    def test_superclass_parts_go_together(self) -> None:
        with pytest.raises(ValidationError):
            EntityCreationConfig(superclass_type="BaseEntity")
        config = EntityCreationConfig(superclass_type="BaseEntity", superclass_package_name="com.shop.common")
        assert config.superclass_type == "BaseEntity"

    def test_relationship_defaults(self) -> None:
        config = ManyToOneFieldConfig(inverse_field_type="Customer")
        assert config.is_bidirectional
        assert config.owning_side_cascades == ()
        unidirectional = OneToOneFieldConfig(
            inverse_field_type="Customer", mapping_type=MappingType.UNIDIRECTIONAL_JOIN_COLUMN
        )
        assert not unidirectional.is_bidirectional

    def test_enum_values_are_accepted_as_strings(self) -> None:
        config = ManyToOneFieldConfig.model_validate(
            {"inverse_field_type": "Customer", "owning_side_cascades": ["persist", "merge"]}
        )
        assert config.owning_side_cascades == (CascadeType.PERSIST, CascadeType.MERGE)
