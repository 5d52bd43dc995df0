"""Unit tests for two-file relationship wiring."""

from pathlib import Path

import pytest
from java_sources import CUSTOMER_SOURCE, ORDER_SOURCE, encode_b64

from jpa_forge.core import commands
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.relationships import (
    create_many_to_one_relationship,
    create_one_to_one_relationship,
    render_cascades,
)
from jpa_forge.core.types import CascadeType, CollectionType, FetchType, MappingType, OtherType
from jpa_forge.errors import PathSecurityViolation, SemanticNodeNotFound
from jpa_forge.models import ManyToOneFieldConfig, OneToOneFieldConfig


@pytest.fixture
def read_only_customer(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every save of Customer.java fail as if the file were read-only."""
    original = ParsedFile.save

    def save(self: ParsedFile, path: str | Path | None = None) -> Path:
        if self.path is not None and self.path.name == "Customer.java":
            raise PermissionError(13, "Permission denied", str(self.path))
        return original(self, path)

    monkeypatch.setattr(ParsedFile, "save", save)


class TestRenderCascades:
    @pytest.mark.parametrize(
        ("cascades", "expected"),
        [
            ((), None),
            ((CascadeType.PERSIST,), "CascadeType.PERSIST"),
            ((CascadeType.MERGE, CascadeType.PERSIST), "{CascadeType.PERSIST, CascadeType.MERGE}"),
            ((CascadeType.ALL,), "CascadeType.ALL"),
            ((CascadeType.ALL, CascadeType.MERGE), "CascadeType.ALL"),
            (
                (
                    CascadeType.PERSIST,
                    CascadeType.MERGE,
                    CascadeType.REMOVE,
                    CascadeType.REFRESH,
                    CascadeType.DETACH,
                ),
                "CascadeType.ALL",
            ),
        ],
        ids=["none", "single", "several", "all", "all-and-more", "every-operation"],
    )
    def test_render(self, cascades: tuple[CascadeType, ...], expected: str | None) -> None:
        assert render_cascades(cascades) == expected


class TestManyToOne:
    def test_order_to_customer(self, project: Path, shop: dict[str, Path]) -> None:
        result = create_many_to_one_relationship(
            project, shop["order"], ManyToOneFieldConfig(inverse_field_type="Customer")
        )
        assert result.success
        assert result.owning_side_updated and result.inverse_side_updated
        assert result.owning_side_entity_path == str(shop["order"])
        assert result.inverse_side_entity_path == str(shop["customer"])

        order = shop["order"].read_text(encoding="utf-8")
        assert (
            "    private Long id;\n"
            "    @ManyToOne(fetch = FetchType.LAZY, optional = true)\n"
            '    @JoinColumn(name = "customer_id", nullable = true)\n'
            "    private Customer customer;\n"
        ) in order
        assert (
            "import jakarta.persistence.Id;\n"
            "import jakarta.persistence.ManyToOne;\n"
            "import jakarta.persistence.FetchType;\n"
            "import jakarta.persistence.JoinColumn;\n"
            "import com.shop.customer.Customer;\n"
        ) in order

        customer = shop["customer"].read_text(encoding="utf-8")
        assert (
            '    private Long id;\n    @OneToMany(mappedBy = "customer")\n    private Set<Order> orders;\n'
        ) in customer
        assert "import java.util.Set;" in customer
        assert "import com.shop.order.Order;" in customer

    def test_options_on_both_sides(self, project: Path, shop: dict[str, Path]) -> None:
        config = ManyToOneFieldConfig(
            inverse_field_type="Customer",
            owning_side_field_name="buyer",
            inverse_side_field_name="purchases",
            fetch_type=FetchType.EAGER,
            collection_type=CollectionType.LIST,
            owning_side_cascades=(CascadeType.PERSIST, CascadeType.MERGE),
            inverse_side_cascades=(CascadeType.ALL,),
            owning_side_other=(OtherType.MANDATORY,),
            inverse_side_other=(OtherType.ORPHAN_REMOVAL,),
        )
        create_many_to_one_relationship(project, shop["order"], config)

        order = shop["order"].read_text(encoding="utf-8")
        assert (
            "    @ManyToOne(fetch = FetchType.EAGER, cascade = {CascadeType.PERSIST, CascadeType.MERGE}, "
            "optional = false)\n"
            '    @JoinColumn(name = "buyer_id", nullable = false)\n'
            "    private Customer buyer;\n"
        ) in order
        assert "import jakarta.persistence.CascadeType;" in order

        customer = shop["customer"].read_text(encoding="utf-8")
        assert (
            '    @OneToMany(mappedBy = "buyer", cascade = CascadeType.ALL, orphanRemoval = true)\n'
            "    private List<Order> purchases;\n"
        ) in customer
        assert "import java.util.List;" in customer

    def test_fetch_none_is_omitted(self, project: Path, shop: dict[str, Path]) -> None:
        config = ManyToOneFieldConfig(inverse_field_type="Customer", fetch_type=FetchType.NONE)
        create_many_to_one_relationship(project, shop["order"], config)
        order = shop["order"].read_text(encoding="utf-8")
        assert "    @ManyToOne(optional = true)\n" in order
        assert "FetchType" not in order

    def test_unidirectional_leaves_target_alone(self, project: Path, shop: dict[str, Path]) -> None:
        config = ManyToOneFieldConfig(
            inverse_field_type="Customer", mapping_type=MappingType.UNIDIRECTIONAL_JOIN_COLUMN
        )
        result = create_many_to_one_relationship(project, shop["order"], config)
        assert result.success
        assert result.owning_side_updated
        assert not result.inverse_side_updated
        assert shop["customer"].read_text(encoding="utf-8") == CUSTOMER_SOURCE

    def test_owning_side_from_unsaved_buffer(self, project: Path, shop: dict[str, Path]) -> None:
        buffer = ORDER_SOURCE.replace("private Long id;", "private Long id;\n\n    private String draft;")
        config = ManyToOneFieldConfig(inverse_field_type="Customer")
        create_many_to_one_relationship(project, shop["order"], config, encode_b64(buffer))
        order = shop["order"].read_text(encoding="utf-8")
        assert "    private String draft;\n    @ManyToOne(" in order

    def test_partial_failure_keeps_owning_side(
        self, project: Path, shop: dict[str, Path], read_only_customer: None
    ) -> None:
        result = create_many_to_one_relationship(
            project, shop["order"], ManyToOneFieldConfig(inverse_field_type="Customer")
        )
        assert not result.success
        assert result.owning_side_updated
        assert not result.inverse_side_updated
        assert result.failed_step == "inverse_patched"
        assert result.error is not None and "Permission denied" in result.error
        assert "private Customer customer;" in shop["order"].read_text(encoding="utf-8")
        assert shop["customer"].read_text(encoding="utf-8") == CUSTOMER_SOURCE

    def test_partial_failure_envelope(self, project: Path, shop: dict[str, Path], read_only_customer: None) -> None:
        response = commands.create_jpa_many_to_one_relationship(
            str(project), str(shop["order"]), inverse_field_type="Customer"
        )
        assert not response.success
        assert response.error_kind == "PartialFailure"
        assert response.data["owning_side_updated"] is True
        assert response.data["inverse_side_updated"] is False

    def test_unknown_target_writes_nothing(self, project: Path, shop: dict[str, Path]) -> None:
        with pytest.raises(SemanticNodeNotFound):
            create_many_to_one_relationship(project, shop["order"], ManyToOneFieldConfig(inverse_field_type="Vendor"))
        assert shop["order"].read_text(encoding="utf-8") == ORDER_SOURCE

    def test_owning_path_outside_working_directory(self, project: Path, shop: dict[str, Path]) -> None:
        with pytest.raises(PathSecurityViolation):
            create_many_to_one_relationship(
                project, "../Order.java", ManyToOneFieldConfig(inverse_field_type="Customer")
            )


class TestOneToOne:
    def test_bidirectional(self, project: Path, shop: dict[str, Path]) -> None:
        result = create_one_to_one_relationship(project, shop["order"], OneToOneFieldConfig(inverse_field_type="Customer"))
        assert result.success

        order = shop["order"].read_text(encoding="utf-8")
        assert (
            "    @OneToOne(optional = true)\n"
            '    @JoinColumn(name = "customer_id", nullable = true)\n'
            "    private Customer customer;\n"
        ) in order
        assert "import jakarta.persistence.OneToOne;" in order

        customer = shop["customer"].read_text(encoding="utf-8")
        assert '    @OneToOne(mappedBy = "customer", optional = true)\n    private Order order;\n' in customer
        assert "JoinColumn" not in customer

    def test_join_column_follows_owning_field_name(self, project: Path, shop: dict[str, Path]) -> None:
        config = OneToOneFieldConfig(
            inverse_field_type="Customer",
            owning_side_field_name="billingContact",
            owning_side_cascades=(CascadeType.PERSIST,),
            owning_side_other=(OtherType.MANDATORY, OtherType.UNIQUE, OtherType.ORPHAN_REMOVAL),
        )
        create_one_to_one_relationship(project, shop["order"], config)
        order = shop["order"].read_text(encoding="utf-8")
        assert (
            "    @OneToOne(cascade = CascadeType.PERSIST, optional = false, orphanRemoval = true)\n"
            '    @JoinColumn(name = "billing_contact_id", nullable = false, unique = true)\n'
            "    private Customer billingContact;\n"
        ) in order
        customer = shop["customer"].read_text(encoding="utf-8")
        assert '@OneToOne(mappedBy = "billingContact"' in customer

    def test_partial_failure(self, project: Path, shop: dict[str, Path], read_only_customer: None) -> None:
        result = create_one_to_one_relationship(project, shop["order"], OneToOneFieldConfig(inverse_field_type="Customer"))
        assert not result.success
        assert result.owning_side_updated
        assert not result.inverse_side_updated
