"""Unit tests for insertion points and the single-purpose edits built on them."""

import pytest
from java_sources import ORDER_SOURCE

from jpa_forge.core.annotations import Annotation, FieldSpec
from jpa_forge.core.editing import add_field, add_import, annotate_public_class, require_public_class
from jpa_forge.core.insertion import (
    FieldEdit,
    ImportEdit,
    PositionKind,
    compute_insertion_point,
    render_edit,
)
from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.errors import SemanticNodeNotFound, ValidationError


class TestImportInsertion:
    def test_after_last_import(self) -> None:
        file = ParsedFile.parse("package a;\n\nimport x.Y;\n\nclass A {}\n")
        point = compute_insertion_point(file, None, ImportEdit())
        assert point.kind is PositionKind.AFTER_LAST_DECLARATION_OF_KIND
        assert point.offset == file.text.index("import x.Y;") + len("import x.Y;")
        assert add_import(file, "b", "C").text == "package a;\n\nimport x.Y;\nimport b.C;\n\nclass A {}\n"

    def test_after_trailing_comment_of_last_import(self) -> None:
        file = ParsedFile.parse("package a;\n\nimport x.Y; // legacy\n\nclass A {}\n")
        result = add_import(file, "b", "C")
        assert result.text == "package a;\n\nimport x.Y; // legacy\nimport b.C;\n\nclass A {}\n"

    def test_after_package_without_imports(self) -> None:
        file = ParsedFile.parse("package a;\n\npublic class A {}\n")
        assert add_import(file, "b", "C").text == "package a;\n\nimport b.C;\n\npublic class A {}\n"

    def test_file_start_without_package_or_imports(self) -> None:
        file = ParsedFile.parse("public class A {}\n")
        point = compute_insertion_point(file, None, ImportEdit())
        assert point.offset == 0
        assert add_import(file, "b", "C").text == "import b.C;\n\npublic class A {}\n"

    @pytest.mark.parametrize(
        ("package", "name"),
        [("java.lang", "String"), ("com.shop.order", "Order"), ("jakarta.persistence", "Entity"), (None, "int")],
        ids=["java-lang", "same-package", "already-imported", "no-package"],
    )
    def test_redundant_imports_are_skipped(self, package: str | None, name: str) -> None:
        file = ParsedFile.parse(ORDER_SOURCE)
        assert add_import(file, package, name).text == ORDER_SOURCE

    def test_array_suffix_is_stripped(self) -> None:
        file = ParsedFile.parse("package a;\n\nclass A {}\n")
        assert "import java.lang2.Thing;" in add_import(file, "java.lang2", "Thing[]").text


class TestFieldInsertion:
    def test_sole_member_of_empty_body(self) -> None:
        file = ParsedFile.parse("package a;\n\npublic class A {}\n", "A.java")
        result = add_field(file, FieldSpec("String", "name"))
        assert result.text == "package a;\n\npublic class A {\n    private String name;\n}\n"

    def test_sole_member_of_body_spanning_lines(self) -> None:
        file = ParsedFile.parse("public class A {\n}\n", "A.java")
        point = compute_insertion_point(file, require_public_class(file), FieldEdit())
        assert point.kind is PositionKind.AFTER_SCOPE_HEADER
        result = add_field(file, FieldSpec("String", "name"))
        assert result.text == "public class A {\n    private String name;\n}\n"

    def test_after_last_field(self) -> None:
        file = ParsedFile.parse(ORDER_SOURCE, "Order.java")
        result = add_field(file, FieldSpec("String", "note"))
        assert "    @Id\n    private Long id;\n    private String note;\n\n    public Long getId()" in result.text

    def test_before_first_method_when_no_fields(self) -> None:
        source = "public class A {\n    public A() {}\n}\n"
        result = add_field(ParsedFile.parse(source, "A.java"), FieldSpec("String", "name"))
        assert result.text == "public class A {\n    private String name;\n\n    public A() {}\n}\n"

    def test_javadoc_stays_with_first_method(self) -> None:
        source = "public class A {\n    /** The id. */\n    public Long getId() { return null; }\n}\n"
        result = add_field(ParsedFile.parse(source, "A.java"), FieldSpec("String", "name"))
        assert result.text == (
            "public class A {\n"
            "    private String name;\n"
            "\n"
            "    /** The id. */\n"
            "    public Long getId() { return null; }\n"
            "}\n"
        )

    def test_stacked_line_comments_stay_with_first_method(self) -> None:
        source = "public class A {\n    // Accessors\n    // generated\n    public A() {}\n}\n"
        result = add_field(ParsedFile.parse(source, "A.java"), FieldSpec("int", "x"))
        assert result.text == (
            "public class A {\n    private int x;\n\n    // Accessors\n    // generated\n    public A() {}\n}\n"
        )

    def test_comment_on_body_header_line_is_not_an_anchor(self) -> None:
        source = "public class A { // helpers\n    public A() {}\n}\n"
        result = add_field(ParsedFile.parse(source, "A.java"), FieldSpec("int", "x"))
        assert result.text == "public class A { // helpers\n    private int x;\n\n    public A() {}\n}\n"

    def test_trailing_comment_stays_with_last_field(self) -> None:
        source = "public class A {\n    private Long id; // primary key\n}\n"
        result = add_field(ParsedFile.parse(source, "A.java"), FieldSpec("String", "name"))
        assert result.text == "public class A {\n    private Long id; // primary key\n    private String name;\n}\n"

    def test_repeated_inserts_relocate_against_new_tree(self) -> None:
        file = ParsedFile.parse("public class A {}\n", "A.java")
        file = add_field(file, FieldSpec("String", "a"))
        file = add_field(file, FieldSpec("String", "b"))
        file = add_field(file, FieldSpec("String", "c"))
        assert file.text == "public class A {\n    private String a;\n    private String b;\n    private String c;\n}\n"

    def test_annotated_field_lines_are_indented(self) -> None:
        file = ParsedFile.parse("public class A {}\n", "A.java")
        spec = FieldSpec("Long", "id", (Annotation("Id"), Annotation("Column").with_string("name", "id")))
        result = add_field(file, spec)
        assert result.text == 'public class A {\n    @Id\n    @Column(name = "id")\n    private Long id;\n}\n'

    def test_duplicate_field_name_is_rejected(self) -> None:
        file = ParsedFile.parse(ORDER_SOURCE, "Order.java")
        with pytest.raises(ValidationError):
            add_field(file, FieldSpec("Long", "id"))

    def test_field_without_public_class(self) -> None:
        with pytest.raises(SemanticNodeNotFound):
            add_field(ParsedFile.parse("class A {}"), FieldSpec("String", "name"))

    def test_field_edit_needs_a_scope(self) -> None:
        with pytest.raises(SemanticNodeNotFound):
            compute_insertion_point(ParsedFile.parse("class A {}"), None, FieldEdit())

    def test_tab_indentation_is_copied(self) -> None:
        source = "public class A {\n\tprivate int x;\n}\n"
        result = add_field(ParsedFile.parse(source, "A.java"), FieldSpec("int", "y"))
        assert result.text == "public class A {\n\tprivate int x;\n\tprivate int y;\n}\n"


class TestAnnotationInsertion:
    def test_before_existing_annotations(self) -> None:
        file = ParsedFile.parse("package a;\n\n@Getter\npublic class A {}\n", "A.java")
        result = annotate_public_class(file, Annotation("Entity"))
        assert result.text == "package a;\n\n@Entity\n@Getter\npublic class A {}\n"

    def test_on_bare_class_keeps_indent(self) -> None:
        file = ParsedFile.parse("package a;\n\npublic class A {}\n", "A.java")
        result = annotate_public_class(file, Annotation("Entity"), Annotation("Table").with_string("name", "a"))
        assert result.text == 'package a;\n\n@Entity\n@Table(name = "a")\npublic class A {}\n'

    def test_require_public_class(self) -> None:
        with pytest.raises(SemanticNodeNotFound):
            require_public_class(ParsedFile.parse("interface A {}"))


class TestRenderEdit:
    def test_point_is_not_mutated_by_rendering(self) -> None:
        file = ParsedFile.parse("package a;\n\npublic class A {}\n", "A.java")
        point = compute_insertion_point(file, require_public_class(file), FieldEdit())
        first = render_edit(point, "private int x;")
        second = render_edit(point, "private int x;")
        assert first == second
        assert point.kind is PositionKind.END_OF_SCOPE_BODY
