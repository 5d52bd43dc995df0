"""Unit tests for applying byte-offset edits."""

import pytest

from jpa_forge.core.parsed_file import ParsedFile
from jpa_forge.core.patch import EditOperation, apply_edits, patch
from jpa_forge.errors import InvalidOffset

_SOURCE = "0123456789" * 5


class TestApplyEdits:
    def test_order_of_edits_does_not_matter(self) -> None:
        first = EditOperation(10, "X")
        second = EditOperation(40, "Y")
        forward = apply_edits(_SOURCE, [first, second])
        backward = apply_edits(_SOURCE, [second, first])
        assert forward.source == backward.source
        assert forward.source == _SOURCE[:10] + "X" + _SOURCE[10:40] + "Y" + _SOURCE[40:]

    def test_applied_is_sorted_by_offset(self) -> None:
        result = apply_edits(_SOURCE, [EditOperation(40, "Y"), EditOperation(10, "X")])
        assert [e.offset for e in result.applied] == [10, 40]
        assert result.success

    def test_same_offset_keeps_input_order(self) -> None:
        result = apply_edits("ab", [EditOperation(1, "1"), EditOperation(1, "2")])
        assert result.source == "a12b"

    def test_bounds_are_inclusive(self) -> None:
        result = apply_edits("ab", [EditOperation(0, "<"), EditOperation(2, ">")])
        assert result.source == "<ab>"

    @pytest.mark.parametrize("offset", [-1, 51, 1000])
    def test_offset_outside_buffer(self, offset: int) -> None:
        with pytest.raises(InvalidOffset) as exc_info:
            apply_edits(_SOURCE, [EditOperation(10, "X"), EditOperation(offset, "Y")])
        assert exc_info.value.offset == offset
        assert exc_info.value.length == 50

    @pytest.mark.parametrize(("source", "offset"), [("é", 1), ("a€b", 2), ("a€b", 3)])
    def test_offset_inside_multibyte_character(self, source: str, offset: int) -> None:
        with pytest.raises(InvalidOffset) as exc_info:
            apply_edits(source, [EditOperation(offset, "x")])
        assert exc_info.value.offset == offset

    def test_offsets_around_multibyte_character(self) -> None:
        result = apply_edits("a€b", [EditOperation(1, "<"), EditOperation(4, ">")])
        assert result.source == "a<€>b"

    def test_none_text_is_skipped(self) -> None:
        result = apply_edits("ab", [EditOperation(1, None)])
        assert result.source == "ab"
        assert result.applied == []

    def test_offsets_are_bytes(self) -> None:
        # "é" is two bytes in UTF-8.
        result = apply_edits("é!", [EditOperation(2, "?")])
        assert result.source == "é?!"

    def test_no_edits(self) -> None:
        assert apply_edits(_SOURCE, []).source == _SOURCE


class TestPatch:
    def test_returns_reparsed_file(self) -> None:
        file = ParsedFile.parse("class A {}\n", "A.java")
        new_file, result = patch(file, [EditOperation(0, "public ")])
        assert new_file.text == "public class A {}\n"
        assert new_file.path == file.path
        assert result.source == new_file.text
        assert file.text == "class A {}\n"
