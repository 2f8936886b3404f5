import pytest

from sample_illustrator.document import DocumentPositionLookup
from sample_illustrator.document import PositionLookup
from sample_illustrator.document import TextDocument
from sample_illustrator.tree.factory import source_file


def test_line_numbers() -> None:
    document = TextDocument("ab\n\ncd\n")
    assert document.line_starts == [0, 3, 4, 7]
    assert [document.line_number(offset) for offset in range(8)] == [0, 0, 0, 1, 2, 2, 2, 3]
    assert document.line_start_offset(2) == 4
    assert document.position_of(5) == (2, 1)


def test_offset_outside_of_document() -> None:
    with pytest.raises(IndexError):
        TextDocument("abc").line_number(4)
    with pytest.raises(IndexError):
        TextDocument("abc").line_number(-1)


def test_lookup_against_file_text() -> None:
    lookup = DocumentPositionLookup()
    assert isinstance(lookup, PositionLookup)
    file = source_file("package demo", "\n", "fun f() = 1")
    assert lookup.position_of(file, 13) == (1, 0)
    assert lookup.position_of(file, 17) == (1, 4)
    assert lookup.position_of(file, 100) is None
    assert lookup.position_of(None, 3) is None
