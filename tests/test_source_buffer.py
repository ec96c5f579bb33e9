import pytest

from cmakefinch.source_buffer import SourceBuffer, SourceLocation

TEXT = "alpha\nbeta\r\ngamma"


@pytest.fixture
def buffer():
    return SourceBuffer(TEXT, "CMakeLists.txt")


def test_first_offset_is_line_one_column_one(buffer):
    loc = buffer.location_at(0)
    assert loc == SourceLocation("CMakeLists.txt", 1, 1, 0)


def test_line_content_strips_line_endings(buffer):
    assert buffer.line_content(1) == "alpha"
    assert buffer.line_content(2) == "beta"
    assert buffer.line_content(3) == "gamma"


def test_line_content_out_of_range(buffer):
    assert buffer.line_content(0) == ""
    assert buffer.line_content(buffer.line_count + 1) == ""


def test_every_offset_maps_back_to_its_character(buffer):
    for offset, ch in enumerate(TEXT):
        if ch in "\r\n":
            continue
        line, column = buffer.line_column_at(offset)
        assert buffer.line_content(line)[column - 1] == ch


def test_location_keeps_filename_and_offset(buffer):
    offset = TEXT.index("g")
    loc = buffer.location_at(offset)
    assert loc.filename == "CMakeLists.txt"
    assert loc.offset == offset
    assert (loc.line, loc.column) == buffer.line_column_at(offset)


def test_offsets_past_end_are_clamped(buffer):
    assert buffer.line_column_at(len(TEXT) + 100) == buffer.line_column_at(len(TEXT))


def test_at_and_slice(buffer):
    assert buffer.at(0) == "a"
    assert buffer.at(len(TEXT)) == "\0"
    assert buffer.slice(0, 5) == "alpha"
    assert buffer.slice(len(TEXT) - 2, len(TEXT) + 10) == "ma"


def test_empty_buffer_has_one_line():
    empty = SourceBuffer("", "x")
    assert empty.line_count == 1
    assert empty.line_content(1) == ""
    assert empty.location_at(0).line == 1