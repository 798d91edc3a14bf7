"""Tests for Document editing, search and file I/O."""

import os

import pytest
from glyphpad.document import Document, Position


def texts(document):
    return [row.text for row in document.rows]


def test_new_document_is_empty_and_clean():
    doc = Document()
    assert len(doc) == 0
    assert doc.is_empty()
    assert not doc.is_dirty()
    assert doc.filename is None


def test_row_accessors():
    doc = Document.from_lines(["one", "two"])
    assert doc.row(1).text == "two"
    assert doc.row(2) is None
    assert doc.row(-1) is None
    assert doc.row_or_empty(5).text == ""
    assert len(doc.row_or_empty(5)) == 0


def test_insert_on_append_line_creates_row():
    doc = Document()
    doc.insert(Position(0, 0), "a")
    assert texts(doc) == ["a"]
    assert doc.is_dirty()


def test_insert_appends_at_end_of_row():
    doc = Document.from_lines(["ab"])
    doc.insert(Position(2, 0), "c")
    assert texts(doc) == ["abc"]


def test_insert_positional():
    doc = Document.from_lines(["ac"])
    doc.insert(Position(1, 0), "b")
    assert texts(doc) == ["abc"]


def test_insert_after_tab_uses_display_column():
    doc = Document.from_lines(["\tb"])
    doc.insert(Position(4, 0), "a")
    assert texts(doc) == ["\tab"]


def test_insert_clamps_stale_positions():
    doc = Document.from_lines(["ab"])
    doc.insert(Position(99, 0), "c")
    doc.insert(Position(0, 42), "z")
    assert texts(doc) == ["abc", "z"]


def test_insert_newline_character_splits():
    doc = Document.from_lines(["abcd"])
    doc.insert(Position(2, 0), "\n")
    assert texts(doc) == ["ab", "cd"]


def test_insert_newline_splits_row():
    doc = Document.from_lines(["hello world", "next"])
    doc.insert_newline(Position(5, 0))
    assert texts(doc) == ["hello", " world", "next"]
    assert doc.is_dirty()


def test_insert_newline_past_end_adds_two_rows():
    doc = Document.from_lines(["only"])
    doc.insert_newline(Position(0, 1))
    assert texts(doc) == ["only", "", ""]


def test_delete_backward_within_row():
    doc = Document.from_lines(["abc"])
    assert doc.delete_backward(Position(2, 0))
    assert texts(doc) == ["ac"]


def test_delete_backward_removes_tab():
    doc = Document.from_lines(["a\tb"])
    doc.delete_backward(Position(5, 0))
    assert texts(doc) == ["ab"]


def test_delete_backward_joins_rows():
    doc = Document.from_lines(["foo", "bar", "baz"])
    doc.delete_backward(Position(0, 1))
    assert texts(doc) == ["foobar", "baz"]
    assert doc.is_dirty()


def test_delete_backward_at_document_start_is_noop():
    doc = Document.from_lines(["abc", "def"])
    assert not doc.delete_backward(Position(0, 0))
    assert texts(doc) == ["abc", "def"]
    assert not doc.is_dirty()


def test_delete_backward_on_append_line_is_noop():
    doc = Document.from_lines(["abc"])
    assert not doc.delete_backward(Position(0, 1))
    assert texts(doc) == ["abc"]


def test_delete_forward_within_row():
    doc = Document.from_lines(["abc"])
    doc.delete_forward(Position(0, 0))
    assert texts(doc) == ["bc"]


def test_delete_forward_joins_next_row():
    doc = Document.from_lines(["foo", "bar"])
    doc.delete_forward(Position(3, 0))
    assert texts(doc) == ["foobar"]


def test_delete_forward_at_document_end_is_noop():
    doc = Document.from_lines(["foo", "bar"])
    assert not doc.delete_forward(Position(3, 1))
    assert not doc.delete_forward(Position(0, 2))
    assert texts(doc) == ["foo", "bar"]
    assert not doc.is_dirty()


def test_edits_on_empty_document_never_fail():
    doc = Document()
    assert not doc.delete_backward(Position(3, 3))
    assert not doc.delete_forward(Position(3, 3))
    assert doc.find("x") is None
    assert len(doc) == 0


@pytest.mark.parametrize("c", ["x", "\t", "\u00e9"])
def test_insert_then_delete_backward_restores_row(c):
    original = "ab\tc"
    for index in range(5):
        doc = Document.from_lines([original])
        column = doc.row(0).index_to_column(index)
        before = len(doc.row(0))
        doc.insert(Position(column, 0), c)
        after = len(doc.row(0))
        doc.delete_backward(Position(column + after - before, 0))
        assert texts(doc) == [original]


@pytest.mark.parametrize("column", [0, 1, 2, 6, 7])
def test_split_then_join_restores_row(column):
    doc = Document.from_lines(["first", "ab\tcd", "last"])
    doc.insert_newline(Position(column, 1))
    assert len(doc) == 4
    doc.delete_backward(Position(0, 2))
    assert texts(doc) == ["first", "ab\tcd", "last"]


def test_find_returns_leftmost_topmost_match():
    doc = Document.from_lines(["abcabc", "xyzabc"])
    assert doc.find("abc") == Position(0, 0)
    assert doc.find("xyz") == Position(0, 1)
    assert doc.find("cab") == Position(2, 0)
    assert doc.find("nothing") is None


def test_find_reports_display_column():
    doc = Document.from_lines(["plain", "\tindented"])
    assert doc.find("indented") == Position(4, 1)


def test_open_reads_rows(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("hello\nworld\n", encoding="utf-8")
    doc = Document.open(str(path))
    assert texts(doc) == ["hello", "world"]
    assert doc.filename == str(path)
    assert not doc.is_dirty()


def test_open_without_trailing_newline(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("a\n\nb", encoding="utf-8")
    assert texts(Document.open(str(path))) == ["a", "", "b"]


def test_open_strips_carriage_returns(tmp_path):
    path = tmp_path / "dos.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    assert texts(Document.open(str(path))) == ["one", "two"]


def test_open_empty_file_has_no_rows(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    doc = Document.open(str(path))
    assert len(doc) == 0
    assert doc.filename == str(path)


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Document.open(str(tmp_path / "missing.txt"))


def test_open_invalid_utf8_raises_oserror(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"caf\xe9\n")
    with pytest.raises(OSError) as exc_info:
        Document.open(str(path))
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def test_save_and_reopen_round_trip(tmp_path):
    path = tmp_path / "round.txt"
    doc = Document.from_lines(["hello", "world"], filename=str(path))
    doc.dirty = True
    doc.save()
    assert not doc.is_dirty()
    assert path.read_text(encoding="utf-8") == "hello\nworld\n"

    reopened = Document.open(str(path))
    assert texts(reopened) == ["hello", "world"]
    assert not reopened.is_dirty()


def test_save_writes_lf_line_endings(tmp_path):
    path = tmp_path / "dos.txt"
    path.write_bytes(b"one\r\ntwo\r\n")
    doc = Document.open(str(path))
    doc.save()
    assert path.read_bytes() == b"one\ntwo\n"


def test_save_preserves_tabs_and_unicode(tmp_path):
    path = tmp_path / "u.txt"
    doc = Document.from_lines(["\tcaf\u00e9", "\U0001F1F3\U0001F1F4"], filename=str(path))
    doc.save()
    assert path.read_text(encoding="utf-8") == "\tcaf\u00e9\n\U0001F1F3\U0001F1F4\n"


def test_save_without_filename_is_caller_error():
    doc = Document.from_lines(["x"])
    with pytest.raises(ValueError):
        doc.save()


def test_save_failure_keeps_dirty_flag(tmp_path):
    doc = Document.from_lines(["x"], filename=str(tmp_path / "no" / "such" / "dir.txt"))
    doc.dirty = True
    with pytest.raises(OSError):
        doc.save()
    assert doc.is_dirty()


def test_save_leaves_no_temp_files(tmp_path):
    path = tmp_path / "clean.txt"
    doc = Document.from_lines(["x"], filename=str(path))
    doc.save()
    assert os.listdir(tmp_path) == ["clean.txt"]


def test_save_as_sets_filename(tmp_path):
    path = tmp_path / "new.txt"
    doc = Document.from_lines(["x"])
    doc.save_as(str(path))
    assert doc.filename == str(path)
    assert path.read_text(encoding="utf-8") == "x\n"
