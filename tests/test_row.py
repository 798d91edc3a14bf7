"""Tests for the grapheme-aware Row."""

import pytest
from glyphpad.row import Row


COMBINING_E = "e\u0301"  # e + combining acute accent, one cluster
FLAG = "\U0001F1F3\U0001F1F4"  # regional indicator pair, one cluster


@pytest.mark.parametrize("text", ["", "a", "hello", "hello world", "1234567890"])
def test_len_is_grapheme_count_for_plain_text(text):
    assert len(Row(text)) == len(text)
    assert Row(text).grapheme_count() == len(text)


def test_len_counts_clusters_not_code_points():
    row = Row(f"caf{COMBINING_E} {FLAG}")
    assert len(row.text) == 8
    assert len(row) == 6


@pytest.mark.parametrize("text,tabs", [("\t", 1), ("a\tb", 1), ("\t\tx", 2), ("no tabs", 0)])
def test_len_expands_tabs(text, tabs):
    row = Row(text)
    assert len(row) == row.grapheme_count() + tabs * 3


def test_tab_width_is_configurable():
    assert len(Row("a\tb", tab_width=8)) == 10
    assert len(Row("a\tb", tab_width=1)) == 3


def test_render_basic_slice():
    row = Row("hello world")
    assert row.render(0, 5) == "hello"
    assert row.render(6, 11) == "world"


def test_render_clamps_range():
    row = Row("hello")
    assert row.render(0, 100) == "hello"
    assert row.render(3, 100) == "lo"
    assert row.render(10, 20) == ""
    assert row.render(4, 2) == ""


def test_render_expands_tabs():
    row = Row("a\tb")
    assert row.render(0, 6) == "a    b"
    # A tab cut by the range shows only its visible columns
    assert row.render(0, 3) == "a  "
    assert row.render(3, 6) == "  b"


def test_render_never_splits_clusters():
    row = Row(f"{COMBINING_E}x{FLAG}")
    assert row.render(0, 1) == COMBINING_E
    assert row.render(1, 3) == f"x{FLAG}"


def test_push_and_insert_recompute_length():
    row = Row("ac")
    row.insert(1, "b")
    assert row.text == "abc"
    assert len(row) == 3
    row.push("d")
    assert row.text == "abcd"
    assert len(row) == 4


def test_insert_tab_is_stored_as_one_character():
    row = Row("ab")
    row.insert(1, "\t")
    assert row.text == "a\tb"
    assert row.grapheme_count() == 3
    assert len(row) == 6


def test_insert_past_end_appends():
    row = Row("ab")
    row.insert(10, "c")
    assert row.text == "abc"


def test_insert_combining_mark_joins_cluster():
    row = Row("ex")
    row.insert(1, "\u0301")
    assert row.text == f"{COMBINING_E}x"
    assert len(row) == 2


def test_delete_removes_whole_cluster():
    row = Row(f"a{COMBINING_E}b")
    row.delete(1)
    assert row.text == "ab"
    assert len(row) == 2


def test_delete_out_of_bounds_is_noop():
    row = Row("abc")
    row.delete(3)
    row.delete(-1)
    row.delete(100)
    assert row.text == "abc"
    assert len(row) == 3


def test_split_by_display_column():
    left, right = Row("hello world").split(5)
    assert left.text == "hello"
    assert right.text == " world"


def test_split_with_tabs_uses_columns():
    row = Row("\tab")
    left, right = row.split(4)
    assert (left.text, right.text) == ("\t", "ab")
    # A column inside the tab splits before it
    left, right = row.split(2)
    assert (left.text, right.text) == ("", "\tab")
    # The original row is untouched
    assert row.text == "\tab"


def test_split_at_ends():
    assert [r.text for r in Row("abc").split(0)] == ["", "abc"]
    assert [r.text for r in Row("abc").split(3)] == ["abc", ""]
    assert [r.text for r in Row("abc").split(99)] == ["abc", ""]


def test_append_joins_rows():
    row = Row("foo")
    row.append(Row("\tbar"))
    assert row.text == "foo\tbar"
    assert len(row) == 10


def test_find_returns_grapheme_index():
    row = Row(f"caf{COMBINING_E} au lait")
    # Byte/code point offset of "au" is 6, grapheme index is 5
    assert row.find("au") == 5
    assert row.find("caf") == 0
    assert row.find("xyz") is None


def test_find_rejects_partial_clusters():
    row = Row(f"caf{COMBINING_E}")
    assert row.find("\u0301") is None
    assert row.find("e") is None
    assert row.find(COMBINING_E) == 3


def test_find_empty_query():
    assert Row("abc").find("") is None


def test_find_from_start_index():
    row = Row("abcabc")
    assert row.find("abc") == 0
    assert row.find("abc", start=1) == 3
    assert row.find("abc", start=4) is None


def test_column_index_translation():
    row = Row("a\tb")
    assert [row.index_to_column(i) for i in range(4)] == [0, 1, 5, 6]
    assert row.column_to_index(0) == 0
    assert row.column_to_index(1) == 1
    assert row.column_to_index(3) == 1  # inside the tab
    assert row.column_to_index(5) == 2
    assert row.column_to_index(6) == 3
    assert row.column_to_index(50) == 3


def test_column_stepping_crosses_tabs_in_one_step():
    row = Row("a\tb")
    assert row.next_column(0) == 1
    assert row.next_column(1) == 5
    assert row.next_column(5) == 6
    assert row.next_column(6) == 6
    assert row.previous_column(6) == 5
    assert row.previous_column(5) == 1
    assert row.previous_column(3) == 1
    assert row.previous_column(0) == 0


def test_snap_column():
    row = Row("a\tb")
    assert row.snap_column(3) == 1
    assert row.snap_column(5) == 5
    assert row.snap_column(99) == 6
    assert row.snap_column(-4) == 0


def test_rows_compare_by_text():
    assert Row("abc") == Row("abc")
    assert Row("abc") != Row("abd")
