import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from lpsql_lint.linter.common import neutralize_comments, resolve_position


def test_line_comment_blanked_to_end_of_line():
    assert neutralize_comments("a -- b\nc") == "a " + " " * 4 + "\nc"


def test_block_comment_blanked_including_newlines():
    assert neutralize_comments("x/*1\n2*/y") == "x" + " " * 7 + "y"


def test_length_and_non_comment_offsets_preserved():
    sql = "CREATE TABLE t ( -- note\n  id INT /* pk */ PRIMARY KEY\n);"
    out = neutralize_comments(sql)
    assert len(out) == len(sql)
    for i, (before, after) in enumerate(zip(sql, out)):
        assert after == before or after == " ", i
    assert out.index("PRIMARY KEY") == sql.index("PRIMARY KEY")


def test_unterminated_block_comment_runs_to_end():
    assert neutralize_comments("a /* b\nc") == "a " + " " * 6


def test_block_opener_inside_line_comment_is_not_a_block():
    assert neutralize_comments("-- /* x\nDROP") == " " * 7 + "\nDROP"


def test_text_without_comments_unchanged():
    sql = "CREATE TABLE t (a INT, b TEXT DEFAULT '-');"
    assert neutralize_comments(sql) == sql


def test_position_at_start_of_text():
    pos = resolve_position("  ab\ncd", 0)
    assert (pos.line, pos.column, pos.snippet) == (1, 1, "ab")


def test_position_on_later_line():
    pos = resolve_position("ab\n  cd  \nef", 5)
    assert (pos.line, pos.column, pos.snippet) == (2, 3, "cd")


def test_position_at_end_of_text_after_newline():
    pos = resolve_position("ab\n", 3)
    assert (pos.line, pos.column, pos.snippet) == (2, 1, "")
