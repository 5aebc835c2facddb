from __future__ import annotations

import pytest

from grid_engine.grid import Line, Token

A = {"fg": 1}
B = {"fg": 2}
C = {"bold": True}


def make_line(*tokens: Token) -> Line:
    return Line(sum(token.width for token in tokens), tokens)


def texts(line: Line) -> list[str]:
    return [token.text for token in line.tokens]


def assert_invariant(line: Line) -> None:
    assert line.rendered_width == line.length


def test_new_line_is_one_blank_run() -> None:
    line = Line(8)

    assert line.tokens == (Token(" " * 8),)
    assert line.text() == " " * 8


def test_zero_width_line_has_no_runs() -> None:
    assert Line(0).tokens == ()


def test_insert_splits_run_and_keeps_tail() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    line.insert(2, Token("XY", C))

    assert line.tokens == (Token("ab", A), Token("XY", C), Token("efghij", B))
    assert line.text() == "abXYefghij"
    assert line.length == 10
    assert_invariant(line)


def test_insert_across_several_runs() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    line.insert(3, Token("12345", C))

    assert texts(line) == ["abc", "12345", "ij"]
    assert line.tokens[2].attr == B
    assert_invariant(line)


def test_insert_on_run_boundary_splits_only_the_end() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    line.insert(4, Token("ZZ", C))

    assert texts(line) == ["abcd", "ZZ", "ghij"]
    assert_invariant(line)


def test_insert_then_slice_reads_back_token() -> None:
    line = Line(12)
    token = Token("hello", C)

    line.insert(5, token)

    assert "".join(t.text for t in line.slice(5, 10)) == "hello"
    assert line.length == 12
    assert_invariant(line)


def test_insert_empty_token_is_noop() -> None:
    line = make_line(Token("abcd", A))

    line.insert(2, Token(""))

    assert line.tokens == (Token("abcd", A),)


def test_insert_past_last_run_pads_with_blank() -> None:
    line = Line(10, [Token("ab", A)])

    line.insert(5, Token("XY", C))

    assert texts(line) == ["ab", "   ", "XY"]
    assert line.tokens[1].attr is None
    assert line.text() == "ab   XY   "


def test_insert_tokens_overwrites_range() -> None:
    line = Line(10)

    line.insert_tokens(2, [Token("ab", A), Token(""), Token("cd", B)])

    assert texts(line) == ["  ", "ab", "cd", "    "]
    assert_invariant(line)


def test_clear_whole_line() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    line.clear()

    assert line.tokens == (Token(" " * 10),)
    assert line.text() == " " * 10


def test_clear_from_column() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    line.clear(3)

    assert line.tokens == (Token("abc", A), Token(" " * 7))
    assert_invariant(line)


def test_clear_past_end_is_noop() -> None:
    line = make_line(Token("abcd", A))

    line.clear(4)

    assert line.tokens == (Token("abcd", A),)


def test_set_length_truncation_is_destructive() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    line.set_length(6)
    assert texts(line) == ["abcd", "ef"]
    assert_invariant(line)

    line.set_length(10)
    assert line.text() == "abcdef    "
    assert texts(line) == ["abcd", "ef", "    "]
    assert_invariant(line)


def test_set_length_to_zero_drops_every_run() -> None:
    line = make_line(Token("abcd", A))

    line.set_length(0)

    assert line.tokens == ()
    assert line.length == 0


def test_slice_splits_but_preserves_text() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    sliced = line.slice(2, 6)

    assert [token.text for token in sliced] == ["cd", "ef"]
    assert line.text() == "abcdefghij"
    assert_invariant(line)


def test_token_at_returns_covering_run() -> None:
    line = make_line(Token("abcd", A), Token("efghij", B))

    assert line.token_at(0) == Token("abcd", A)
    assert line.token_at(4) == Token("efghij", B)
    assert line.token_at(9).attr == B


def test_slice_past_end_is_clamped_to_length() -> None:
    line = Line(10)

    sliced = line.slice(5, 15)

    assert sum(token.width for token in sliced) == 5
    assert line.rendered_width == line.length
    assert_invariant(line)


def test_slice_starting_outside_line_raises() -> None:
    line = Line(10)

    with pytest.raises(IndexError):
        line.slice(10, 12)
    with pytest.raises(IndexError):
        line.slice(-1, 3)
    assert_invariant(line)


def test_tokens_are_hashable() -> None:
    first = Token("ab", {"fg": 1, "bold": True})
    second = Token("ab", {"bold": True, "fg": 1})

    assert hash(first) == hash(second)
    assert {first, second, Token("ab"), Token("ab")} == {first, Token("ab")}
