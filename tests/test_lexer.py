from __future__ import annotations

import pytest

from dectest.lexer import LexError, field_values, tokenize
from dectest.types import ScriptSyntaxError


@pytest.mark.parametrize(
    "line, expected",
    [
        pytest.param("addx001 add '1' '1' -> '2'", ["addx001", "add", "'1'", "'1'", "->", "'2'"], id="binary"),
        pytest.param("absx001 abs '-1' -> '1'", ["absx001", "abs", "'-1'", "->", "'1'"], id="unary"),
        pytest.param("t\tadd  1\t 2 -> 3", ["t", "add", "1", "2", "->", "3"], id="mixed-whitespace"),
        pytest.param(
            "divx001 divide 1 0 -> infinity division_by_zero",
            ["divx001", "divide", "1", "0", "->", "infinity", "division_by_zero"],
            id="trailing-conditions",
        ),
    ],
)
def test_tokenize_fields(line: str, expected: list) -> None:
    assert field_values(tokenize(line)) == expected


def test_tokens_keep_columns() -> None:
    tokens = tokenize("a  bb\t'c'")

    assert [tok.column for tok in tokens] == [1, 4, 7]
    assert all(tok.type == "FIELD" for tok in tokens)


@pytest.mark.parametrize("line", [pytest.param("", id="empty"), pytest.param("   ", id="blank")])
def test_tokenize_rejects_empty(line: str) -> None:
    with pytest.raises(LexError):
        tokenize(line)


def test_lex_error_is_fatal_syntax_error() -> None:
    assert issubclass(LexError, ScriptSyntaxError)
