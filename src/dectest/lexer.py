"""
Field lexer for test lines.

A test line is a run of whitespace-delimited fields:

    <name> <op> <operand> [<operand>] -> <expected> [<condition> ...]

The grammar is deliberately flat; field roles (name, operator, operands,
arrow, expected) are assigned positionally by the active dialect.
Tokens keep their column so diagnostics can point at the offending field.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token, UnexpectedInput

from .types import ScriptSyntaxError

ARROW = "->"

LINE_GRAMMAR = r"""
line: FIELD+

FIELD: /\S+/

%ignore /\s+/
"""

_PARSER = Lark(LINE_GRAMMAR, start="line", parser="lalr")


class LexError(ScriptSyntaxError):
    """Test line could not be split into fields"""
    pass


def tokenize(line: str) -> List[Token]:
    """Split one test line into FIELD tokens."""
    try:
        tree = _PARSER.parse(line)
    except UnexpectedInput as exc:
        column = getattr(exc, 'column', '?')
        raise LexError(f"invalid input: {line!r} (col {column})") from exc

    return [tok for tok in tree.children if isinstance(tok, Token)]


def field_values(tokens: List[Token]) -> List[str]:
    return [str(tok) for tok in tokens]
