"""
Operand decoding for test-vector tokens.

A raw token from a test line is either a quoted or bare decimal literal, or
one of two reserved sentinels:

- `?` : the expected result is unconstrained ("don't care")
- `#` : the vector does not apply to this engine (forced skip)

Nothing here parses numbers; literals are handed to the engine as text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

UNCONSTRAINED_SENTINEL = "?"
FORCED_SKIP_SENTINEL = "#"

QUOTE_CHARS = ("'", '"')


class OperandKind(Enum):
    LITERAL = auto()
    UNCONSTRAINED = auto()
    FORCED_SKIP = auto()


@dataclass(frozen=True)
class Operand:
    kind: OperandKind
    text: str = ""

    @property
    def is_literal(self) -> bool:
        return self.kind is OperandKind.LITERAL

    def __repr__(self) -> str:
        if self.kind is OperandKind.LITERAL:
            return f"Literal({self.text!r})"
        return self.kind.name.title().replace("_", "")


UNCONSTRAINED = Operand(OperandKind.UNCONSTRAINED, UNCONSTRAINED_SENTINEL)
FORCED_SKIP = Operand(OperandKind.FORCED_SKIP, FORCED_SKIP_SENTINEL)


def strip_quotes(raw: str) -> str:
    """Remove one matching pair of surrounding quotes, if present."""
    if len(raw) >= 2 and raw[0] in QUOTE_CHARS and raw[-1] == raw[0]:
        return raw[1:-1]

    return raw


def decode_operand(raw: str, sentinels: bool = True) -> Operand:
    """Classify a raw token as a literal or a sentinel.

    With `sentinels` off every token is a literal, so `'#'` reaches the
    engine and fails there like any other malformed number.
    """
    value = strip_quotes(raw)

    if sentinels:
        if value == UNCONSTRAINED_SENTINEL:
            return UNCONSTRAINED
        if value == FORCED_SKIP_SENTINEL:
            return FORCED_SKIP

    return Operand(OperandKind.LITERAL, value)
