from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .operands import Operand

# ---------- Session model ----------

class RoundingMode(Enum):
    NEAREST_EVEN = "nearest_even"
    NEAREST_AWAY_FROM_ZERO = "nearest_away_from_zero"
    TOWARD_ZERO = "toward_zero"
    UNSUPPORTED = "unsupported"

    def __str__(self) -> str:
        return self.value

DEFAULT_PRECISION = 9

@dataclass
class SessionState:
    """Directive-controlled settings read by every following test line."""
    precision: int = DEFAULT_PRECISION
    mode: RoundingMode = RoundingMode.NEAREST_EVEN
    skip: bool = False

@dataclass
class RunCounters:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    def is_balanced(self) -> bool:
        return self.total == self.succeeded + self.failed + self.skipped

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.total, self.succeeded, self.failed, self.skipped)

@dataclass(frozen=True)
class TestCase:
    name: str
    op: str
    operands: Tuple[Operand, ...]
    expected: Operand
    line: str
    line_no: int = 0

    __test__ = False  # not a pytest class

    @property
    def arity(self) -> int:
        return len(self.operands)

@dataclass(frozen=True)
class FailureRecord:
    name: str
    line: str
    computed: str
    expected: str
    precision: int
    mode: RoundingMode
    source: Optional[str] = None
    line_no: int = 0

    def describe(self) -> str:
        return (
            f"failed test: {self.line}, {self.computed} != {self.expected}, "
            f"precision: {self.precision}, rounding mode: {self.mode}"
        )

@dataclass
class RunReport:
    counters: RunCounters = field(default_factory=RunCounters)
    failures: List[FailureRecord] = field(default_factory=list)

# ---------- Errors ----------

class DecTestError(Exception):
    """Fatal configuration error: the script cannot be scored."""
    source: Optional[str]
    line_no: Optional[int]

    def __init__(self, message: str, source: Optional[str] = None, line_no: Optional[int] = None):
        self.message = message
        self.source = source
        self.line_no = line_no
        super().__init__(message)

    def locate(self, source: Optional[str], line_no: Optional[int]) -> DecTestError:
        """Fill in position info the raiser did not know about."""
        if self.source is None:
            self.source = source
        if self.line_no is None:
            self.line_no = line_no
        return self

    def __str__(self) -> str:
        if self.line_no is None:
            return self.message if self.source is None else f"{self.source}: {self.message}"

        where = f"{self.source or '<input>'}:{self.line_no}"
        return f"{where}: {self.message}"

class InputError(DecTestError):
    pass

class DirectiveError(DecTestError):
    pass

class ScriptSyntaxError(DecTestError):
    pass

class OperandParseError(DecTestError):
    def __init__(self, literal: str, reason: str = "not a decimal number"):
        super().__init__(f"parsing: {literal!r}: {reason}")
        self.literal = literal

class UnknownOperatorError(DecTestError):
    def __init__(self, op: str):
        super().__init__(f"invalid op {op}")
        self.op = op

class EngineError(DecTestError):
    pass
