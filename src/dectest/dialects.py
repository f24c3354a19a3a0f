"""
Test-vector dialects.

Both grammars share one interpreter; everything that differs between them
lives in a frozen `Dialect` record selected at startup:

FIXED     `<name> <op> '<l>' '<r>' -> '<e>'`, operands taken by position,
          unknown operators are fatal, the result is rounded to the session
          precision after a working-precision operation.
VARIABLE  `<name> <op> '<l>' ['<r>'] -> '<e>'` with `#`/`?` sentinels,
          unknown operators are skipped, operands are rounded to the
          session precision before the operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, FrozenSet, Optional

from .types import RoundingMode

INTERNAL_PRECISION = 34
GUARD_DIGITS = 2


class PrecisionPolicy(Enum):
    RESULT = auto()    # operands keep working precision, result is rounded
    OPERANDS = auto()  # operands are rounded, operation runs at session precision


_COMMON_ROUNDING: Dict[str, RoundingMode] = {
    "half_even": RoundingMode.NEAREST_EVEN,
    "half_up": RoundingMode.NEAREST_AWAY_FROM_ZERO,
    "zero": RoundingMode.TOWARD_ZERO,
}


@dataclass(frozen=True)
class Dialect:
    name: str
    min_fields: int
    rounding_modes: Dict[str, RoundingMode] = field(hash=False)
    skipped_rounding: FrozenSet[str]
    sentinels: bool
    strict_operators: bool
    precision_policy: PrecisionPolicy
    working_precision: Optional[int]  # None: parse literals exactly

    def rounding_for(self, token: str) -> Optional[RoundingMode]:
        """Mode for `token`, UNSUPPORTED for skip tokens, None if unknown."""
        if token in self.rounding_modes:
            return self.rounding_modes[token]

        if token in self.skipped_rounding:
            return RoundingMode.UNSUPPORTED

        return None

    def working_precision_for(self, precision: int) -> Optional[int]:
        """Digits kept when parsing literals and running the operation.

        Never below the session precision plus guard digits, so a session
        wider than the internal default is not truncated early.
        """
        if self.working_precision is None:
            return None

        return max(self.working_precision, precision + GUARD_DIGITS)


FIXED = Dialect(
    name="fixed",
    min_fields=6,
    rounding_modes={**_COMMON_ROUNDING, "down": RoundingMode.TOWARD_ZERO},
    skipped_rounding=frozenset({"half_down", "floor", "ceiling", "up"}),
    sentinels=False,
    strict_operators=True,
    precision_policy=PrecisionPolicy.RESULT,
    working_precision=INTERNAL_PRECISION,
)

VARIABLE = Dialect(
    name="variable",
    min_fields=5,
    rounding_modes=dict(_COMMON_ROUNDING),
    skipped_rounding=frozenset({"half_down", "floor", "ceiling", "up", "down"}),
    sentinels=True,
    strict_operators=False,
    precision_policy=PrecisionPolicy.OPERANDS,
    working_precision=None,
)
