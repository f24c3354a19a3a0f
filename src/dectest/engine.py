"""
Arithmetic engine adapter.

The harness never does arithmetic itself. It talks to an engine through the
`Engine` protocol; `DecimalEngine` drives the standard-library `decimal`
module, an implementation of the General Decimal Arithmetic specification.
"""

from __future__ import annotations

import decimal
from decimal import Context, Decimal, InvalidOperation
from typing import Any, Optional

from typing_extensions import Protocol, TypeAlias

from .types import EngineError, OperandParseError, RoundingMode

Value: TypeAlias = Any
EngineContext: TypeAlias = Any


class Engine(Protocol):
    def context(self, precision: int, mode: RoundingMode) -> EngineContext: ...
    def parse(self, literal: str, precision: Optional[int]) -> Value: ...
    def round(self, value: Value, precision: int, mode: RoundingMode) -> Value: ...
    def render(self, value: Value) -> str: ...

    def abs(self, ctx: EngineContext, x: Value) -> Value: ...
    def exp(self, ctx: EngineContext, x: Value) -> Value: ...
    def ln(self, ctx: EngineContext, x: Value) -> Value: ...
    def sqrt(self, ctx: EngineContext, x: Value) -> Value: ...

    def add(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def subtract(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def multiply(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def divide(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def power(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def remainder(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def max(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def min(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...
    def compare(self, ctx: EngineContext, x: Value, y: Value) -> Value: ...


_DECIMAL_ROUNDING = {
    RoundingMode.NEAREST_EVEN: decimal.ROUND_HALF_EVEN,
    RoundingMode.NEAREST_AWAY_FROM_ZERO: decimal.ROUND_HALF_UP,
    RoundingMode.TOWARD_ZERO: decimal.ROUND_DOWN,
}


class DecimalEngine:
    """`Engine` backed by `decimal`.

    Arithmetic contexts trap nothing, so exceptional results surface as NaN
    or Infinity and are scored like any other value. Exponent limits are
    pinned to the module maximum since exponent directives are ignored.
    """

    def context(self, precision: int, mode: RoundingMode) -> Context:
        rounding = _DECIMAL_ROUNDING.get(mode)

        if rounding is None:
            raise EngineError(f"rounding mode {mode} is not supported by the decimal engine")

        if precision < 1 or precision > decimal.MAX_PREC:
            raise EngineError(f"precision {precision} is out of range for the decimal engine")

        return Context(
            prec=precision,
            rounding=rounding,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            capitals=1,
            clamp=0,
            flags=[],
            traps=[],
        )

    def _parse_context(self, precision: int) -> Context:
        ctx = self.context(precision, RoundingMode.NEAREST_EVEN)
        ctx.traps[InvalidOperation] = True
        return ctx

    def parse(self, literal: str, precision: Optional[int]) -> Decimal:
        """Parse `literal`; `precision=None` keeps every digit.

        Only ASCII numeric strings are accepted; digit-grouping underscores
        and non-ASCII digits are rejected.
        """
        if not literal.isascii():
            raise OperandParseError(literal)

        try:
            ctx = self._parse_context(decimal.MAX_PREC if precision is None else precision)
            return ctx.create_decimal(literal)
        except InvalidOperation as exc:
            raise OperandParseError(literal) from exc

    def round(self, value: Decimal, precision: int, mode: RoundingMode) -> Decimal:
        return self.context(precision, mode).create_decimal(value)

    def render(self, value: Decimal) -> str:
        return str(value)

    def abs(self, ctx: Context, x: Decimal) -> Decimal:
        return ctx.abs(x)

    def exp(self, ctx: Context, x: Decimal) -> Decimal:
        return ctx.exp(x)

    def ln(self, ctx: Context, x: Decimal) -> Decimal:
        return ctx.ln(x)

    def sqrt(self, ctx: Context, x: Decimal) -> Decimal:
        return ctx.sqrt(x)

    def add(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.add(x, y)

    def subtract(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.subtract(x, y)

    def multiply(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.multiply(x, y)

    def divide(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.divide(x, y)

    def power(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.power(x, y)

    def remainder(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.remainder(x, y)

    def max(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.max(x, y)

    def min(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        return ctx.min(x, y)

    def compare(self, ctx: Context, x: Decimal, y: Decimal) -> Decimal:
        # -1, 0 or 1 as a Decimal; NaN when either side is NaN
        return ctx.compare(x, y)
