"""Operator table: textual operator names mapped to engine calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from .engine import Engine, EngineContext, Value
from .types import ScriptSyntaxError, UnknownOperatorError

OpFn = Callable[..., Value]

@dataclass(frozen=True)
class Operation:
    name: str
    arity: int
    fn: OpFn

    def __call__(self, engine: Engine, ctx: EngineContext, operands: Sequence[Value]) -> Value:
        return self.fn(engine, ctx, *operands)

OPERATIONS: Dict[str, Operation] = {}

def register_op(name: str, *, arity: int):
    def dec(fn: OpFn) -> OpFn:
        OPERATIONS[name] = Operation(name=name, arity=arity, fn=fn)
        return fn

    return dec

def lookup_op(name: str) -> Optional[Operation]:
    return OPERATIONS.get(name)

def resolve_op(name: str, arity: int, *, strict: bool = True) -> Optional[Operation]:
    """Find `name` and check it takes `arity` operands.

    An unknown name raises UnknownOperatorError when `strict`, otherwise
    returns None. An arity mismatch is always a script error.
    """
    operation = lookup_op(name)

    if operation is None:
        if strict:
            raise UnknownOperatorError(name)
        return None

    if operation.arity != arity:
        raise ScriptSyntaxError(f"{name} expects {operation.arity} operand(s); got {arity}")

    return operation

def dispatch(engine: Engine, name: str, ctx: EngineContext, operands: Sequence[Value]) -> Value:
    operation = resolve_op(name, len(operands))
    assert operation is not None
    return operation(engine, ctx, operands)

# ---------- unary ----------

@register_op("abs", arity=1)
def _op_abs(engine: Engine, ctx: EngineContext, x: Value) -> Value:
    return engine.abs(ctx, x)

@register_op("exp", arity=1)
def _op_exp(engine: Engine, ctx: EngineContext, x: Value) -> Value:
    return engine.exp(ctx, x)

@register_op("ln", arity=1)
def _op_ln(engine: Engine, ctx: EngineContext, x: Value) -> Value:
    return engine.ln(ctx, x)

@register_op("squareroot", arity=1)
def _op_squareroot(engine: Engine, ctx: EngineContext, x: Value) -> Value:
    return engine.sqrt(ctx, x)

# ---------- binary ----------

@register_op("add", arity=2)
def _op_add(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.add(ctx, x, y)

@register_op("subtract", arity=2)
def _op_subtract(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.subtract(ctx, x, y)

@register_op("multiply", arity=2)
def _op_multiply(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.multiply(ctx, x, y)

@register_op("divide", arity=2)
def _op_divide(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.divide(ctx, x, y)

@register_op("power", arity=2)
def _op_power(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.power(ctx, x, y)

@register_op("remainder", arity=2)
def _op_remainder(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.remainder(ctx, x, y)

@register_op("max", arity=2)
def _op_max(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.max(ctx, x, y)

@register_op("min", arity=2)
def _op_min(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.min(ctx, x, y)

@register_op("compare", arity=2)
def _op_compare(engine: Engine, ctx: EngineContext, x: Value, y: Value) -> Value:
    return engine.compare(ctx, x, y)
