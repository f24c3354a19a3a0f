from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Sequence

from .dialects import Dialect, PrecisionPolicy
from .engine import Engine, Value
from .lexer import ARROW, field_values, tokenize
from .operands import Operand, decode_operand
from .ops import Operation, resolve_op
from .types import (
    FailureRecord,
    RunReport,
    ScriptSyntaxError,
    SessionState,
    TestCase,
)

log = logging.getLogger(__name__)

class Outcome(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"

def split_test_line(fields: Sequence[str], dialect: Dialect, line: str, line_no: int = 0) -> TestCase:
    """Assign field roles for `dialect`.

    The fixed grammar always reads fields 2, 3 and 5. The variable grammar is
    unary when field 3 is the arrow or the line is too short to hold two
    operands, binary otherwise.
    """
    if len(fields) < dialect.min_fields:
        raise ScriptSyntaxError(f"invalid input: {line}")

    name, op = fields[0], fields[1]

    def decode(raw: str) -> Operand:
        return decode_operand(raw, sentinels=dialect.sentinels)

    if not dialect.sentinels:
        operands = (decode(fields[2]), decode(fields[3]))
        expected_raw = fields[5]
    elif fields[3] == ARROW or len(fields) < 6:
        operands = (decode(fields[2]),)
        expected_raw = fields[4]
    else:
        operands = (decode(fields[2]), decode(fields[3]))
        expected_raw = fields[5]

    return TestCase(
        name=name,
        op=op,
        operands=operands,
        expected=decode(expected_raw),
        line=line,
        line_no=line_no,
    )

def _skip(report: RunReport, line: str, state: SessionState, why: str) -> Outcome:
    report.counters.skipped += 1
    log.debug("skipping test (%s): %s. Precision: %s. Rounding mode: %s", why, line, state.precision, state.mode)
    return Outcome.SKIPPED

def compute(
    case: TestCase,
    operation: Operation,
    state: SessionState,
    dialect: Dialect,
    engine: Engine,
) -> Value:
    """Run one operation under the dialect's precision policy."""
    working = dialect.working_precision_for(state.precision)
    values: List[Value] = [engine.parse(o.text, working) for o in case.operands]

    if dialect.precision_policy is PrecisionPolicy.OPERANDS:
        values = [engine.round(v, state.precision, state.mode) for v in values]
        ctx = engine.context(state.precision, state.mode)
        result = operation(engine, ctx, values)
    else:
        ctx = engine.context(state.precision if working is None else working, state.mode)
        result = engine.round(operation(engine, ctx, values), state.precision, state.mode)

    log.debug("result after rounding: %s", engine.render(result))
    return result

def evaluate_test(
    line: str,
    state: SessionState,
    report: RunReport,
    dialect: Dialect,
    engine: Engine,
    source: Optional[str] = None,
    line_no: int = 0,
) -> Outcome:
    counters = report.counters
    counters.total += 1

    if state.skip:
        return _skip(report, line, state, f"rounding {state.mode}")

    case = split_test_line(field_values(tokenize(line)), dialect, line, line_no)

    if not case.operands[0].is_literal:
        return _skip(report, line, state, "left operand sentinel")

    if not all(o.is_literal for o in case.operands) or not case.expected.is_literal:
        return _skip(report, line, state, "sentinel")

    operation = resolve_op(case.op, case.arity, strict=dialect.strict_operators)
    if operation is None:
        return _skip(report, line, state, f"unsupported op {case.op}")

    log.debug(
        "test %s, op %s, operands %s, expected %s",
        case.name, case.op, " ".join(o.text for o in case.operands), case.expected.text,
    )

    expected = engine.parse(case.expected.text, dialect.working_precision_for(state.precision))
    result = compute(case, operation, state, dialect, engine)

    computed_text = engine.render(result)
    expected_text = engine.render(expected)

    if computed_text == expected_text:
        counters.succeeded += 1
        return Outcome.SUCCEEDED

    counters.failed += 1
    record = FailureRecord(
        name=case.name,
        line=line,
        computed=computed_text,
        expected=expected_text,
        precision=state.precision,
        mode=state.mode,
        source=source,
        line_no=line_no,
    )
    report.failures.append(record)
    log.warning(record.describe())
    return Outcome.FAILED
