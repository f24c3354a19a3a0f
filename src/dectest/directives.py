"""
Directive interpreter.

Each pre-lowercased, trimmed script line is classified by prefix, in this
order, and routed:

    ""                         ignored
    "--"                       comment
    version/extended/
    maxexponent/minexponent    ignored, they do not apply to this harness
    precision                  updates SessionState.precision
    rounding                   updates SessionState.mode and .skip
    anything else              a test case
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Optional

from .dialects import Dialect
from .engine import Engine
from .evaluator import evaluate_test
from .types import DirectiveError, RoundingMode, RunReport, SessionState

log = logging.getLogger(__name__)

COMMENT_PREFIX = "--"
IGNORED_PREFIXES = ("version", "extended", "maxexponent", "minexponent")
PRECISION_PREFIX = "precision"
ROUNDING_PREFIX = "rounding"


class LineKind(Enum):
    BLANK = auto()
    COMMENT = auto()
    IGNORED = auto()
    PRECISION = auto()
    ROUNDING = auto()
    TEST = auto()


def classify_line(line: str) -> LineKind:
    if line == "":
        return LineKind.BLANK
    if line.startswith(COMMENT_PREFIX):
        return LineKind.COMMENT
    if line.startswith(IGNORED_PREFIXES):
        return LineKind.IGNORED
    if line.startswith(PRECISION_PREFIX):
        return LineKind.PRECISION
    if line.startswith(ROUNDING_PREFIX):
        return LineKind.ROUNDING

    return LineKind.TEST


def _directive_value(line: str, prefix: str) -> str:
    body = line[len(prefix):] if line.startswith(prefix) else line
    return body.strip()


def apply_precision(line: str, state: SessionState) -> int:
    value = _directive_value(line, PRECISION_PREFIX + ":")
    fields = value.split()

    if not fields or not fields[0].isdigit():
        raise DirectiveError(f"parsing precision: {value!r}")

    # isdigit() also admits non-ASCII digits int() may reject
    try:
        precision = int(fields[0])
    except ValueError:
        raise DirectiveError(f"parsing precision: {value!r}") from None

    state.precision = precision
    log.debug("setting precision: %s", value)
    return precision


def apply_rounding(line: str, state: SessionState, dialect: Dialect) -> RoundingMode:
    token = _directive_value(line, ROUNDING_PREFIX + ":")
    mode = dialect.rounding_for(token)

    if mode is None:
        raise DirectiveError(f"invalid rounding mode: {token}")

    state.mode = mode
    state.skip = mode is RoundingMode.UNSUPPORTED
    log.debug("setting rounding mode: %s", token)
    return mode


def process_line(
    line: str,
    state: SessionState,
    report: RunReport,
    dialect: Dialect,
    engine: Engine,
    source: Optional[str] = None,
    line_no: int = 0,
) -> LineKind:
    kind = classify_line(line)

    match kind:
        case LineKind.PRECISION:
            apply_precision(line, state)
        case LineKind.ROUNDING:
            apply_rounding(line, state, dialect)
        case LineKind.TEST:
            evaluate_test(line, state, report, dialect, engine, source=source, line_no=line_no)
        case _:
            pass

    return kind
