from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .dialects import FIXED, VARIABLE, Dialect
from .directives import LineKind, process_line
from .engine import DecimalEngine, Engine
from .logging_config import configure_logging
from .report import render_report
from .types import DecTestError, InputError, RunCounters, RunReport, SessionState
from .utils import debug_py_trace_enabled

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

def normalize_line(raw: str) -> str:
    return raw.strip().lower()

class Harness:
    """One scoring run: a session and counters shared by every input fed to it."""

    def __init__(self, dialect: Dialect = VARIABLE, engine: Optional[Engine] = None, state: Optional[SessionState] = None):
        self.dialect = dialect
        self.engine: Engine = engine if engine is not None else DecimalEngine()
        self.state = state if state is not None else SessionState()
        self.report = RunReport()

    @property
    def counters(self) -> RunCounters:
        return self.report.counters

    def feed(self, raw_line: str, source: Optional[str] = None, line_no: int = 0) -> LineKind:
        line = normalize_line(raw_line)

        try:
            return process_line(line, self.state, self.report, self.dialect, self.engine, source=source, line_no=line_no)
        except DecTestError as exc:
            raise exc.locate(source, line_no)

    def run_lines(self, lines: Iterable[str], source: Optional[str] = None) -> RunReport:
        for line_no, raw in enumerate(lines, start=1):
            self.feed(raw, source=source, line_no=line_no)

        return self.report

    def run_file(self, path: PathLike) -> RunReport:
        source = str(path)
        log.debug("running %s", source)

        for line_no, raw in _read_lines(Path(path)):
            self.feed(raw, source=source, line_no=line_no)

        return self.report

    def run_files(self, paths: Sequence[PathLike]) -> RunReport:
        for path in paths:
            self.run_file(path)

        return self.report

def _read_lines(path: Path) -> Iterator[Tuple[int, str]]:
    try:
        with path.open(encoding="utf-8") as handle:
            for line_no, raw in enumerate(handle, start=1):
                yield line_no, raw
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"reading input: {exc}", source=str(path)) from exc

def run_lines(lines: Iterable[str], dialect: Dialect = VARIABLE, engine: Optional[Engine] = None) -> RunReport:
    return Harness(dialect, engine).run_lines(lines)

def run_files(paths: Sequence[PathLike], dialect: Dialect = VARIABLE, engine: Optional[Engine] = None) -> RunReport:
    return Harness(dialect, engine).run_files(paths)

# ---------- CLI ----------

def build_arg_parser(dialect: Dialect) -> argparse.ArgumentParser:
    if dialect is FIXED:
        parser = argparse.ArgumentParser(
            prog="dectest-fixed",
            description="Score a decimal engine against a fixed-arity test-vector file.",
        )
        parser.add_argument("-f", dest="file", required=True, help="Test file to run")
    else:
        parser = argparse.ArgumentParser(
            prog="dectest",
            description="Score a decimal engine against one or more test-vector files.",
        )
        parser.add_argument("files", nargs="+", help="Test files to run, in order")

    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose mode")
    return parser

def _run_cli(argv: Optional[Sequence[str]], dialect: Dialect) -> int:
    args = build_arg_parser(dialect).parse_args(argv)
    configure_logging(args.verbose)

    paths: List[str] = [args.file] if dialect is FIXED else list(args.files)
    harness = Harness(dialect)

    try:
        harness.run_files(paths)
    except DecTestError as exc:
        if debug_py_trace_enabled():
            raise
        raise SystemExit(f"fatal: {exc}") from None

    print(render_report(harness.report, verbose=args.verbose))
    return 0

def main(argv: Optional[Sequence[str]] = None) -> int:
    return _run_cli(argv, VARIABLE)

def main_fixed(argv: Optional[Sequence[str]] = None) -> int:
    return _run_cli(argv, FIXED)

if __name__ == "__main__":
    raise SystemExit(main())
