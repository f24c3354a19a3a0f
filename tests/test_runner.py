from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from dectest.report import format_summary, render_report
from dectest.runner import Harness, main, main_fixed, normalize_line, run_files, run_lines
from tests.support.harness import FIXED, InputError, RunCounters, UnknownOperatorError


def _write(tmp_path: Path, name: str, body: str) -> Path:
    path = tmp_path / name
    path.write_text(dedent(body), encoding="utf-8")
    return path


BASIC = """\
-- basic addition
version: 2.59
extended: 1
precision: 9
rounding: half_even
maxexponent: 999999
minexponent: -999999

ADDX001 ADD '1' '2' -> '3'
addx002 add '1' '2' -> '4'
rounding: floor
addx003 add '1' '2' -> '3'
"""


def test_normalize_line() -> None:
    assert normalize_line("  ADDX001 Add '1E+2' '1' -> '101'\r\n") == "addx001 add '1e+2' '1' -> '101'"


def test_run_file(tmp_path: Path) -> None:
    report = run_files([_write(tmp_path, "basic.dectest", BASIC)])

    assert report.counters.as_tuple() == (3, 1, 1, 1)
    [record] = report.failures
    assert record.source.endswith("basic.dectest")
    assert record.line_no == 10


def test_files_share_session_state(tmp_path: Path) -> None:
    first = _write(
        tmp_path,
        "a.dectest",
        """\
        precision: 3
        rounding: half_up
        """,
    )
    second = _write(tmp_path, "b.dectest", "addx001 add '1.005' '0' -> '1.01'\n")

    harness = Harness()
    harness.run_files([first, second])

    assert harness.state.precision == 3
    assert harness.counters.as_tuple() == (1, 1, 0, 0)


def test_rerun_is_idempotent(tmp_path: Path) -> None:
    path = _write(tmp_path, "basic.dectest", BASIC)

    first = run_files([path]).counters
    second = run_files([path]).counters

    assert first == second


def test_unreadable_file_is_fatal(tmp_path: Path) -> None:
    missing = tmp_path / "missing.dectest"

    with pytest.raises(InputError) as exc_info:
        run_files([missing])
    assert exc_info.value.source == str(missing)


def test_undecodable_file_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "binary.dectest"
    path.write_bytes(b"precision: 9\n\xff\xfe\xfa\n")

    with pytest.raises(InputError):
        run_files([path])


def test_run_lines_fixed_dialect() -> None:
    report = run_lines(["precision: 9", "rounding: half_even", "t add '1' '2' -> '3'"], dialect=FIXED)

    assert report.counters.as_tuple() == (1, 1, 0, 0)

    with pytest.raises(UnknownOperatorError):
        run_lines(["t frobnicate '1' '2' -> '3'"], dialect=FIXED)


def test_format_summary() -> None:
    counters = RunCounters(total=10, succeeded=6, failed=1, skipped=3)

    assert format_summary(counters) == "10 tests. 6 successful, 1 failed, 3 skipped"


def test_render_report_verbose_lists_failures(tmp_path: Path) -> None:
    report = run_files([_write(tmp_path, "basic.dectest", BASIC)])

    quiet = render_report(report)
    loud = render_report(report, verbose=True).splitlines()

    assert quiet == "3 tests. 1 successful, 1 failed, 1 skipped"
    assert loud[-1] == quiet
    assert loud[0].endswith("basic.dectest:10: addx002: 3 != 4")


# ---------- CLI ----------

def test_cli_prints_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "basic.dectest", BASIC)

    assert main([str(path)]) == 0
    assert capsys.readouterr().out.strip() == "3 tests. 1 successful, 1 failed, 1 skipped"


def test_cli_accepts_many_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    setup = _write(tmp_path, "setup.dectest", "precision: 9\nrounding: half_even\n")
    tests = _write(tmp_path, "tests.dectest", "t1 squareroot '4' -> '2'\nt2 add '1' '2' -> '?'\n")

    assert main([str(setup), str(tests)]) == 0
    assert capsys.readouterr().out.strip() == "2 tests. 1 successful, 0 failed, 1 skipped"


def test_cli_fixed_dialect(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(
        tmp_path,
        "fixed.dectest",
        """\
        precision: 3
        rounding: down
        divx001 divide '2' '3' -> '0.666'
        """,
    )

    assert main_fixed(["-f", str(path)]) == 0
    assert capsys.readouterr().out.strip() == "1 tests. 1 successful, 0 failed, 0 skipped"


def test_cli_fixed_requires_file() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main_fixed([])
    assert exc_info.value.code == 2


def test_cli_fatal_error_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "bad.dectest", "precision: lots\n")

    with pytest.raises(SystemExit) as exc_info:
        main([str(path)])

    code = exc_info.value.code
    assert isinstance(code, str) and code.startswith("fatal: ")
    assert "bad.dectest:1" in code
    assert capsys.readouterr().out == ""


def test_cli_missing_file_exits_nonzero(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([str(tmp_path / "nope.dectest")])
    assert str(exc_info.value.code).startswith("fatal: ")


def test_cli_debug_trace_reraises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DECTEST_DEBUG_PY_TRACE", "1")

    with pytest.raises(InputError):
        main([str(tmp_path / "nope.dectest")])


def test_cli_verbose_logs_directives(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write(tmp_path, "basic.dectest", BASIC)

    main(["-v", str(path)])
    err = capsys.readouterr().err

    assert "setting precision: 9" in err
    assert "setting rounding mode: half_even" in err
    assert "failed test: addx002" in err
