"""Run summary."""

from __future__ import annotations

from typing import List

from .types import RunCounters, RunReport

def format_summary(counters: RunCounters) -> str:
    return (
        f"{counters.total} tests. {counters.succeeded} successful, "
        f"{counters.failed} failed, {counters.skipped} skipped"
    )

def render_report(report: RunReport, verbose: bool = False) -> str:
    """Summary line; verbose runs recap each failure above it."""
    out: List[str] = []

    if verbose:
        for record in report.failures:
            where = f"{record.source or '<input>'}:{record.line_no}"
            out.append(f"{where}: {record.name}: {record.computed} != {record.expected}")

    out.append(format_summary(report.counters))
    return "\n".join(out)
