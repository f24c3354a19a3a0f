from __future__ import annotations

import os

DEBUG_PY_TRACE_ENV = "DECTEST_DEBUG_PY_TRACE"

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def debug_py_trace_enabled() -> bool:
    """Show Python tracebacks for fatal errors instead of a one-line message."""
    return env_flag(DEBUG_PY_TRACE_ENV)
