from __future__ import annotations

import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Iterator, List

import pytest

ROOT = Path(__file__).resolve().parent.parent

for path in (ROOT, ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.append(str(path))


def pytest_collection_modifyitems(items: List[pytest.Item]) -> None:
    """Scenario tables are keyed by id; two scenarios sharing one is a typo."""
    counts = Counter(item.nodeid for item in items)
    clashes = sorted(nodeid for nodeid, n in counts.items() if n > 1)

    if clashes:
        raise pytest.UsageError("duplicate test ids: " + ", ".join(clashes))


@pytest.fixture(autouse=True)
def _clean_dectest_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DECTEST_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DECTEST_DEBUG_PY_TRACE", raising=False)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """CLI tests call configure_logging(), which replaces the root handlers."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield

    root.handlers = handlers
    root.setLevel(level)
