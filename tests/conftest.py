"""Pytest configuration for test isolation.

The CLI reads settings from the environment (and from a ``.env`` in the
working directory) and configures the package logger once per process. Both
would leak between tests: a developer's ``.env`` could point the report at a
real export, and a configured logger stops propagating records to pytest's
``caplog``. Each test therefore runs in its own working directory with the
relevant variables cleared and the logging configuration restored afterwards.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from receipt_report import logging_setup

_ENV_VARS = (
    "RECEIPT_REPORT_CSV_URL",
    "RECEIPT_REPORT_CURRENCY",
    "RECEIPT_REPORT_LOG_LEVEL",
    "SHEETS_WEBHOOK_URL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    # Snapshot and restore by hand: the CLI's load_dotenv() writes to
    # os.environ directly, outside monkeypatch's bookkeeping.
    saved = {name: os.environ.pop(name, None) for name in _ENV_VARS}
    monkeypatch.chdir(tmp_path)
    yield
    for name, value in saved.items():
        if value is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = value


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    pkg = logging.getLogger("receipt_report")
    saved_handlers = list(pkg.handlers)
    saved_level = pkg.level
    saved_propagate = pkg.propagate
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    pkg.handlers[:] = saved_handlers
    pkg.setLevel(saved_level)
    pkg.propagate = saved_propagate
