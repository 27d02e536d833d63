"""Pytest configuration for test isolation.

Settings resolve from ``TRANSACTION_LOGS_*`` environment variables and the
CLI configures the package logger once per process. Both would leak between
tests, so an autouse fixture clears the variables and resets logging around
every test.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `transaction_logs` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from transaction_logs.logging_setup import reset_logging  # noqa: E402

_ENV_VARS = (
    "TRANSACTION_LOGS_INPUT_DIR",
    "TRANSACTION_LOGS_OUTPUT_DIR",
    "TRANSACTION_LOGS_EXTENSION",
    "TRANSACTION_LOGS_LOG_LEVEL",
)

DATA_DIR = _ROOT / "tests" / "data"


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV_VARS:
        # setenv first so teardown also removes values a test's .env loaded.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def logs_dir(tmp_path: Path) -> Path:
    """A ``logs/`` directory populated with the sample daily files."""

    target = tmp_path / "logs"
    target.mkdir()
    for src in sorted(DATA_DIR.iterdir()):
        if src.is_file():
            (target / src.name).write_bytes(src.read_bytes())
    return target
