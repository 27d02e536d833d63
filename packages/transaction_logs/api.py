"""Public API surface for the ``transaction_logs`` package.

The implementations live in the parsing, ledger, formatting and workflow
modules; this module re-exports them as one stable import location.
"""

from __future__ import annotations

from .formatting import format_final_balance, format_record  # noqa: F401  (re-export)
from .ledger import aggregate, compute_balance  # noqa: F401  (re-export)
from .parsing import ingest_line, parse_line  # noqa: F401  (re-export)
from .workflows.consolidate import consolidate_logs, validate_logs  # noqa: F401  (re-export)

__all__ = [
    "aggregate",
    "compute_balance",
    "consolidate_logs",
    "format_final_balance",
    "format_record",
    "ingest_line",
    "parse_line",
    "validate_logs",
]
