"""Public interface for the ``transaction_logs`` package.

This module exposes the package's API functions, models and exceptions as the
stable import surface. There is no runtime logic here, only re-exports.
"""

from .api import (
    aggregate,
    compute_balance,
    consolidate_logs,
    format_final_balance,
    format_record,
    ingest_line,
    parse_line,
    validate_logs,
)
from .errors import (
    InputDirectoryNotFoundError,
    InvalidAmountError,
    InvalidDateError,
    InvalidLineError,
    LineParseError,
    TransactionLogsError,
    UnknownOperationError,
    UnsafeOutputDirectoryError,
)
from .models import (
    Buckets,
    FileCheck,
    OperationType,
    ParsedLine,
    RunSummary,
    TransactionRecord,
    UserReport,
)

__all__ = [
    # API
    "aggregate",
    "compute_balance",
    "consolidate_logs",
    "format_final_balance",
    "format_record",
    "ingest_line",
    "parse_line",
    "validate_logs",
    # Models / types
    "Buckets",
    "FileCheck",
    "OperationType",
    "ParsedLine",
    "RunSummary",
    "TransactionRecord",
    "UserReport",
    # Errors
    "InputDirectoryNotFoundError",
    "InvalidAmountError",
    "InvalidDateError",
    "InvalidLineError",
    "LineParseError",
    "TransactionLogsError",
    "UnknownOperationError",
    "UnsafeOutputDirectoryError",
]
