"""Exception types raised by ``transaction_logs``.

Line-level failures derive from :class:`LineParseError` (a ``ValueError``) and
are recoverable: the ingest helpers log and skip the offending line. A missing
input directory is the only fatal condition of a run.
"""

from __future__ import annotations

from os import PathLike


class TransactionLogsError(Exception):
    """Base class for all package errors."""


class LineParseError(TransactionLogsError, ValueError):
    """A raw log line could not be turned into a transaction record.

    Attributes
    ----------
    reason:
        Short, stable diagnostic label (e.g. ``"invalid line"``).
    raw:
        The offending fragment (whole line, timestamp text, amount text or
        operation text depending on the failing step).
    """

    reason: str = "unparseable line"

    def __init__(self, raw: str) -> None:
        super().__init__(f"{self.reason}: {raw}")
        self.raw = raw


class InvalidLineError(LineParseError):
    reason = "invalid line"


class InvalidDateError(LineParseError):
    reason = "invalid date format"


class InvalidAmountError(LineParseError):
    reason = "invalid amount"


class UnknownOperationError(LineParseError):
    reason = "unknown operation"


class InputDirectoryNotFoundError(TransactionLogsError, FileNotFoundError):
    """The input root directory does not exist (fatal for a run)."""

    def __init__(self, path: str | PathLike[str]) -> None:
        super().__init__(f"input directory not found: {path}")
        self.path = path


class UnsafeOutputDirectoryError(TransactionLogsError, ValueError):
    """The output directory would contain the input directory once wiped."""

    def __init__(self, output_dir: str | PathLike[str], input_dir: str | PathLike[str]) -> None:
        super().__init__(
            f"refusing to clear output directory {output_dir}: it contains input directory {input_dir}"
        )
        self.output_dir = output_dir
        self.input_dir = input_dir


__all__ = [
    "InputDirectoryNotFoundError",
    "UnsafeOutputDirectoryError",
    "InvalidAmountError",
    "InvalidDateError",
    "InvalidLineError",
    "LineParseError",
    "TransactionLogsError",
    "UnknownOperationError",
]
