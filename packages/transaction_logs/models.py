"""Data models and type aliases for ``transaction_logs``.

Records are immutable values built once with every field set. A transfer line
yields two of them: the sender's ``TRANSFERRED`` record and a derived
``RECEIVED`` record owned by the recipient.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import NamedTuple, TypeAlias

# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class OperationType(Enum):
    """Closed set of ledger operations, valued by their log-line phrase."""

    BALANCE_INQUIRY = "balance inquiry"
    TRANSFERRED = "transferred"
    RECEIVED = "received"
    WITHDREW = "withdrew"

    @property
    def phrase(self) -> str:
        return self.value

    @classmethod
    def from_phrase(cls, phrase: str) -> OperationType | None:
        """Return the member for ``phrase`` or ``None`` when unknown."""

        try:
            return cls(phrase)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Core record and collections
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One observed or derived financial event.

    Attributes
    ----------
    timestamp:
        Event time at second precision, without timezone.
    user:
        Owning account; also the key of the bucket the record is filed into.
    kind:
        The :class:`OperationType` of the event.
    amount:
        Non-negative magnitude of the event.
    related_user:
        Transfer recipient for ``TRANSFERRED`` records and counterparty for
        ``RECEIVED`` records; ``None`` otherwise.
    """

    timestamp: datetime
    user: str
    kind: OperationType
    amount: float
    related_user: str | None = None

    def __post_init__(self) -> None:
        if not self.user:
            raise ValueError("TransactionRecord.user must be a non-empty string")
        if self.amount < 0:
            raise ValueError("TransactionRecord.amount must be non-negative")


class ParsedLine(NamedTuple):
    """Records produced by one well-formed log line."""

    primary: TransactionRecord
    """The record described by the line itself, owned by the line's user."""

    derived: TransactionRecord | None = None
    """Mirrored ``RECEIVED`` record for a transfer with a recipient."""

    def records(self) -> Iterator[TransactionRecord]:
        yield self.primary
        if self.derived is not None:
            yield self.derived


Buckets: TypeAlias = dict[str, list[TransactionRecord]]
"""Per-user record lists keyed by ``TransactionRecord.user``."""

LedgerView: TypeAlias = Mapping[str, Sequence[TransactionRecord]]
"""Read-only view over buckets, as consumed by the aggregator."""


# ---------------------------------------------------------------------------
# Reports and run summaries
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UserReport:
    """A user's chronologically ordered history and computed balances."""

    user: str
    records: tuple[TransactionRecord, ...]
    initial_balance: float
    final_balance: float
    generated_at: datetime

    def lines(self) -> list[str]:
        """Render the report file content, one string per output line."""

        from .formatting import format_final_balance, format_record

        out = [format_record(r) for r in self.records]
        out.append(format_final_balance(self.user, self.final_balance, self.generated_at))
        return out


@dataclass(frozen=True, slots=True)
class FileCheck:
    """Outcome of reading a single input file."""

    path: Path
    accepted: int = 0
    rejected: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.rejected == 0


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Counters and artifacts of one consolidation run."""

    files_read: int
    files_skipped: int
    lines_accepted: int
    lines_rejected: int
    records_created: int
    reports: tuple[Path, ...] = ()
    failed_users: tuple[str, ...] = ()

    @property
    def users_reported(self) -> int:
        return len(self.reports)

    @property
    def ok(self) -> bool:
        return not self.failed_users


__all__ = [
    "Buckets",
    "FileCheck",
    "LedgerView",
    "OperationType",
    "ParsedLine",
    "RunSummary",
    "TransactionRecord",
    "UserReport",
]
