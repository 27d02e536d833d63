"""Per-user aggregation: ordering, balance folding and report assembly.

Balances use plain ``float`` arithmetic; the only rounding is the two-decimal
display applied by :mod:`transaction_logs.formatting`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from .logging_setup import get_logger
from .models import LedgerView, OperationType, TransactionRecord, UserReport

_logger = get_logger("transaction_logs.ledger")


def sort_records(records: Iterable[TransactionRecord]) -> list[TransactionRecord]:
    """Order records by timestamp; equal timestamps keep their input order."""

    return sorted(records, key=lambda r: r.timestamp)


def initial_balance(records: Iterable[TransactionRecord]) -> float:
    """Amount of the first balance inquiry in ``records``, else ``0.0``."""

    for r in records:
        if r.kind is OperationType.BALANCE_INQUIRY:
            return r.amount
    return 0.0


def apply_record(balance: float, record: TransactionRecord) -> float:
    match record.kind:
        case OperationType.RECEIVED:
            return balance + record.amount
        case OperationType.TRANSFERRED | OperationType.WITHDREW:
            return balance - record.amount
        case _:
            # Balance inquiries report the balance; they do not move it.
            return balance


def compute_balance(records: Sequence[TransactionRecord]) -> float:
    """Fold ``records`` (already ordered) into a final balance.

    The fold starts from :func:`initial_balance` and visits every record,
    including the balance inquiry that seeded it.
    """

    balance = initial_balance(records)
    for r in records:
        balance = apply_record(balance, r)
    return balance


def build_report(
    user: str, records: Iterable[TransactionRecord], *, now: datetime
) -> UserReport:
    ordered = sort_records(records)
    start = initial_balance(ordered)
    final = compute_balance(ordered)
    return UserReport(
        user=user,
        records=tuple(ordered),
        initial_balance=start,
        final_balance=final,
        generated_at=now,
    )


def aggregate(buckets: LedgerView, *, now: datetime | None = None) -> dict[str, UserReport]:
    """Build one :class:`UserReport` per bucket.

    Parameters
    ----------
    buckets:
        Records grouped by owning user.
    now:
        Report generation time stamped on every final-balance line. Defaults
        to the current wall-clock time, taken once for the whole run.
    """

    generated_at = now if now is not None else datetime.now().replace(microsecond=0)
    reports: dict[str, UserReport] = {}
    for user, records in buckets.items():
        report = build_report(user, records, now=generated_at)
        _logger.debug(
            "Aggregated %d record(s) for %s: initial=%.2f final=%.2f",
            len(report.records),
            user,
            report.initial_balance,
            report.final_balance,
        )
        reports[user] = report
    return reports


__all__ = [
    "aggregate",
    "apply_record",
    "build_report",
    "compute_balance",
    "initial_balance",
    "sort_records",
]
