"""Render transaction records back into canonical log lines.

Output grammar per kind (timestamp ``YYYY-MM-DD HH:MM:SS``, amount with exactly
two decimals and an ASCII dot)::

    [<ts>] <user> balance inquiry <amount>
    [<ts>] <user> transferred <amount> to <related_user>
    [<ts>] <user> received <amount> from <related_user>
    [<ts>] <user> withdrew <amount>
"""

from __future__ import annotations

from datetime import datetime

from .models import OperationType, TransactionRecord

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(TIMESTAMP_FORMAT)


def format_amount(amount: float) -> str:
    # Format spec is locale-independent; always an ASCII dot.
    return f"{amount:.2f}"


def format_record(record: TransactionRecord) -> str:
    """Return the canonical log line for ``record``.

    A ``TRANSFERRED``/``RECEIVED`` record without ``related_user`` renders
    without its ``to``/``from`` suffix. Unknown kinds render as ``""``.
    """

    base = f"[{format_timestamp(record.timestamp)}] {record.user} "
    amount = format_amount(record.amount)

    match record.kind:
        case OperationType.BALANCE_INQUIRY:
            return f"{base}balance inquiry {amount}"
        case OperationType.TRANSFERRED:
            suffix = f" to {record.related_user}" if record.related_user else ""
            return f"{base}transferred {amount}{suffix}"
        case OperationType.RECEIVED:
            suffix = f" from {record.related_user}" if record.related_user else ""
            return f"{base}received {amount}{suffix}"
        case OperationType.WITHDREW:
            return f"{base}withdrew {amount}"
        case _:
            return ""


def format_final_balance(user: str, balance: float, now: datetime) -> str:
    """Return the trailing ``final balance`` line of a user report."""

    return f"[{format_timestamp(now)}] {user} final balance {format_amount(balance)}"


__all__ = [
    "TIMESTAMP_FORMAT",
    "format_amount",
    "format_final_balance",
    "format_record",
    "format_timestamp",
]
