"""Log line → transaction record parsing.

A well-formed line has the shape::

    [YYYY-MM-DD HH:MM:SS] <user> <operation> <amount>[ to <related_user>]

where ``<operation>`` is one of ``balance inquiry``, ``transferred``,
``received`` or ``withdrew``. The ``to`` clause is accepted after any
operation but only ``transferred`` keeps it; elsewhere it is dropped. A
``transferred`` line without it is still accepted.

Validation runs in a fixed order and stops at the first failure: overall
shape, timestamp, amount, operation. Each failure raises a
:class:`~transaction_logs.errors.LineParseError` subclass; ``ingest_line``
turns those into a logged warning and a skipped line.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from datetime import datetime

from .errors import (
    InvalidAmountError,
    InvalidDateError,
    InvalidLineError,
    LineParseError,
    UnknownOperationError,
)
from .formatting import TIMESTAMP_FORMAT
from .logging_setup import get_logger
from .models import Buckets, OperationType, ParsedLine, TransactionRecord

_logger = get_logger("transaction_logs.parsing")

_LINE_RE = re.compile(
    r"^\[(?P<ts>.*?)\]\s+(?P<user>\w+)\s+"
    r"(?P<op>balance inquiry|transferred|received|withdrew)\s+"
    r"(?P<amount>[0-9]+(?:\.[0-9]+)?)"
    r"(?:\s+to\s+(?P<related>\w+))?$",
    re.ASCII,
)

# strptime alone tolerates single-digit fields; require the fixed width first.
_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII)


def _parse_timestamp(raw: str) -> datetime:
    if not _TIMESTAMP_RE.fullmatch(raw):
        raise InvalidDateError(raw)
    try:
        return datetime.strptime(raw, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise InvalidDateError(raw) from exc


def _parse_amount(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise InvalidAmountError(raw) from exc
    if not math.isfinite(value):
        raise InvalidAmountError(raw)
    return value


def parse_line(raw: str) -> ParsedLine:
    """Parse one raw log line into its primary (and derived) records.

    Raises
    ------
    InvalidLineError
        The line does not match the grammar.
    InvalidDateError
        The bracketed timestamp is not a valid ``YYYY-MM-DD HH:MM:SS``.
    InvalidAmountError
        The amount is not a finite number.
    UnknownOperationError
        The operation phrase is outside the closed set.
    """

    line = raw.rstrip("\r\n")
    m = _LINE_RE.fullmatch(line)
    if m is None:
        raise InvalidLineError(line)

    timestamp = _parse_timestamp(m.group("ts"))
    amount = _parse_amount(m.group("amount"))

    op_text = m.group("op")
    kind = OperationType.from_phrase(op_text)
    if kind is None:
        raise UnknownOperationError(op_text)

    user = m.group("user")
    related = m.group("related") if kind is OperationType.TRANSFERRED else None
    primary = TransactionRecord(
        timestamp=timestamp,
        user=user,
        kind=kind,
        amount=amount,
        related_user=related,
    )

    derived: TransactionRecord | None = None
    if kind is OperationType.TRANSFERRED and related:
        # Filed into the recipient's bucket, so the recipient owns it.
        derived = TransactionRecord(
            timestamp=timestamp,
            user=related,
            kind=OperationType.RECEIVED,
            amount=amount,
            related_user=user,
        )

    return ParsedLine(primary=primary, derived=derived)


def ingest_line(raw: str, buckets: Buckets) -> ParsedLine | None:
    """Parse ``raw`` and file its records into ``buckets``.

    Returns the parsed records, or ``None`` when the line was rejected. A
    rejected line is logged and leaves ``buckets`` untouched.
    """

    try:
        parsed = parse_line(raw)
    except LineParseError as exc:
        _logger.warning("Skipping line (%s): %s", exc.reason, exc.raw)
        return None

    for record in parsed.records():
        buckets.setdefault(record.user, []).append(record)
    return parsed


def ingest_lines(lines: Iterable[str], buckets: Buckets) -> tuple[int, int, int]:
    """Fold many lines into ``buckets``.

    Returns ``(accepted_lines, rejected_lines, records_created)``.
    """

    accepted = rejected = created = 0
    for raw in lines:
        parsed = ingest_line(raw, buckets)
        if parsed is None:
            rejected += 1
            continue
        accepted += 1
        created += 1 if parsed.derived is None else 2
    return accepted, rejected, created


__all__ = ["ingest_line", "ingest_lines", "parse_line"]
