from __future__ import annotations

import logging
import re
from datetime import datetime

import pytest

from transaction_logs import parsing
from transaction_logs.errors import (
    InvalidAmountError,
    InvalidDateError,
    InvalidLineError,
    LineParseError,
    UnknownOperationError,
)
from transaction_logs.formatting import format_record
from transaction_logs.models import OperationType
from transaction_logs.parsing import ingest_line, ingest_lines, parse_line


# ---- parse_line ----------------------------------------------------------------


def test_transfer_produces_sender_and_recipient_records():
    parsed = parse_line("[2025-05-10 10:03:23] user002 transferred 990.00 to user001")

    sent = parsed.primary
    assert sent.user == "user002"
    assert sent.kind is OperationType.TRANSFERRED
    assert sent.amount == 990.00
    assert sent.related_user == "user001"

    got = parsed.derived
    assert got is not None
    assert got.kind is OperationType.RECEIVED
    assert got.amount == 990.00
    assert got.related_user == "user002"
    assert got.timestamp == sent.timestamp == datetime(2025, 5, 10, 10, 3, 23)


def test_derived_receipt_is_owned_by_recipient_not_sender():
    # Regression guard: the receipt lives in the recipient's history, so the
    # recipient must be its owner.
    parsed = parse_line("[2025-05-10 10:03:23] alice transferred 5.00 to bob")
    assert parsed.derived is not None
    assert parsed.derived.user == "bob"
    assert parsed.derived.user != parsed.primary.user


def test_balance_inquiry_has_no_related_user():
    parsed = parse_line("[2025-05-10 09:00:22] user001 balance inquiry 1000.00")
    assert parsed.primary.kind is OperationType.BALANCE_INQUIRY
    assert parsed.primary.amount == 1000.00
    assert parsed.primary.related_user is None
    assert parsed.derived is None


@pytest.mark.parametrize(
    ("line", "kind"),
    [
        ("[2025-05-10 23:55:32] user002 withdrew 50.00", OperationType.WITHDREW),
        ("[2025-05-10 12:00:00] user002 received 7", OperationType.RECEIVED),
        ("[2025-05-10 12:00:00] user002 transferred 7.5", OperationType.TRANSFERRED),
    ],
)
def test_non_transfer_shapes_produce_single_record(line: str, kind: OperationType):
    parsed = parse_line(line)
    assert parsed.primary.kind is kind
    assert parsed.derived is None
    assert list(parsed.records()) == [parsed.primary]


def test_integer_and_fractional_amounts():
    assert parse_line("[2025-05-10 12:00:00] u withdrew 42").primary.amount == 42.0
    assert parse_line("[2025-05-10 12:00:00] u withdrew 0.125").primary.amount == 0.125


def test_trailing_newline_is_ignored():
    parsed = parse_line("[2025-05-10 12:00:00] u withdrew 1.00\r\n")
    assert parsed.primary.amount == 1.0


@pytest.mark.parametrize(
    ("line", "kind", "canonical"),
    [
        (
            "[2025-05-10 12:00:00] user001 withdrew 5.00 to user002",
            OperationType.WITHDREW,
            "[2025-05-10 12:00:00] user001 withdrew 5.00",
        ),
        (
            "[2025-05-10 12:00:00] user001 balance inquiry 5.00 to user002",
            OperationType.BALANCE_INQUIRY,
            "[2025-05-10 12:00:00] user001 balance inquiry 5.00",
        ),
        (
            "[2025-05-10 12:00:00] user001 received 5.00 to user002",
            OperationType.RECEIVED,
            "[2025-05-10 12:00:00] user001 received 5.00",
        ),
    ],
)
def test_stray_recipient_clause_is_dropped_on_non_transfers(
    line: str, kind: OperationType, canonical: str
):
    parsed = parse_line(line)
    assert parsed.primary.kind is kind
    assert parsed.primary.user == "user001"
    assert parsed.primary.related_user is None
    assert parsed.derived is None
    assert format_record(parsed.primary) == canonical


@pytest.mark.parametrize(
    "line",
    [
        "Invalid log line",
        "",
        "[2025-05-10 12:00:00] user001 deposited 5.00",
        "[2025-05-10 12:00:00] user001 withdrew -5.00",
        "[2025-05-10 12:00:00] user001 withdrew 5.",
        "[2025-05-10 12:00:00] user-001 withdrew 5.00",
        "[2025-05-10 12:00:00] user001 withdrew 5.00 extra",
        "2025-05-10 12:00:00 user001 withdrew 5.00",
    ],
)
def test_shape_mismatch_is_invalid_line(line: str):
    with pytest.raises(InvalidLineError) as ei:
        parse_line(line)
    assert ei.value.reason == "invalid line"


@pytest.mark.parametrize(
    "stamp",
    [
        "2025-05-32 10:00:00",
        "2025-02-30 10:00:00",
        "2025-05-10 24:00:00",
        "2025-5-10 10:00:00",
        "2025-05-10T10:00:00",
        "yesterday",
        "",
    ],
)
def test_bad_timestamp_is_invalid_date(stamp: str):
    with pytest.raises(InvalidDateError) as ei:
        parse_line(f"[{stamp}] user001 withdrew 5.00")
    assert ei.value.raw == stamp


def test_non_finite_amount_is_invalid_amount():
    huge = "9" * 400
    with pytest.raises(InvalidAmountError):
        parse_line(f"[2025-05-10 12:00:00] user001 withdrew {huge}")


def test_phrase_outside_operation_set_is_unknown_operation(monkeypatch: pytest.MonkeyPatch):
    # Widen the grammar so a phrase outside OperationType reaches the last check.
    wider = re.compile(
        parsing._LINE_RE.pattern.replace("|withdrew)", "|withdrew|deposited)"),
        re.ASCII,
    )
    monkeypatch.setattr(parsing, "_LINE_RE", wider)
    line = "[2025-05-10 12:00:00] user001 deposited 5.00"

    with pytest.raises(UnknownOperationError) as ei:
        parse_line(line)
    assert ei.value.reason == "unknown operation"
    assert ei.value.raw == "deposited"

    buckets: dict = {}
    assert ingest_line(line, buckets) is None
    assert buckets == {}


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_line("nope")
    assert issubclass(InvalidDateError, LineParseError)


@pytest.mark.parametrize(
    "line",
    [
        "[2025-05-10 09:00:22] user001 balance inquiry 1000.00",
        "[2025-05-10 10:03:23] user002 transferred 990.00 to user001",
        "[2025-05-10 23:55:32] user002 withdrew 50.00",
        "[2025-05-10 08:00:00] user003 received 12.34",
        "[2025-05-10 08:00:00] user003 transferred 12.34",
    ],
)
def test_canonical_lines_round_trip_through_formatter(line: str):
    assert format_record(parse_line(line).primary) == line


# ---- ingest_line / ingest_lines ------------------------------------------------


def test_ingest_transfer_files_records_into_both_buckets():
    buckets: dict = {}
    ingest_line("[2025-05-10 10:03:23] user002 transferred 990.00 to user001", buckets)

    assert set(buckets) == {"user001", "user002"}
    (sent,) = buckets["user002"]
    (got,) = buckets["user001"]
    assert sent.kind is OperationType.TRANSFERRED and sent.related_user == "user001"
    assert got.kind is OperationType.RECEIVED and got.related_user == "user002"
    assert got.user == "user001"


def test_ingest_non_transfer_touches_only_own_bucket():
    buckets: dict = {"user009": []}
    ingest_line("[2025-05-10 23:55:32] user002 withdrew 50.00", buckets)
    assert set(buckets) == {"user002", "user009"}
    assert buckets["user009"] == []
    assert len(buckets["user002"]) == 1


def test_ingest_invalid_line_logs_and_leaves_buckets_untouched(caplog: pytest.LogCaptureFixture):
    buckets: dict = {}
    with caplog.at_level(logging.WARNING, logger="transaction_logs"):
        assert ingest_line("Invalid log line", buckets) is None
        assert ingest_line("[2025-05-32 10:00:00] user001 withdrew 5.00", buckets) is None

    assert buckets == {}
    messages = [r.getMessage() for r in caplog.records]
    assert any("invalid line" in m and "Invalid log line" in m for m in messages)
    assert any("invalid date format" in m and "2025-05-32 10:00:00" in m for m in messages)


def test_ingest_lines_counts_accepted_rejected_and_created():
    buckets: dict = {}
    accepted, rejected, created = ingest_lines(
        [
            "[2025-05-10 09:00:22] user001 balance inquiry 1000.00",
            "[2025-05-10 10:03:23] user002 transferred 990.00 to user001",
            "garbage",
            "[2025-05-10 23:55:32] user002 withdrew 50.00",
        ],
        buckets,
    )
    assert (accepted, rejected, created) == (3, 1, 4)
    assert [r.kind for r in buckets["user001"]] == [
        OperationType.BALANCE_INQUIRY,
        OperationType.RECEIVED,
    ]
