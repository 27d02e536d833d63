"""Workflow orchestrators for end-to-end consolidation runs.

``consolidate_logs`` is a two-pass run: every input file is read into the
shared bucket map first, because a transfer in a later file adds a derived
record to a user who may have been seen earlier. Only then are reports built
and written.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from os import PathLike
from pathlib import Path

from ..errors import InputDirectoryNotFoundError, UnsafeOutputDirectoryError
from ..ingest.utils import list_log_files, load_buckets
from ..ledger import aggregate
from ..logging_setup import get_logger
from ..models import FileCheck, RunSummary
from ..reports import reset_output_dir, write_report

_logger = get_logger("transaction_logs.workflows.consolidate")


def _check_dirs(input_dir: Path, output_dir: Path) -> None:
    if not input_dir.is_dir():
        raise InputDirectoryNotFoundError(input_dir)
    src = input_dir.resolve()
    dst = output_dir.resolve()
    if src == dst or dst in src.parents:
        raise UnsafeOutputDirectoryError(output_dir, input_dir)


def consolidate_logs(
    input_dir: str | PathLike[str],
    output_dir: str | PathLike[str],
    *,
    extension: str = ".log",
    now: datetime | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> RunSummary:
    """End-to-end: input files → per-user buckets → reports on disk.

    Parameters
    ----------
    input_dir:
        Directory holding the daily log files. Must exist.
    output_dir:
        Directory receiving one ``<user><extension>`` file per user. It is
        deleted and recreated before anything is written.
    extension:
        Suffix selecting input files and naming report files.
    now:
        Timestamp for every final-balance line; defaults to wall-clock time.
    on_progress:
        Optional callable to receive short status lines (e.g., ``print``).

    Raises
    ------
    InputDirectoryNotFoundError
        ``input_dir`` is missing. Nothing has been deleted or written.
    UnsafeOutputDirectoryError
        ``output_dir`` equals or contains ``input_dir``.
    """

    src = Path(input_dir)
    dst = Path(output_dir)
    _check_dirs(src, dst)

    reset_output_dir(dst)

    files = list_log_files(src, extension=extension)
    if on_progress:
        on_progress(f"Found {len(files)} input file(s) in {src}.")

    buckets, checks, created = load_buckets(files)
    skipped = sum(1 for c in checks if c.error is not None)
    accepted = sum(c.accepted for c in checks)
    rejected = sum(c.rejected for c in checks)
    _logger.info(
        "Read %d file(s) (%d skipped): %d line(s) accepted, %d rejected, %d user(s)",
        len(checks) - skipped,
        skipped,
        accepted,
        rejected,
        len(buckets),
    )

    reports = aggregate(buckets, now=now)

    written: list[Path] = []
    failed: list[str] = []
    for user, report in reports.items():
        try:
            written.append(write_report(report, dst, extension=extension))
        except OSError as e:
            _logger.error("Failed to write report for %s: %s", user, e)
            failed.append(user)

    if on_progress:
        on_progress(f"Wrote {len(written)} report(s) to {dst}.")
        if failed:
            on_progress(f"Failed to write {len(failed)} report(s): {', '.join(failed)}")

    return RunSummary(
        files_read=len(checks) - skipped,
        files_skipped=skipped,
        lines_accepted=accepted,
        lines_rejected=rejected,
        records_created=created,
        reports=tuple(written),
        failed_users=tuple(failed),
    )


def validate_logs(input_dir: str | PathLike[str], *, extension: str = ".log") -> list[FileCheck]:
    """Parse every input file without writing anything; one check per file."""

    src = Path(input_dir)
    files = list_log_files(src, extension=extension)
    _buckets, checks, _created = load_buckets(files)
    return checks


__all__ = ["consolidate_logs", "validate_logs"]
