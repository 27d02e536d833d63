"""Ingest utilities shared by CLI commands and workflows.

Input files are read whole before any of their lines are parsed, so a file
that fails to read contributes nothing to the buckets.
"""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from ..errors import InputDirectoryNotFoundError
from ..logging_setup import get_logger
from ..models import Buckets, FileCheck
from ..parsing import ingest_lines

_logger = get_logger("transaction_logs.ingest")


def list_log_files(input_dir: str | PathLike[str], *, extension: str = ".log") -> list[Path]:
    """Return regular files directly under ``input_dir`` ending in ``extension``.

    Results are sorted by name so runs are reproducible. Raises
    :class:`InputDirectoryNotFoundError` when ``input_dir`` is not a directory.
    """

    root = Path(input_dir)
    if not root.is_dir():
        raise InputDirectoryNotFoundError(root)
    return sorted(p for p in root.iterdir() if p.is_file() and p.name.endswith(extension))


def read_log_lines(path: str | PathLike[str]) -> list[str]:
    """Read ``path`` as UTF-8 and return its lines without line terminators."""

    # read_text translates \r\n and \r to \n; str.splitlines would also split
    # on form feeds and Unicode separators, which are line content here.
    lines = Path(path).read_text(encoding="utf-8").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def load_file(path: Path, buckets: Buckets) -> tuple[FileCheck, int]:
    """Read one file into ``buckets``; read errors are logged, not raised.

    Returns the file's :class:`FileCheck` and the number of records created.
    """

    try:
        lines = read_log_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        _logger.error("File reading error %s: %s", path.name, e)
        return FileCheck(path=path, error=str(e)), 0

    accepted, rejected, created = ingest_lines(lines, buckets)
    _logger.debug("Read %s: %d accepted, %d rejected", path.name, accepted, rejected)
    return FileCheck(path=path, accepted=accepted, rejected=rejected), created


def load_buckets(paths: Iterable[Path], buckets: Buckets | None = None) -> tuple[Buckets, list[FileCheck], int]:
    """Read every file in ``paths`` into one shared bucket map.

    Returns ``(buckets, checks, records_created)``. A later file may add
    derived records to a user first seen in an earlier file.
    """

    out: Buckets = {} if buckets is None else buckets
    checks: list[FileCheck] = []
    created_total = 0
    for path in paths:
        check, created = load_file(path, out)
        checks.append(check)
        created_total += created
    return out, checks, created_total


__all__ = ["list_log_files", "load_buckets", "load_file", "read_log_lines"]
