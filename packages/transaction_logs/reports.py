"""Report output: output-directory reset and per-user report files.

Each run starts by deleting the output directory recursively and recreating
it empty. Prior reports are never merged with new ones.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from .logging_setup import get_logger
from .models import UserReport

_logger = get_logger("transaction_logs.reports")


def reset_output_dir(output_dir: str | PathLike[str]) -> Path:
    """Delete ``output_dir`` (recursively) if present, then recreate it."""

    out = Path(output_dir)
    if out.exists():
        _logger.info("Clearing output directory %s", out)
        if out.is_dir() and not out.is_symlink():
            shutil.rmtree(out)
        else:
            out.unlink()
    out.mkdir(parents=True, exist_ok=True)
    return out


def report_path(output_dir: str | PathLike[str], user: str, *, extension: str = ".log") -> Path:
    return Path(output_dir) / f"{user}{extension}"


def write_lines(path: Path, lines: Iterable[str]) -> None:
    """Write ``lines`` to ``path``, each terminated by ``\\n``."""

    with path.open("w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(line)
            f.write("\n")


def write_report(
    report: UserReport, output_dir: str | PathLike[str], *, extension: str = ".log"
) -> Path:
    """Write one user's report file and return its path.

    ``OSError`` propagates; callers decide whether a failed user aborts the run.
    """

    path = report_path(output_dir, report.user, extension=extension)
    write_lines(path, report.lines())
    return path


__all__ = ["report_path", "reset_output_dir", "write_lines", "write_report"]
