# ruff: noqa: I001
"""CLI for the ``transaction_logs`` package.

This module exposes callable command handlers (``cmd_consolidate``,
``cmd_validate``) and a Typer-based console interface. Environment variables
(``TRANSACTION_LOGS_*``) are loaded from a local ``.env`` using
``python-dotenv`` before delegating to command logic. Business logic lives in
``transaction_logs.workflows`` and related modules.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from typer.models import OptionInfo

from .config import Settings, load_settings
from .errors import InputDirectoryNotFoundError, UnsafeOutputDirectoryError
from .logging_setup import configure_logging


def cmd_consolidate(settings: Settings) -> int:
    """Rebuild the per-user report directory from the input log files.

    Prints the working, input and output directories, runs
    :func:`transaction_logs.workflows.consolidate_logs`, and prints a short
    summary. Returns ``0`` on success and ``1`` when the input directory is
    missing, the output directory is unsafe to clear, or any report failed to
    write.
    """

    from .workflows.consolidate import consolidate_logs

    print(f"Current working directory: {Path.cwd()}")
    print(f"Input directory: {settings.input_dir.absolute()}")
    print(f"Output directory: {settings.output_dir.absolute()}")

    try:
        summary = consolidate_logs(
            settings.input_dir,
            settings.output_dir,
            extension=settings.extension,
            on_progress=print,
        )
    except InputDirectoryNotFoundError:
        print(f"Error: Directory '{settings.input_dir}' not found!", file=sys.stderr)
        return 1
    except UnsafeOutputDirectoryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: failed to prepare output directory: {e}", file=sys.stderr)
        return 1

    print(
        f"Files: {summary.files_read} read, {summary.files_skipped} skipped. "
        f"Lines: {summary.lines_accepted} accepted, {summary.lines_rejected} rejected. "
        f"Users: {summary.users_reported}."
    )
    if not summary.ok:
        print(
            "Error: failed to write report(s) for: " + ", ".join(summary.failed_users),
            file=sys.stderr,
        )
        return 1
    return 0


def cmd_validate(settings: Settings) -> int:
    """Parse every input file and report per-file line counts (no writes).

    Output is one ``"<file>\\t<accepted>\\t<rejected>"`` line per file, or
    ``"<file>\\tERROR\\t<message>"`` for unreadable files. Returns ``1`` when any
    file or line was rejected.
    """

    from .workflows.consolidate import validate_logs

    try:
        checks = validate_logs(settings.input_dir, extension=settings.extension)
    except InputDirectoryNotFoundError:
        print(f"Error: Directory '{settings.input_dir}' not found!", file=sys.stderr)
        return 1

    for c in checks:
        if c.error is not None:
            print(f"{c.path.name}\tERROR\t{c.error}")
        else:
            print(f"{c.path.name}\t{c.accepted}\t{c.rejected}")
    return 0 if all(c.ok for c in checks) else 1


def _settings_or_exit(
    *,
    input_dir: Path | None = None,
    output_dir: Path | None = None,
    extension: str | None = None,
) -> Settings:
    try:
        return load_settings(input_dir=input_dir, output_dir=output_dir, extension=extension)
    except ValidationError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        raise typer.Exit(1) from e


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Consolidate daily transaction logs into one report per user with a "
        "computed final balance. Loads TRANSACTION_LOGS_* settings from a local .env."
    ),
)


# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults). Typer inspects these when used as default values below.
INPUT_DIR_OPTION: OptionInfo = typer.Option(
    None,
    "--input-dir",
    help="Directory with the daily log files (default: ./logs or TRANSACTION_LOGS_INPUT_DIR).",
    file_okay=False,
    dir_okay=True,
    exists=False,  # the handler reports a missing directory itself
)
OUTPUT_DIR_OPTION: OptionInfo = typer.Option(
    None,
    "--output-dir",
    help=(
        "Directory for per-user reports; CLEARED at the start of every run "
        "(default: <input-dir>/transactions_by_users)."
    ),
    file_okay=False,
    dir_okay=True,
)
EXTENSION_OPTION: OptionInfo = typer.Option(
    None, "--extension", help="Input/report file suffix (default: .log)."
)


@app.command("consolidate")
def consolidate_cmd(
    input_dir: Path | None = INPUT_DIR_OPTION,
    output_dir: Path | None = OUTPUT_DIR_OPTION,
    extension: str | None = EXTENSION_OPTION,
) -> None:
    """Rebuild the per-user reports from every input log file.

    Set verbosity with the root --log-level option.
    """

    settings = _settings_or_exit(input_dir=input_dir, output_dir=output_dir, extension=extension)
    raise typer.Exit(cmd_consolidate(settings))


@app.command("validate")
def validate_cmd(
    input_dir: Path | None = INPUT_DIR_OPTION,
    extension: str | None = EXTENSION_OPTION,
) -> None:
    """Check every input log file and report accepted/rejected line counts."""

    settings = _settings_or_exit(input_dir=input_dir, extension=extension)
    raise typer.Exit(cmd_validate(settings))


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    log_level: str | None = typer.Option(
        None, help="Logging level (falls back to TRANSACTION_LOGS_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    # Load environment from .env in CWD (override=False to keep existing env)
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging(log_level)

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    # Running as a module: `python -m transaction_logs.cli`
    app()
