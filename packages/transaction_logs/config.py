"""Runtime settings for ``transaction_logs``.

Each field resolves from an explicit argument, then an environment variable,
then a default derived from the current working directory:

- ``input_dir``: ``TRANSACTION_LOGS_INPUT_DIR``, default ``<cwd>/logs``
- ``output_dir``: ``TRANSACTION_LOGS_OUTPUT_DIR``, default
  ``<input_dir>/transactions_by_users``
- ``extension``: ``TRANSACTION_LOGS_EXTENSION``, default ``.log``

The CLI loads a ``.env`` from the working directory before calling
:func:`load_settings`, so values there behave like environment variables.
"""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_INPUT_DIRNAME = "logs"
DEFAULT_OUTPUT_DIRNAME = "transactions_by_users"
DEFAULT_EXTENSION = ".log"

ENV_INPUT_DIR = "TRANSACTION_LOGS_INPUT_DIR"
ENV_OUTPUT_DIR = "TRANSACTION_LOGS_OUTPUT_DIR"
ENV_EXTENSION = "TRANSACTION_LOGS_EXTENSION"


class Settings(BaseModel):
    """Resolved locations and options for one run."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    input_dir: Path
    output_dir: Path
    extension: str = DEFAULT_EXTENSION

    @field_validator("extension")
    @classmethod
    def _extension_shape(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("extension must start with '.' and name a suffix, e.g. '.log'")
        if "/" in v or "\\" in v:
            raise ValueError("extension must not contain path separators")
        return v


def _env_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip())


def load_settings(
    *,
    input_dir: str | PathLike[str] | None = None,
    output_dir: str | PathLike[str] | None = None,
    extension: str | None = None,
    cwd: str | PathLike[str] | None = None,
) -> Settings:
    """Assemble :class:`Settings` from arguments, environment and defaults.

    ``cwd`` overrides the working directory used for the default input root.
    Raises ``pydantic.ValidationError`` on invalid values.
    """

    base = Path(cwd) if cwd is not None else Path.cwd()

    resolved_input = Path(input_dir) if input_dir is not None else _env_path(ENV_INPUT_DIR)
    if resolved_input is None:
        resolved_input = base / DEFAULT_INPUT_DIRNAME

    resolved_output = Path(output_dir) if output_dir is not None else _env_path(ENV_OUTPUT_DIR)
    if resolved_output is None:
        resolved_output = resolved_input / DEFAULT_OUTPUT_DIRNAME

    return Settings(
        input_dir=resolved_input,
        output_dir=resolved_output,
        extension=extension or os.getenv(ENV_EXTENSION) or DEFAULT_EXTENSION,
    )


__all__ = ["Settings", "load_settings"]
