"""Input discovery and reading for transaction log files."""

from .utils import list_log_files, load_buckets, load_file, read_log_lines

__all__ = ["list_log_files", "load_buckets", "load_file", "read_log_lines"]
