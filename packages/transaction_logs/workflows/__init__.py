from .consolidate import consolidate_logs, validate_logs

__all__ = ["consolidate_logs", "validate_logs"]
