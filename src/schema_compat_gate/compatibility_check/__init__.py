"""Compatibility check domain exports."""

from .check_contracts import CheckOutcome, FileCheckResult, FileCheckStatus
from .compatibility_check_use_case import (
    check_schema_revision,
    compare_schema_files,
    run_compatibility_check,
)

__all__ = [
    "CheckOutcome",
    "FileCheckResult",
    "FileCheckStatus",
    "check_schema_revision",
    "compare_schema_files",
    "run_compatibility_check",
]
