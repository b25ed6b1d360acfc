"""Reporting exports."""

from .console_report import (
    NO_CHANGES_MESSAGE,
    PASSED_VERDICT,
    REJECTED_VERDICT,
    render_file_result,
    render_no_changes,
    render_verdict,
)

__all__ = [
    "NO_CHANGES_MESSAGE",
    "PASSED_VERDICT",
    "REJECTED_VERDICT",
    "render_file_result",
    "render_no_changes",
    "render_verdict",
]
