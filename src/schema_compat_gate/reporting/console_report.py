"""Console rendering of compatibility check results."""

from __future__ import annotations

from schema_compat_gate.compatibility_check.check_contracts import (
    CheckOutcome,
    FileCheckResult,
    FileCheckStatus,
)

PASSED_VERDICT = "JSON schema compatibility check passed."
REJECTED_VERDICT = "Commit rejected: breaking changes detected in JSON schemas."
NO_CHANGES_MESSAGE = "No modified JSON schemas in staging."


def render_file_result(result: FileCheckResult) -> list[str]:
    """Render one file's result; finding text and order are kept as produced."""
    if result.status is FileCheckStatus.COMPATIBLE:
        return [f"Compatible: {result.path}"]
    if result.status is FileCheckStatus.NEW_FILE:
        return [f"New file: {result.path} (skipping compatibility check)"]
    if result.status is FileCheckStatus.FAILED:
        return [f"Failed to check {result.path}: {result.error}"]
    lines = [f"Breaking changes in {result.path}:"]
    lines.extend(f"  - {finding}" for finding in result.findings)
    return lines


def render_verdict(outcome: CheckOutcome) -> str:
    """Render the final line of a gate run."""
    return PASSED_VERDICT if outcome.passed else REJECTED_VERDICT


def render_no_changes() -> str:
    """Render the message shown when no schema file is staged."""
    return NO_CHANGES_MESSAGE
