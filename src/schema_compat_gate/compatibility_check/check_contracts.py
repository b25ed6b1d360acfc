"""Compatibility check entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from schema_compat_gate.schema_diff.diff_findings import Finding


class FileCheckStatus(str, Enum):
    """Outcome of checking one schema file."""

    COMPATIBLE = "COMPATIBLE"
    BREAKING = "BREAKING"
    NEW_FILE = "NEW_FILE"
    FAILED = "FAILED"


@dataclass(frozen=True)
class FileCheckResult:
    """Classified result for one schema file."""

    path: str
    status: FileCheckStatus
    findings: tuple[Finding, ...] = ()
    error: str | None = None

    @property
    def passed(self) -> bool:
        """Return True when the file does not block the commit."""
        return self.status in (FileCheckStatus.COMPATIBLE, FileCheckStatus.NEW_FILE)


@dataclass(frozen=True)
class CheckOutcome:
    """Aggregated results for one gate run."""

    results: tuple[FileCheckResult, ...]

    @property
    def passed(self) -> bool:
        """Return True when every examined file passed."""
        return all(result.passed for result in self.results)

    @property
    def failed_results(self) -> tuple[FileCheckResult, ...]:
        """Return results that block the commit, in check order."""
        return tuple(result for result in self.results if not result.passed)

    @property
    def exit_code(self) -> int:
        """Return the process exit code for this outcome."""
        return 0 if self.passed else 1
