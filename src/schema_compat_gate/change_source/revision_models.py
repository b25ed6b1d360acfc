"""Change source entities."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GitResult:
    """Captured result of one git invocation."""

    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Return True when git exited successfully."""
        return self.returncode == 0


@dataclass(frozen=True)
class SchemaRevision:
    """Old and new text of one changed schema file.

    ``old_text`` is None when the file does not exist in the base revision.
    ``new_text`` is None when the staged content could not be read, in which
    case ``retrieval_error`` explains why.
    """

    path: str
    old_text: str | None
    new_text: str | None
    retrieval_error: str | None = None

    @property
    def is_new_file(self) -> bool:
        """Return True when there is no prior revision to compare against."""
        return self.old_text is None
