"""Compatibility check use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from schema_compat_gate.change_source.revision_models import SchemaRevision
from schema_compat_gate.schema_diff import DEFAULT_MAX_DEPTH, SchemaDiffError, compare_schemas

from .check_contracts import CheckOutcome, FileCheckResult, FileCheckStatus

ResultCallback = Callable[[FileCheckResult], None]

logger = logging.getLogger(__name__)


class _DocumentParseError(Exception):
    """Raised when one revision is not valid JSON."""


def check_schema_revision(
    revision: SchemaRevision, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> FileCheckResult:
    """Classify one file's change without letting its failure stop the run."""
    if revision.retrieval_error is not None:
        return _failed(revision.path, revision.retrieval_error)
    if revision.is_new_file:
        logger.debug("%s is new, skipping comparison", revision.path)
        return FileCheckResult(path=revision.path, status=FileCheckStatus.NEW_FILE)
    if revision.new_text is None:
        return _failed(revision.path, "Staged content is missing.")

    try:
        old_document = _parse_document(revision.old_text, "previous")
        new_document = _parse_document(revision.new_text, "staged")
        findings = compare_schemas(old_document, new_document, max_depth=max_depth)
    except (_DocumentParseError, SchemaDiffError) as exc:
        return _failed(revision.path, str(exc))
    except RecursionError:
        return _failed(revision.path, "Schema values are nested too deeply to compare.")

    status = FileCheckStatus.BREAKING if findings else FileCheckStatus.COMPATIBLE
    logger.debug("%s: %s with %d finding(s)", revision.path, status.value, len(findings))
    return FileCheckResult(path=revision.path, status=status, findings=tuple(findings))


def run_compatibility_check(
    revisions: Iterable[SchemaRevision],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    on_result: ResultCallback | None = None,
) -> CheckOutcome:
    """Check every revision in order and aggregate the results.

    ``on_result`` is called with each result as soon as it is available, so
    callers can report progress while later files are still being read.
    """
    results: list[FileCheckResult] = []
    for revision in revisions:
        result = check_schema_revision(revision, max_depth=max_depth)
        if on_result is not None:
            on_result(result)
        results.append(result)
    return CheckOutcome(results=tuple(results))


def compare_schema_files(
    old_path: Path | str, new_path: Path | str, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> FileCheckResult:
    """Check two schema files on disk; a missing old file counts as a new file."""
    old_file, new_file = Path(old_path), Path(new_path)
    try:
        new_text = new_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return _failed(str(new_file), f"Failed to read {new_file}: {exc}")

    old_text: str | None = None
    if old_file.exists():
        try:
            old_text = old_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return _failed(str(new_file), f"Failed to read {old_file}: {exc}")

    revision = SchemaRevision(path=str(new_file), old_text=old_text, new_text=new_text)
    return check_schema_revision(revision, max_depth=max_depth)


def _parse_document(text: str | None, label: str) -> Any:
    try:
        return json.loads(text or "")
    except json.JSONDecodeError as exc:
        raise _DocumentParseError(f"Invalid JSON in {label} version: {exc}") from exc
    except RecursionError as exc:
        raise _DocumentParseError(
            f"JSON in {label} version is nested too deeply to parse"
        ) from exc


def _failed(path: str, error: str) -> FileCheckResult:
    logger.debug("%s: failed: %s", path, error)
    return FileCheckResult(path=path, status=FileCheckStatus.FAILED, error=error)
