"""Compatibility check use-case tests."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from schema_compat_gate.change_source import SchemaRevision
from schema_compat_gate.compatibility_check import (
    FileCheckStatus,
    check_schema_revision,
    compare_schema_files,
    run_compatibility_check,
)
from schema_compat_gate.schema_diff import ROOT_PATH, Finding

_OLD = json.dumps({"type": "object", "properties": {"a": {"type": "string"}}})
_COMPATIBLE = json.dumps(
    {"type": "object", "properties": {"a": {"type": "string"}, "b": {"type": "integer"}}}
)
_BREAKING = json.dumps({"type": "object", "properties": {}})


def test_unchanged_semantics_are_compatible() -> None:
    result = check_schema_revision(SchemaRevision("s.json", _OLD, _COMPATIBLE))

    assert result.status is FileCheckStatus.COMPATIBLE
    assert result.findings == ()
    assert result.passed


def test_breaking_change_carries_findings_in_engine_order() -> None:
    result = check_schema_revision(SchemaRevision("s.json", _OLD, _BREAKING))

    assert result.status is FileCheckStatus.BREAKING
    assert result.findings == (Finding(ROOT_PATH, 'property "a" was removed'),)
    assert not result.passed


def test_new_file_passes_without_comparison() -> None:
    result = check_schema_revision(SchemaRevision("s.json", None, "not json at all"))

    assert result.status is FileCheckStatus.NEW_FILE
    assert result.passed


def test_retrieval_error_fails_the_file() -> None:
    result = check_schema_revision(
        SchemaRevision("s.json", _OLD, None, retrieval_error="Failed to get staged version")
    )

    assert result.status is FileCheckStatus.FAILED
    assert result.error == "Failed to get staged version"
    assert not result.passed


def test_invalid_json_fails_the_file_with_parse_error() -> None:
    staged = check_schema_revision(SchemaRevision("s.json", _OLD, "{not-valid-json}"))
    previous = check_schema_revision(SchemaRevision("s.json", "", _OLD))

    assert staged.status is FileCheckStatus.FAILED
    assert staged.error is not None
    assert staged.error.startswith("Invalid JSON in staged version")
    assert previous.status is FileCheckStatus.FAILED
    assert previous.error is not None
    assert previous.error.startswith("Invalid JSON in previous version")


def test_excessive_nesting_fails_the_file() -> None:
    deep = json.dumps({"properties": {"a": {"properties": {"b": {"type": "string"}}}}})

    result = check_schema_revision(SchemaRevision("s.json", deep, deep), max_depth=1)

    assert result.status is FileCheckStatus.FAILED
    assert result.error is not None
    assert "nesting exceeds 1 levels" in result.error


def test_failures_do_not_stop_remaining_files() -> None:
    outcome = run_compatibility_check(
        [
            SchemaRevision("broken.json", _OLD, "{"),
            SchemaRevision("new.json", None, _OLD),
            SchemaRevision("breaking.json", _OLD, _BREAKING),
            SchemaRevision("fine.json", _OLD, _COMPATIBLE),
        ]
    )

    assert [result.status for result in outcome.results] == [
        FileCheckStatus.FAILED,
        FileCheckStatus.NEW_FILE,
        FileCheckStatus.BREAKING,
        FileCheckStatus.COMPATIBLE,
    ]
    assert [result.path for result in outcome.failed_results] == ["broken.json", "breaking.json"]
    assert not outcome.passed
    assert outcome.exit_code == 1


def test_all_compatible_files_pass() -> None:
    outcome = run_compatibility_check(
        [SchemaRevision("a.json", _OLD, _COMPATIBLE), SchemaRevision("b.json", None, _OLD)]
    )

    assert outcome.passed
    assert outcome.exit_code == 0


def test_no_files_pass() -> None:
    outcome = run_compatibility_check([])

    assert outcome.results == ()
    assert outcome.exit_code == 0


def test_compare_schema_files_reads_both_files(tmp_path: Path) -> None:
    old_path = tmp_path / "old.json"
    new_path = tmp_path / "new.json"
    old_path.write_text(_OLD, encoding="utf-8")
    new_path.write_text(_BREAKING, encoding="utf-8")

    result = compare_schema_files(old_path, new_path)

    assert result.status is FileCheckStatus.BREAKING
    assert result.path == str(new_path)


def test_compare_schema_files_treats_missing_old_file_as_new(tmp_path: Path) -> None:
    new_path = tmp_path / "new.json"
    new_path.write_text(_OLD, encoding="utf-8")

    result = compare_schema_files(tmp_path / "missing.json", new_path)

    assert result.status is FileCheckStatus.NEW_FILE


def test_compare_schema_files_fails_when_new_file_is_missing(tmp_path: Path) -> None:
    old_path = tmp_path / "old.json"
    old_path.write_text(_OLD, encoding="utf-8")

    result = compare_schema_files(old_path, tmp_path / "missing.json")

    assert result.status is FileCheckStatus.FAILED
    assert result.error is not None
    assert "Failed to read" in result.error


def test_compare_schema_files_fails_when_file_is_not_utf8(tmp_path: Path) -> None:
    old_path = tmp_path / "old.json"
    new_path = tmp_path / "new.json"
    old_path.write_text(_OLD, encoding="utf-8")
    new_path.write_bytes(b'{"title": "\xff"}')

    result = compare_schema_files(old_path, new_path)

    assert result.status is FileCheckStatus.FAILED
    assert result.error is not None
    assert result.error.startswith(f"Failed to read {new_path}")


def test_compare_schema_files_fails_when_old_file_is_not_utf8(tmp_path: Path) -> None:
    old_path = tmp_path / "old.json"
    new_path = tmp_path / "new.json"
    old_path.write_bytes(b"\xff\xfe")
    new_path.write_text(_OLD, encoding="utf-8")

    result = compare_schema_files(old_path, new_path)

    assert result.status is FileCheckStatus.FAILED
    assert result.error is not None
    assert result.error.startswith(f"Failed to read {old_path}")


def test_json_nested_beyond_the_parser_limit_fails_the_file() -> None:
    nested = '{"enum": ' + "[" * 100_000 + "]" * 100_000 + "}"

    result = check_schema_revision(SchemaRevision("s.json", "{}", nested))

    assert result.status is FileCheckStatus.FAILED
    assert result.error == "JSON in staged version is nested too deeply to parse"


def test_recursion_limit_in_comparison_fails_only_that_file(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def exhausted(*args: object, **kwargs: object) -> list[Finding]:
        raise RecursionError("maximum recursion depth exceeded in comparison")

    monkeypatch.setattr(
        "schema_compat_gate.compatibility_check.compatibility_check_use_case.compare_schemas",
        exhausted,
    )

    outcome = run_compatibility_check(
        [SchemaRevision("deep.json", _OLD, _OLD), SchemaRevision("new.json", None, _OLD)]
    )

    assert [result.status for result in outcome.results] == [
        FileCheckStatus.FAILED,
        FileCheckStatus.NEW_FILE,
    ]
    assert outcome.results[0].error == "Schema values are nested too deeply to compare."


def test_results_are_reported_as_each_file_is_checked() -> None:
    reported: list[str] = []

    def read_revisions() -> Iterator[SchemaRevision]:
        yield SchemaRevision("first.json", _OLD, _BREAKING)
        reported.append("read second")
        yield SchemaRevision("second.json", _OLD, _COMPATIBLE)

    outcome = run_compatibility_check(
        read_revisions(), on_result=lambda result: reported.append(result.path)
    )

    assert reported == ["first.json", "read second", "second.json"]
    assert [result.path for result in outcome.results] == ["first.json", "second.json"]
