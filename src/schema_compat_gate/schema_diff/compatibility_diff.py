"""Backward-compatibility diff between two JSON Schema documents."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any

from .diff_findings import ANNOTATION_KEYS, ROOT_PATH, Finding

DEFAULT_MAX_DEPTH = 200

_STRUCTURAL_KEYS = frozenset({"properties", "required", "additionalProperties"})
_PLAIN_SEGMENT = re.compile(r"^[^.\[\]\s]+$")
_UNDEFINED = "undefined"
_MISSING = object()


class SchemaDiffError(Exception):
    """Raised when two schemas cannot be compared."""


def compare_schemas(
    old: Any,
    new: Any,
    path: str = ROOT_PATH,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Finding]:
    """Return breaking changes from ``old`` to ``new`` in deterministic order.

    Removing or tightening is breaking; adding and loosening is not, except for
    ``additionalProperties`` where any change is reported. Annotation keywords
    are ignored at every level. Nodes that are not mappings compare as empty
    schemas.

    Raises:
      SchemaDiffError: If nesting goes deeper than ``max_depth`` levels.
    """
    findings: list[Finding] = []
    _compare_node(_as_mapping(old), _as_mapping(new), path, findings, depth=0, max_depth=max_depth)
    return findings


def _compare_node(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    path: str,
    findings: list[Finding],
    *,
    depth: int,
    max_depth: int,
) -> None:
    if depth > max_depth:
        raise SchemaDiffError(f"{path}: schema nesting exceeds {max_depth} levels")

    _check_type(old, new, path, findings)
    _check_additional_properties(old, new, path, findings)
    _check_required(old, new, path, findings)
    _check_properties(old, new, path, findings, depth=depth, max_depth=max_depth)
    _check_keywords(old, new, path, findings, depth=depth, max_depth=max_depth)


def _check_type(
    old: Mapping[str, Any], new: Mapping[str, Any], path: str, findings: list[Finding]
) -> None:
    if "type" not in old or "type" not in new:
        return
    old_type, new_type = canonical_json(old["type"]), canonical_json(new["type"])
    if old_type != new_type:
        findings.append(Finding(path, f"type changed from {old_type} to {new_type}"))


def _check_additional_properties(
    old: Mapping[str, Any], new: Mapping[str, Any], path: str, findings: list[Finding]
) -> None:
    # Absence is its own value here, so an absent -> true change is still reported.
    old_value = _render_optional(old.get("additionalProperties", _MISSING))
    new_value = _render_optional(new.get("additionalProperties", _MISSING))
    if old_value != new_value:
        findings.append(
            Finding(path, f"additionalProperties changed from {old_value} to {new_value}")
        )


def _check_required(
    old: Mapping[str, Any], new: Mapping[str, Any], path: str, findings: list[Finding]
) -> None:
    previously_required = {canonical_json(name) for name in _as_list(old.get("required"))}
    for name in _as_list(new.get("required")):
        if canonical_json(name) not in previously_required:
            findings.append(Finding(path, f"property {canonical_json(name)} became required"))


def _check_properties(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    path: str,
    findings: list[Finding],
    *,
    depth: int,
    max_depth: int,
) -> None:
    old_properties = _as_mapping(old.get("properties"))
    new_properties = _as_mapping(new.get("properties"))
    for name, old_property in old_properties.items():
        if name not in new_properties:
            findings.append(Finding(path, f"property {canonical_json(name)} was removed"))
            continue
        _compare_node(
            _as_mapping(old_property),
            _as_mapping(new_properties[name]),
            child_path(path, "properties", name),
            findings,
            depth=depth + 1,
            max_depth=max_depth,
        )


def _check_keywords(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    path: str,
    findings: list[Finding],
    *,
    depth: int,
    max_depth: int,
) -> None:
    for key, old_value in old.items():
        if key in _STRUCTURAL_KEYS or key in ANNOTATION_KEYS:
            continue
        # A type kept on both sides was already compared above.
        if key == "type" and key in new:
            continue
        if key not in new:
            findings.append(Finding(path, f"keyword {canonical_json(key)} was removed"))
            continue

        new_value = new[key]
        if isinstance(old_value, Mapping) and isinstance(new_value, Mapping):
            _compare_node(
                old_value,
                new_value,
                child_path(path, key),
                findings,
                depth=depth + 1,
                max_depth=max_depth,
            )
            continue

        old_text, new_text = canonical_json(old_value), canonical_json(new_value)
        if old_text == new_text:
            continue
        if _is_array(old_value) and _is_array(new_value):
            message = f"keyword {canonical_json(key)} array changed from {old_text} to {new_text}"
        else:
            message = f"keyword {canonical_json(key)} value changed from {old_text} to {new_text}"
        findings.append(Finding(path, message))


def canonical_json(value: Any) -> str:
    """Serialize a schema value the same way on both sides of a comparison."""
    return json.dumps(value, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def child_path(path: str, *segments: str) -> str:
    """Extend a display path; ``<root>`` is a label, never a leading segment."""
    rendered = path if path != ROOT_PATH else ""
    for segment in segments:
        if _PLAIN_SEGMENT.match(segment):
            rendered = f"{rendered}.{segment}" if rendered else segment
        else:
            rendered = f"{rendered}[{json.dumps(segment, ensure_ascii=False)}]"
    return rendered or ROOT_PATH


def _render_optional(value: Any) -> str:
    return _UNDEFINED if value is _MISSING else canonical_json(value)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> Sequence[Any]:
    return value if _is_array(value) else ()


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))
