"""Schema diff exports."""

from .compatibility_diff import (
    DEFAULT_MAX_DEPTH,
    SchemaDiffError,
    canonical_json,
    child_path,
    compare_schemas,
)
from .diff_findings import ANNOTATION_KEYS, ROOT_PATH, Finding

__all__ = [
    "ANNOTATION_KEYS",
    "DEFAULT_MAX_DEPTH",
    "Finding",
    "ROOT_PATH",
    "SchemaDiffError",
    "canonical_json",
    "child_path",
    "compare_schemas",
]
