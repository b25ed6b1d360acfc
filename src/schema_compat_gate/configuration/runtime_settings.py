"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_SCHEMA_GLOBS: tuple[str, ...] = ("json/**/*.schema.json",)
DEFAULT_BASE_REVISION = "HEAD"


@dataclass(frozen=True)
class GateSettings:
    """Normalized settings for one compatibility gate run."""

    schema_globs: tuple[str, ...]
    base_revision: str
    max_depth: int
    source_path: Path | None = None
