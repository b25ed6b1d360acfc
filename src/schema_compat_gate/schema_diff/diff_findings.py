"""Schema diff entities."""

from __future__ import annotations

from dataclasses import dataclass

ROOT_PATH = "<root>"

ANNOTATION_KEYS: frozenset[str] = frozenset(
    {"description", "title", "$id", "$comment", "examples"}
)


@dataclass(frozen=True)
class Finding:
    """One breaking change located at a path inside the old schema."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
