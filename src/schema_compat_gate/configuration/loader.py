"""Configuration loader service."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from schema_compat_gate.schema_diff import DEFAULT_MAX_DEPTH

from .runtime_settings import DEFAULT_BASE_REVISION, DEFAULT_SCHEMA_GLOBS, GateSettings

DEFAULT_CONFIG_FILENAME = ".schema-compat.yaml"
SCHEMA_GLOB_ENV = "SCHEMA_GLOB"
BASE_REVISION_ENV = "SCHEMA_COMPAT_BASE_REVISION"

_KNOWN_KEYS = frozenset({"schema_globs", "base_revision", "max_depth"})

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the gate configuration is invalid."""


def load_settings(
    repo_root: Path | str,
    config_path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> GateSettings:
    """Load gate settings from the optional config file and the environment.

    An explicit ``config_path`` must exist. Without one, ``.schema-compat.yaml``
    at the repository root is used when present. ``SCHEMA_GLOB`` (comma
    separated) and ``SCHEMA_COMPAT_BASE_REVISION`` override file values.
    """
    env = os.environ if environ is None else environ
    path = _resolve_config_path(Path(repo_root), config_path)
    parsed = _read_config_file(path) if path is not None else {}

    unknown = sorted(set(parsed) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    schema_globs = _normalize_globs(parsed.get("schema_globs", DEFAULT_SCHEMA_GLOBS))
    base_revision = _require_non_empty_string(
        parsed.get("base_revision", DEFAULT_BASE_REVISION), "base_revision"
    )
    max_depth = _require_positive_int(parsed.get("max_depth", DEFAULT_MAX_DEPTH), "max_depth")

    env_globs = env.get(SCHEMA_GLOB_ENV)
    if env_globs:
        schema_globs = _normalize_globs(env_globs, field_name=SCHEMA_GLOB_ENV)
        logger.debug("schema globs overridden from %s: %s", SCHEMA_GLOB_ENV, schema_globs)
    env_base = env.get(BASE_REVISION_ENV)
    if env_base:
        base_revision = _require_non_empty_string(env_base, BASE_REVISION_ENV)
        logger.debug("base revision overridden from %s: %s", BASE_REVISION_ENV, base_revision)

    return GateSettings(
        schema_globs=schema_globs,
        base_revision=base_revision,
        max_depth=max_depth,
        source_path=path,
    )


def _resolve_config_path(repo_root: Path, config_path: Path | str | None) -> Path | None:
    if config_path is not None:
        path = Path(config_path)
        if not path.is_absolute():
            path = (repo_root / path).resolve()
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        return path
    default_path = repo_root / DEFAULT_CONFIG_FILENAME
    return default_path if default_path.exists() else None


def _read_config_file(path: Path) -> Mapping[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    logger.debug("loaded configuration from %s", path)
    return parsed


def _normalize_globs(value: Any, field_name: str = "schema_globs") -> tuple[str, ...]:
    globs: list[str] = []
    if isinstance(value, str):
        globs = [item.strip() for item in value.split(",") if item.strip()]
    elif isinstance(value, Sequence):
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                globs.append(stripped)
    else:
        raise ConfigurationError(f"{field_name} must be a string or list of strings.")
    if not globs:
        raise ConfigurationError(f"{field_name} must contain at least one glob.")
    return tuple(globs)


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
