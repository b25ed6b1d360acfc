"""Configuration domain exports."""

from .loader import (
    BASE_REVISION_ENV,
    DEFAULT_CONFIG_FILENAME,
    SCHEMA_GLOB_ENV,
    ConfigurationError,
    load_settings,
)
from .runtime_settings import DEFAULT_BASE_REVISION, DEFAULT_SCHEMA_GLOBS, GateSettings

__all__ = [
    "BASE_REVISION_ENV",
    "DEFAULT_BASE_REVISION",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_SCHEMA_GLOBS",
    "SCHEMA_GLOB_ENV",
    "ConfigurationError",
    "GateSettings",
    "load_settings",
]
