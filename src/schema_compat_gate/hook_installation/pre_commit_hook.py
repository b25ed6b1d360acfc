"""Git pre-commit hook scaffold."""

from __future__ import annotations

import stat
from pathlib import Path

_PRE_COMMIT_TEMPLATE = """#!/bin/sh
# Installed by schema-compat-gate.
# Rejects commits that introduce breaking changes to staged JSON schemas.
# Set SCHEMA_GLOB to override the schema file glob for one commit.

exec python -m schema_compat_gate check
"""


class HookInstallationError(Exception):
    """Raised when the pre-commit hook cannot be written."""


def build_pre_commit_hook() -> str:
    """Build the pre-commit hook script text."""
    return _PRE_COMMIT_TEMPLATE


def write_pre_commit_hook(repo_root: Path | str, *, force: bool = False) -> Path:
    """Write an executable pre-commit hook into the repository.

    Args:
      repo_root: Top-level directory of the git repository.
      force: Overwrite an existing pre-commit hook.

    Returns:
      The resolved hook path.

    Raises:
      HookInstallationError: If the repository has no hooks directory, a hook
        already exists and ``force`` is not set, or writing fails.
    """
    git_dir = Path(repo_root) / ".git"
    if not git_dir.is_dir():
        raise HookInstallationError(f"No .git directory found in {Path(repo_root).resolve()}")

    destination = git_dir / "hooks" / "pre-commit"
    if destination.exists() and not force:
        raise HookInstallationError(f"Pre-commit hook already exists: {destination.resolve()}")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(build_pre_commit_hook(), encoding="utf-8")
        mode = destination.stat().st_mode
        destination.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as exc:
        raise HookInstallationError(f"Failed to write pre-commit hook: {exc}") from exc
    return destination.resolve()
