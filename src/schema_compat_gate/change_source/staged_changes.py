"""Git-backed source of staged schema changes."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from schema_compat_gate.configuration.runtime_settings import GateSettings

from .revision_models import GitResult, SchemaRevision

GitRunner = Callable[[tuple[str, ...], Path], GitResult]

logger = logging.getLogger(__name__)


class ChangeSourceError(Exception):
    """Raised when git cannot be run or its output cannot be read."""


class StagedSchemaChangeSource:
    """Enumerate staged schema files and read their base and staged revisions."""

    def __init__(
        self,
        repo_root: Path,
        settings: GateSettings,
        run_git: GitRunner | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._settings = settings
        self._run_git = run_git or run_git_command

    def list_changed_files(self) -> list[str]:
        """Return staged added/copied/modified/renamed files matching the schema globs."""
        pathspecs = tuple(f":(glob){pattern}" for pattern in self._settings.schema_globs)
        result = self._git(
            "diff", "--cached", "--name-only", "--diff-filter=ACMR", "--", *pathspecs
        )
        if not result.ok:
            raise ChangeSourceError(
                f"git diff failed with exit code {result.returncode}: {result.stderr.strip()}"
            )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def read_revisions(self, file_paths: Iterable[str] | None = None) -> Iterator[SchemaRevision]:
        """Yield one revision pair per file; staged schema files are listed when none are given."""
        paths = self.list_changed_files() if file_paths is None else file_paths
        for file_path in paths:
            yield self.read_revision(file_path)

    def read_revision(self, file_path: str) -> SchemaRevision:
        """Read the base and staged text of one file.

        Read failures never propagate; they are returned on the revision as
        ``retrieval_error`` so the remaining files can still be checked.
        """
        try:
            return self._read_revision(file_path)
        except ChangeSourceError as exc:
            logger.warning("%s: %s", file_path, exc)
            return SchemaRevision(
                path=file_path, old_text=None, new_text=None, retrieval_error=str(exc)
            )

    def _read_revision(self, file_path: str) -> SchemaRevision:
        base_object = f"{self._settings.base_revision}:{file_path}"
        old_text: str | None = None
        if self._git("cat-file", "-e", base_object).ok:
            old_result = self._git("show", base_object)
            if not old_result.ok:
                raise ChangeSourceError(
                    f"Failed to read {base_object}: {old_result.stderr.strip()}"
                )
            old_text = old_result.stdout
        else:
            logger.debug("%s does not exist in %s", file_path, self._settings.base_revision)

        new_result = self._git("show", f":{file_path}")
        if not new_result.ok:
            raise ChangeSourceError(
                f"Failed to get staged version: {new_result.stderr.strip()}"
            )
        return SchemaRevision(path=file_path, old_text=old_text, new_text=new_result.stdout)

    def _git(self, *args: str) -> GitResult:
        return self._run_git(("git", *args), self._repo_root)


def find_repository_root(start: Path, run_git: GitRunner | None = None) -> Path:
    """Return the top-level directory of the git repository containing ``start``."""
    runner = run_git or run_git_command
    result = runner(("git", "rev-parse", "--show-toplevel"), start)
    if not result.ok or not result.stdout.strip():
        raise ChangeSourceError(f"Not inside a git repository: {start}")
    return Path(result.stdout.strip())


def run_git_command(command: tuple[str, ...], cwd: Path) -> GitResult:
    """Run one git command and capture its output.

    Raises:
      ChangeSourceError: If git is missing or its output is not valid UTF-8.
    """
    logger.debug("running %s in %s", shlex.join(command), cwd)
    try:
        completed = subprocess.run(list(command), cwd=cwd, capture_output=True, check=False)
    except FileNotFoundError as exc:
        raise ChangeSourceError(f"Git command not found: {shlex.join(command)}") from exc

    stderr = completed.stderr.decode("utf-8", errors="replace")
    try:
        stdout = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ChangeSourceError(
            f"Output of {shlex.join(command)} is not valid UTF-8: {exc}"
        ) from exc
    return GitResult(returncode=completed.returncode, stdout=stdout, stderr=stderr)
