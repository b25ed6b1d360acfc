"""Change source domain exports."""

from .revision_models import GitResult, SchemaRevision
from .staged_changes import (
    ChangeSourceError,
    GitRunner,
    StagedSchemaChangeSource,
    find_repository_root,
    run_git_command,
)

__all__ = [
    "ChangeSourceError",
    "GitResult",
    "GitRunner",
    "SchemaRevision",
    "StagedSchemaChangeSource",
    "find_repository_root",
    "run_git_command",
]
