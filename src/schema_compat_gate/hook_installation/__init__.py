"""Hook installation exports."""

from .pre_commit_hook import HookInstallationError, build_pre_commit_hook, write_pre_commit_hook

__all__ = ["HookInstallationError", "build_pre_commit_hook", "write_pre_commit_hook"]
