"""Command line interface entry point."""

from __future__ import annotations

import dataclasses
import logging
import sys
from pathlib import Path

import click

from schema_compat_gate.change_source import (
    ChangeSourceError,
    StagedSchemaChangeSource,
    find_repository_root,
)
from schema_compat_gate.compatibility_check import (
    CheckOutcome,
    FileCheckResult,
    compare_schema_files,
    run_compatibility_check,
)
from schema_compat_gate.configuration import ConfigurationError, GateSettings, load_settings
from schema_compat_gate.hook_installation import HookInstallationError, write_pre_commit_hook
from schema_compat_gate.reporting import render_file_result, render_no_changes, render_verdict
from schema_compat_gate.schema_diff import DEFAULT_MAX_DEPTH


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-compat-gate")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log git calls and decisions.")
def cli(verbose: bool) -> None:
    """JSON schema backward-compatibility gate."""
    if verbose:
        _enable_debug_logging()


@cli.command(name="check")
@click.option(
    "--repo",
    "repo_path",
    default=".",
    show_default=True,
    type=click.Path(path_type=str),
    help="Any path inside the git repository to check",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to a YAML gate configuration file",
)
@click.option(
    "--glob",
    "schema_globs",
    multiple=True,
    help="Schema file glob; repeat for several. Overrides config and SCHEMA_GLOB.",
)
@click.option(
    "--base",
    "base_revision",
    required=False,
    help="Revision holding the previous schema versions (default: HEAD)",
)
@click.pass_context
def check(
    ctx: click.Context,
    repo_path: str,
    config_path: str | None,
    schema_globs: tuple[str, ...],
    base_revision: str | None,
) -> None:
    """Check staged JSON schemas for breaking changes against the base revision."""
    try:
        repo_root = find_repository_root(Path(repo_path).resolve())
        settings = _apply_overrides(
            load_settings(repo_root, config_path), schema_globs, base_revision
        )
        source = StagedSchemaChangeSource(repo_root, settings)
        changed_files = source.list_changed_files()
    except (ChangeSourceError, ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc

    if not changed_files:
        click.echo(render_no_changes())
        return

    click.echo("Running JSON schema compatibility check...")
    outcome = run_compatibility_check(
        source.read_revisions(changed_files),
        max_depth=settings.max_depth,
        on_result=_echo_result,
    )
    click.echo(render_verdict(outcome), err=not outcome.passed)
    ctx.exit(outcome.exit_code)


@cli.command(name="diff")
@click.argument("old_path", type=click.Path(path_type=str))
@click.argument("new_path", type=click.Path(path_type=str))
@click.option(
    "--max-depth",
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    type=click.IntRange(min=1),
    help="Maximum schema nesting depth to compare",
)
@click.pass_context
def diff(ctx: click.Context, old_path: str, new_path: str, max_depth: int) -> None:
    """Compare two schema files; exits non-zero on breaking changes."""
    result = compare_schema_files(old_path, new_path, max_depth=max_depth)
    _echo_result(result)
    ctx.exit(CheckOutcome(results=(result,)).exit_code)


@cli.command(name="install-hook")
@click.option(
    "--repo",
    "repo_path",
    default=".",
    show_default=True,
    type=click.Path(path_type=str),
    help="Top-level directory of the git repository",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing hook.")
def install_hook(repo_path: str, force: bool) -> None:
    """Install a git pre-commit hook that runs the compatibility check."""
    try:
        hook_path = write_pre_commit_hook(repo_path, force=force)
    except HookInstallationError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(hook_path))


def _apply_overrides(
    settings: GateSettings, schema_globs: tuple[str, ...], base_revision: str | None
) -> GateSettings:
    if schema_globs:
        settings = dataclasses.replace(settings, schema_globs=tuple(schema_globs))
    if base_revision:
        settings = dataclasses.replace(settings, base_revision=base_revision)
    return settings


def _echo_result(result: FileCheckResult) -> None:
    for line in render_file_result(result):
        click.echo(line, err=not result.passed)


def _enable_debug_logging() -> None:
    package_logger = logging.getLogger("schema_compat_gate")
    if not any(isinstance(handler, logging.StreamHandler) for handler in package_logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        exit_code = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return exit_code if isinstance(exit_code, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
