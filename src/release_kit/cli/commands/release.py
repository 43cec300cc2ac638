"""Implementation of the 'release' command.

The release command bumps the version, dates the changelog, runs the
project's checks, then commits, tags and (unless dry-running) pushes.
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm

from release_kit.config import load_config
from release_kit.config.loader import find_project_root
from release_kit.core.changelog import extract_changelog_section, update_changelog_header
from release_kit.core.version import next_version
from release_kit.exceptions import GitError, ParseError, ProjectError, ReleaseKitError
from release_kit.project.manifest import (
    read_project_meta,
    update_manifest_version,
    update_version_constant,
)
from release_kit.vcs import GitRepository, github_web_url

if TYPE_CHECKING:
    from release_kit.config.models import ReleaseKitConfig
    from release_kit.output import ReleaseLogger
    from release_kit.project.manifest import ProjectMeta

NON_INTERACTIVE_MESSAGE = (
    "Running in non-interactive mode without --yes flag. "
    "Use --yes to auto-confirm or run interactively."
)


def run_release(
    path: str | None,
    request: str,
    *,
    dry_run: bool,
    yes: bool,
    logger: ReleaseLogger,
    interactive: bool | None = None,
    confirm: Callable[[str], bool] = Confirm.ask,
    today: str | None = None,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to project directory
        request: ``major``, ``minor``, ``patch`` or an explicit version
        dry_run: Stop after tagging, before pushing
        yes: Skip the confirmation prompt
        logger: Output sink
        interactive: Whether a prompt can be shown (defaults to stdin being a TTY)
        confirm: Prompt function returning the user's answer
        today: Release date for the changelog (defaults to today)
    """
    try:
        project_path = find_project_root(path)
        config = load_config(project_path)
        meta = read_project_meta(
            project_path / config.manifest_path,
            default_entry_point=config.default_entry_point,
        )
    except ReleaseKitError as e:
        logger.error(escape(str(e)))
        raise SystemExit(1) from e

    try:
        next_ver = next_version(meta.version, request)
    except ParseError as e:
        logger.error(escape(str(e)))
        raise SystemExit(1) from e

    version = str(next_ver)
    tag = config.tag_for(version)

    repo = GitRepository(project_path)
    if not repo.is_repository():
        logger.error(f"Not a git repository: {escape(str(project_path))}")
        raise SystemExit(1)

    logger.blank()
    logger.info(f"[bold]Version bump:[/] [green]{meta.version}[/] -> [yellow]{version}[/]")
    logger.blank()

    if interactive is None:
        interactive = sys.stdin.isatty()
    if not yes:
        if not interactive:
            logger.error(NON_INTERACTIVE_MESSAGE)
            raise SystemExit(1)
        if not confirm("Proceed with version update?"):
            logger.info("Cancelled.")
            return

    _update_version_files(project_path, config, meta, version, logger)
    _update_changelog(project_path / config.changelog_path, version, today, logger)

    logger.blank()
    logger.step("Running tests...")
    logger.blank()
    if not _run_check(config.check_command, project_path):
        logger.error("Tests failed. Please fix issues before releasing.")
        raise SystemExit(1)
    logger.blank()
    logger.success("All tests passed!")

    logger.blank()
    logger.step("Creating release...")
    logger.blank()

    logger.step("Extracting changelog...")
    notes = _release_notes(project_path / config.changelog_path, version, logger)

    subject = config.commit_subject(version)
    logger.step(f"Committing... {escape(subject)}")
    try:
        repo.commit_all(f"{subject}\n\n{notes}")
    except GitError as e:
        logger.error(f"Git commit failed. Please check git status. ({escape(str(e))})")
        raise SystemExit(1) from e
    logger.success("Changes committed")

    logger.blank()
    logger.step(f"Creating tag... {tag}")
    try:
        repo.create_tag(tag, notes)
    except GitError as e:
        logger.error(f"Git tag creation failed. ({escape(str(e))})")
        raise SystemExit(1) from e
    logger.success("Tag created with changelog")

    if dry_run:
        logger.blank()
        logger.warn("[bold]Dry-run mode - stopping before push[/]")
        logger.blank()
        logger.step("To revert:")
        logger.info(f"[yellow]git reset --hard HEAD~1 && git tag -d {tag}[/]")
        logger.blank()
        logger.step("To complete release:")
        logger.info("[yellow]git push && git push --tags[/]")
        logger.blank()
        _print_links(repo, config, meta, version, logger)
        return

    if config.git.push:
        logger.blank()
        logger.step("Pushing to remote...")
        try:
            repo.push(config.git.remote)
            repo.push_tags(config.git.remote)
        except GitError as e:
            logger.error(f"Git push failed. ({escape(str(e))})")
            raise SystemExit(1) from e
        logger.success("Pushed to remote")
    else:
        logger.info("[dim]Push disabled in configuration; push manually when ready.[/]")

    logger.blank()
    logger.print(
        Panel(
            f"[green]Release {tag} complete![/]",
            title="[green]Release[/]",
            border_style="green",
        )
    )
    logger.blank()
    _print_links(repo, config, meta, version, logger)


def _update_version_files(
    project_path: Path,
    config: ReleaseKitConfig,
    meta: ProjectMeta,
    version: str,
    logger: ReleaseLogger,
) -> None:
    entry_point = meta.entry_point
    logger.step(f"Updating {entry_point}...")
    try:
        update_version_constant(project_path / entry_point, version)
    except ProjectError as e:
        logger.error(f"Failed to update VERSION constant in {entry_point}: {escape(str(e))}")
        raise SystemExit(1) from e
    logger.success(f"Updated {entry_point}")

    manifest_name = config.manifest_path.name
    logger.step(f"Updating {manifest_name}...")
    try:
        update_manifest_version(project_path / config.manifest_path, version)
    except ProjectError as e:
        logger.error(f"Failed to update version in {manifest_name}: {escape(str(e))}")
        raise SystemExit(1) from e
    logger.success(f"Updated {manifest_name}")


def _update_changelog(
    changelog_path: Path,
    version: str,
    today: str | None,
    logger: ReleaseLogger,
) -> None:
    logger.step(f"Updating {changelog_path.name}...")
    try:
        content = changelog_path.read_text(encoding="utf-8")
        result = update_changelog_header(content, version, today)
        changelog_path.write_text(result.text, encoding="utf-8")
    except OSError as e:
        logger.warn(
            f"Failed to update {changelog_path.name} - continuing anyway ({escape(str(e))})"
        )
        return

    if result.created:
        logger.success(f"Created new header for {version}")
    else:
        logger.success(f"Updated header for {version}")


def _run_check(command: list[str], cwd: Path) -> bool:
    """Run the project's check command with inherited output."""
    try:
        result = subprocess.run(command, cwd=cwd, check=False)
    except FileNotFoundError:
        return False
    return result.returncode == 0


def _release_notes(changelog_path: Path, version: str, logger: ReleaseLogger) -> str:
    try:
        content = changelog_path.read_text(encoding="utf-8")
    except OSError:
        logger.warn("Could not extract changelog, using default message")
        return f"Release {version}"
    return extract_changelog_section(content, version)


def _print_links(
    repo: GitRepository,
    config: ReleaseKitConfig,
    meta: ProjectMeta,
    version: str,
    logger: ReleaseLogger,
) -> None:
    remote_url = repo.get_remote_url(config.git.remote)
    if remote_url:
        release_url = f"{github_web_url(remote_url)}/releases/tag/{config.tag_for(version)}"
        logger.info(f"GitHub: [yellow]{escape(release_url)}[/]")
    if meta.scope:
        logger.info(f"JSR: [yellow]https://jsr.io/{meta.name}@{version}[/]")
    logger.blank()
