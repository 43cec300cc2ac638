"""Typer application for release-kit."""

from __future__ import annotations

from pathlib import Path

import typer

from release_kit import __version__
from release_kit.output import ReleaseLogger

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)
changelog_app = typer.Typer(no_args_is_help=True, help="Read or date CHANGELOG.md sections.")
app.add_typer(changelog_app, name="changelog")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"release-kit version {__version__}")
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Release automation: version bumps, changelog dating and git tags."""


@app.command()
def release(
    version: str = typer.Argument(..., help="major, minor, patch or an explicit version"),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Stop before pushing."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    path: str | None = typer.Option(None, "--path", help="Project directory."),
) -> None:
    """Bump the version, date the changelog, run checks, commit, tag and push."""
    from release_kit.cli.commands.release import run_release

    run_release(path, version, dry_run=dry_run, yes=yes, logger=ReleaseLogger(quiet=quiet))


@app.command()
def init(
    target: str | None = typer.Argument(None, help="Project directory (default: current)."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
) -> None:
    """Install CI, release and publish workflows into a Deno project."""
    from release_kit.cli.commands.init import run_init

    run_init(target, force=force, yes=yes, logger=ReleaseLogger(quiet=quiet))


@app.command()
def meta(
    path: str | None = typer.Option(None, "--path", help="Project directory."),
) -> None:
    """Print tool_name, tool_version and entry from deno.json."""
    from release_kit.cli.commands.meta import run_meta

    run_meta(path)


@changelog_app.command("get")
def changelog_get(
    version: str = typer.Argument(..., help="Version to extract (v prefix optional)."),
    path: Path = typer.Option(Path("CHANGELOG.md"), "--path", help="Changelog file."),
) -> None:
    """Print the changelog section for VERSION."""
    from release_kit.cli.commands.changelog import run_changelog_get

    run_changelog_get(path, version)


@changelog_app.command("update")
def changelog_update(
    version: str = typer.Argument(..., help="Version being released (v prefix optional)."),
    path: Path = typer.Option(Path("CHANGELOG.md"), "--path", help="Changelog file."),
    date: str | None = typer.Option(None, "--date", help="Release date (YYYY-MM-DD)."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
) -> None:
    """Date the header for VERSION, converting Unreleased or creating a section."""
    from release_kit.cli.commands.changelog import run_changelog_update

    run_changelog_update(path, version, logger=ReleaseLogger(quiet=quiet), today=date)


def main() -> None:
    app()
