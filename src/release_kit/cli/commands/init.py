"""Implementation of the 'init' command.

Installs the CI, release and publish workflows into an existing Deno project.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.prompt import Confirm

from release_kit.cli.commands.release import NON_INTERACTIVE_MESSAGE
from release_kit.exceptions import InstallError
from release_kit.project.installer import (
    find_conflicts,
    get_file_mappings,
    install_files,
    validate_project,
)

if TYPE_CHECKING:
    from release_kit.output import ReleaseLogger


def run_init(
    target: str | None,
    *,
    force: bool,
    yes: bool,
    logger: ReleaseLogger,
    interactive: bool | None = None,
    confirm: Callable[[str], bool] = Confirm.ask,
) -> None:
    """Run the init command.

    Args:
        target: Target project directory (defaults to cwd)
        force: Overwrite existing files
        yes: Skip the confirmation prompt
        logger: Output sink
        interactive: Whether a prompt can be shown (defaults to stdin being a TTY)
        confirm: Prompt function returning the user's answer
    """
    target_dir = Path(target or ".").resolve()

    if not target_dir.exists():
        logger.error(f"Target directory does not exist: {escape(str(target_dir))}")
        raise SystemExit(1)
    if not target_dir.is_dir():
        logger.error(f"Target is not a directory: {escape(str(target_dir))}")
        raise SystemExit(1)

    mappings = get_file_mappings()

    logger.blank()
    logger.info("[bold]Release Automation Initializer[/]")
    logger.info(f"Target: [cyan]{escape(str(target_dir))}[/]")
    logger.info(f"Force overwrite: {'[yellow]yes[/]' if force else 'no'}")
    logger.blank()

    if interactive is None:
        interactive = sys.stdin.isatty()
    if not yes:
        if not interactive:
            logger.error(NON_INTERACTIVE_MESSAGE)
            raise SystemExit(1)
        if not logger.quiet:
            logger.info(f"This will install {len(mappings)} files to your project.")
            logger.blank()
            if not confirm("Continue with installation?"):
                logger.info("Installation cancelled.")
                return

    logger.blank()
    logger.step(f"Installing release automation to: [cyan]{escape(str(target_dir))}[/]")
    logger.blank()

    try:
        validate_project(target_dir)
    except InstallError as e:
        logger.error(escape(str(e)))
        raise SystemExit(1) from e
    logger.success("Validated Deno project")

    conflicts = find_conflicts(target_dir, mappings)
    if conflicts and not force:
        logger.blank()
        logger.error("The following files already exist:")
        for conflict in conflicts:
            logger.info(f"[yellow]{conflict}[/]")
        logger.blank()
        logger.info("Use --force to overwrite existing files.")
        logger.blank()
        raise SystemExit(1)
    if conflicts:
        logger.warn(f"Overwriting {len(conflicts)} existing file(s)")

    logger.blank()
    logger.step("Installing files...")
    logger.blank()

    report = install_files(
        target_dir,
        mappings,
        on_installed=lambda mapping: logger.success(mapping.dest),
    )
    for dest, reason in report.failed.items():
        logger.error(f"Failed to install {dest}: {escape(reason)}")

    logger.blank()
    if not report.ok:
        logger.error(
            "Installation completed with errors: "
            f"{len(report.installed)} succeeded, {len(report.failed)} failed"
        )
        raise SystemExit(1)

    logger.success(f"[bold]Successfully installed {len(report.installed)} files![/]")
    logger.blank()
    _print_next_steps(target_dir, logger)


def _print_next_steps(target_dir: Path, logger: ReleaseLogger) -> None:
    is_current_dir = target_dir == Path.cwd().resolve()
    prefix = "" if is_current_dir else f"cd {target_dir.name} && "

    logger.step("Next steps:")
    logger.blank()
    logger.info("1. Review the generated workflows:")
    logger.info(f"   [yellow]{prefix}cat .github/workflows/ci.yml[/]")
    logger.blank()
    logger.info("2. (Optional) Configure release-kit in deno.json:")
    logger.info('   [cyan]"release": { "check_command": ["deno", "task", "check"] }[/]')
    logger.blank()
    logger.info("3. Create a CHANGELOG.md file if you don't have one:")
    logger.info(f"   [yellow]{prefix}touch CHANGELOG.md[/]")
    logger.blank()
    logger.info("4. Commit and push to trigger CI:")
    logger.info(f"   [yellow]{prefix}git add .[/]")
    logger.info(f'   [yellow]{prefix}git commit -m "chore: add release automation"[/]')
    logger.info(f"   [yellow]{prefix}git push[/]")
    logger.blank()
    logger.info("5. When ready to release:")
    logger.info(f"   [yellow]{prefix}release-kit release patch[/]")
    logger.blank()
