"""Implementation of the 'changelog get' and 'changelog update' commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.markup import escape

from release_kit.core.changelog import (
    extract_changelog_section,
    normalize_version,
    update_changelog_header,
)

if TYPE_CHECKING:
    from release_kit.output import ReleaseLogger


def run_changelog_get(path: Path, version: str) -> None:
    """Print the changelog section for ``version`` to stdout.

    Never fails: a missing section or file is reported in the output text.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Failed to read {path.name}: {e}")
        return
    typer.echo(extract_changelog_section(content, version))


def run_changelog_update(
    path: Path,
    version: str,
    *,
    logger: ReleaseLogger,
    today: str | None = None,
) -> None:
    """Date the header for ``version`` in the changelog file."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to update {path.name}: {escape(str(e))}")
        raise SystemExit(1) from e

    result = update_changelog_header(content, version, today)
    path.write_text(result.text, encoding="utf-8")

    action = "Created new header" if result.created else "Updated header"
    logger.success(f"{action} for {escape(normalize_version(version))}")
    logger.success(f"Updated {path.name}")
