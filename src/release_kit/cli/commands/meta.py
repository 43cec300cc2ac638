"""Implementation of the 'meta' command.

Prints ``key=value`` lines suitable for appending to ``$GITHUB_OUTPUT``.
"""

from __future__ import annotations

import typer

from release_kit.config.loader import MANIFEST_NAMES, find_project_root
from release_kit.exceptions import ReleaseKitError
from release_kit.project.manifest import read_project_meta

EXPORTS_HINT = '  Expected: "exports": "./src/main.ts" or "exports": { ".": "./src/main.ts" }'


def run_meta(path: str | None) -> None:
    try:
        project_path = find_project_root(path)
        manifest_path = project_path / MANIFEST_NAMES[0]
        meta = read_project_meta(manifest_path, require_exports=True)
    except ReleaseKitError as e:
        typer.echo(f"ERROR: {e}", err=True)
        if "exports" in str(e):
            typer.echo(EXPORTS_HINT, err=True)
        raise typer.Exit(code=1) from e

    if not (project_path / meta.entry_point).is_file():
        typer.echo(f"ERROR: Entry point file '{meta.entry_point}' does not exist", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"tool_name={meta.tool_name}")
    typer.echo(f"tool_version={meta.version}")
    typer.echo(f"entry={meta.entry_point}")
