"""Installation of workflow templates into a target project.

Templates ship inside the package under ``release_kit/templates`` and are
copied verbatim into the target's ``.github`` directory.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path

from release_kit.config.loader import MANIFEST_NAMES
from release_kit.exceptions import InstallError


@dataclass(frozen=True, slots=True)
class FileMapping:
    """A template file and where it lands in the target project."""

    dest: str
    source: Traversable
    description: str


@dataclass(slots=True)
class InstallReport:
    installed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


_TEMPLATES = (
    ("ci.yml", ".github/workflows/ci.yml", "CI workflow (lint, format, test)"),
    (
        "release.yml",
        ".github/workflows/release.yml",
        "Release workflow (build binaries, create GitHub release)",
    ),
    ("publish.yml", ".github/workflows/publish.yml", "JSR publish workflow"),
)


def templates_root() -> Traversable:
    return files("release_kit") / "templates"


def get_file_mappings() -> list[FileMapping]:
    """Return every file the installer copies."""
    root = templates_root()
    mappings = []
    for template, dest, description in _TEMPLATES:
        source = root / "workflows" / template
        mappings.append(FileMapping(dest=dest, source=source, description=description))
    return mappings


def validate_project(target: Path) -> Path:
    """Check that ``target`` is a Deno project.

    Returns:
        The manifest that was found

    Raises:
        InstallError: If neither ``deno.json`` nor ``deno.jsonc`` exists
    """
    for name in MANIFEST_NAMES:
        manifest = target / name
        if manifest.is_file():
            return manifest
    raise InstallError(
        "Target directory is not a Deno project (no deno.json or deno.jsonc found).\n"
        f"  Path: {target}"
    )


def find_conflicts(target: Path, mappings: list[FileMapping]) -> list[str]:
    """Return destinations that already exist in ``target``."""
    return [m.dest for m in mappings if (target / m.dest).exists()]


def copy_template(mapping: FileMapping, target: Path) -> Path:
    """Copy one template into ``target``, creating parent directories.

    Raises:
        InstallError: If the template cannot be read or the file cannot be written
    """
    dest_path = target / mapping.dest
    try:
        content = mapping.source.read_text(encoding="utf-8")
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise InstallError(f"Failed to copy {mapping.dest}: {e}") from e
    return dest_path


def install_files(
    target: Path,
    mappings: list[FileMapping],
    *,
    on_installed: Callable[[FileMapping], None] | None = None,
) -> InstallReport:
    """Copy all templates, continuing past individual failures."""
    report = InstallReport()
    for mapping in mappings:
        try:
            copy_template(mapping, target)
        except InstallError as e:
            report.failed[mapping.dest] = str(e)
            continue
        report.installed.append(mapping.dest)
        if on_installed is not None:
            on_installed(mapping)
    return report
