"""Manifest metadata and version manipulation.

This module reads project metadata from ``deno.json`` and updates the
version in the manifest and in the entry point's ``VERSION`` constant.

Updates use targeted regex replacement instead of re-serialising, so
formatting, key order and comments are preserved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from release_kit.config.loader import load_manifest
from release_kit.exceptions import ManifestError, ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_ENTRY_POINT = "./src/main.ts"

_SCOPED_NAME_RE = re.compile(r"^(@([^/]+)/)?(.+)$")
_MANIFEST_VERSION_RE = re.compile(r'"version":\s*"[^"]+"')
_VERSION_CONSTANT_RE = re.compile(r'(?:export )?const VERSION = "[^"]+";')
_QUOTED_RE = re.compile(r'"[^"]+"')


@dataclass(frozen=True, slots=True)
class ProjectMeta:
    """Project metadata read from the manifest."""

    name: str
    scope: str
    package_name: str
    version: str
    entry_point: str

    @property
    def tool_name(self) -> str:
        """Name without scope, restricted to ``[A-Za-z0-9._-]``."""
        unscoped = re.sub(r"^@.*/", "", self.name)
        return re.sub(r"[^a-zA-Z0-9._-]", "-", unscoped)


def _entry_point(exports: Any) -> str | None:
    if isinstance(exports, str):
        return exports
    if isinstance(exports, dict) and isinstance(exports.get("."), str):
        return exports["."]
    return None


def read_project_meta(
    manifest_path: Path,
    *,
    require_exports: bool = False,
    default_entry_point: str = DEFAULT_ENTRY_POINT,
) -> ProjectMeta:
    """Read project metadata from a manifest.

    Args:
        manifest_path: Path to ``deno.json``
        require_exports: Fail instead of using ``default_entry_point``
            when ``exports`` is missing
        default_entry_point: Entry point used when ``exports`` is missing

    Returns:
        Project metadata

    Raises:
        ManifestError: If name, version or (when required) exports are missing
    """
    data = load_manifest(manifest_path)

    publish = data.get("publish")
    name = data.get("name") or (publish.get("name") if isinstance(publish, dict) else None)
    if not name:
        raise ManifestError(f"'name' field is required in {manifest_path.name}")
    if not data.get("version"):
        raise ManifestError(f"'version' field is required in {manifest_path.name}")

    exports = data.get("exports")
    if exports is None:
        if require_exports:
            raise ManifestError(f"'exports' field is required in {manifest_path.name}")
        entry_point = default_entry_point
    else:
        entry_point = _entry_point(exports)
        if entry_point is None:
            if require_exports:
                raise ManifestError(f"Invalid 'exports' format in {manifest_path.name}")
            entry_point = default_entry_point

    full_name = str(name)
    match = _SCOPED_NAME_RE.match(full_name)
    scope = (match.group(2) or "") if match else ""
    package_name = match.group(3) if match else full_name

    return ProjectMeta(
        name=full_name,
        scope=scope,
        package_name=package_name,
        version=str(data["version"]),
        entry_point=entry_point,
    )


def update_manifest_version(manifest_path: Path, new_version: str) -> Path:
    """Update the ``"version"`` field of a manifest in place.

    Raises:
        ProjectError: If the manifest does not exist
        VersionNotFoundError: If no version field could be updated
    """
    if not manifest_path.is_file():
        raise ProjectError(f"Manifest not found: {manifest_path}")

    content = manifest_path.read_text(encoding="utf-8")
    updated, count = _MANIFEST_VERSION_RE.subn(f'"version": "{new_version}"', content, count=1)
    if count == 0:
        raise VersionNotFoundError(f"No 'version' field found in {manifest_path.name}")

    manifest_path.write_text(updated, encoding="utf-8")
    return manifest_path


def update_version_constant(file_path: Path, new_version: str) -> None:
    """Update ``const VERSION = "..."`` in a source file.

    Only the quoted value of the first matching declaration is replaced.

    Raises:
        ProjectError: If the file doesn't exist
        VersionNotFoundError: If the constant is missing
    """
    if not file_path.is_file():
        raise ProjectError(f"Version file not found: {file_path}")

    content = file_path.read_text(encoding="utf-8")

    def replace_value(match: re.Match[str]) -> str:
        return _QUOTED_RE.sub(f'"{new_version}"', match.group(0), count=1)

    updated, count = _VERSION_CONSTANT_RE.subn(replace_value, content, count=1)
    if count == 0:
        raise VersionNotFoundError(f"No VERSION constant found in {file_path.name}")

    file_path.write_text(updated, encoding="utf-8")
