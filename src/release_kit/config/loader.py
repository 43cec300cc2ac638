"""Manifest discovery and configuration loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_kit.config.models import ReleaseKitConfig
from release_kit.exceptions import ConfigNotFoundError, ConfigValidationError

MANIFEST_NAMES = ("deno.json", "deno.jsonc")
CONFIG_KEY = "release"


def find_manifest(start: Path | None = None) -> Path:
    """Find the project manifest, searching from ``start`` upwards.

    Args:
        start: Directory to start from (defaults to cwd)

    Returns:
        Path to ``deno.json`` or ``deno.jsonc``

    Raises:
        ConfigNotFoundError: If no manifest exists in ``start`` or its parents
    """
    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        for name in MANIFEST_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    raise ConfigNotFoundError(f"No deno.json or deno.jsonc found in {start} or its parents")


def find_project_root(path: str | Path | None = None) -> Path:
    """Return ``path`` as given, or the directory of the nearest manifest above cwd.

    Raises:
        ConfigNotFoundError: If no path is given and no manifest can be found
    """
    if path:
        return Path(path)
    return find_manifest().parent


def load_manifest(path: Path) -> dict[str, Any]:
    """Read and parse a JSON manifest.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If it is not a JSON object
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Manifest not found: {path}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Failed to parse {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{path.name} must contain a JSON object")
    return data


def extract_release_config(manifest: dict[str, Any]) -> dict[str, Any]:
    """Return the ``"release"`` object of a manifest, or an empty dict."""
    section = manifest.get(CONFIG_KEY, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f"'{CONFIG_KEY}' in the manifest must be an object")
    return section


def load_config(project_path: Path | None = None) -> ReleaseKitConfig:
    """Load release-kit configuration for a project directory.

    A missing manifest yields the defaults; the driver reports the missing
    manifest itself when it tries to read project metadata.

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    project_path = project_path or Path.cwd()
    manifest_path = project_path / MANIFEST_NAMES[0]
    if not manifest_path.is_file():
        return ReleaseKitConfig()

    section = extract_release_config(load_manifest(manifest_path))
    try:
        return ReleaseKitConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid release configuration: {e}") from e
