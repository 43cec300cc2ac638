"""Shared fixtures for release-kit tests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_CHANGELOG = """\
# Changelog

## [Unreleased]

### Added
- thing

## [1.0.0] - 2024-01-01

- old
"""


@pytest.fixture
def deno_project(tmp_path: Path) -> Path:
    """Create a minimal Deno project with manifest, entry point and changelog."""
    manifest = {
        "name": "@acme/widget",
        "version": "1.0.0",
        "exports": "./src/main.ts",
        "tasks": {"check": "deno fmt --check && deno lint && deno test"},
    }
    (tmp_path / "deno.json").write_text(json.dumps(manifest, indent=2) + "\n")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.ts").write_text(
        'export const VERSION = "1.0.0";\n\nconsole.log(VERSION);\n'
    )
    (tmp_path / "CHANGELOG.md").write_text(SAMPLE_CHANGELOG)
    return tmp_path
