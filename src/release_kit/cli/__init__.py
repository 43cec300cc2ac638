"""Command-line interface for release-kit."""

from __future__ import annotations

from release_kit.cli.app import app, main

__all__ = ["app", "main"]
