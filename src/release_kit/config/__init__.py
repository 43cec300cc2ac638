"""Configuration management for release-kit."""

from __future__ import annotations

from release_kit.config.loader import load_config
from release_kit.config.models import GitConfig, ReleaseKitConfig

__all__ = [
    "GitConfig",
    "ReleaseKitConfig",
    "load_config",
]
