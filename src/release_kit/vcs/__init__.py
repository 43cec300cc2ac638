"""Version control integration."""

from __future__ import annotations

from release_kit.vcs.git import GitRepository, github_web_url

__all__ = ["GitRepository", "github_web_url"]
