"""Pydantic models for release-kit configuration.

Configuration lives in the optional ``"release"`` object of the
project manifest (``deno.json``). Every field has a default, so a
manifest without that object is fully usable.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class GitConfig(BaseModel):
    """Git remote settings."""

    model_config = ConfigDict(extra="forbid")

    remote: str = "origin"
    push: bool = Field(default=True, description="Push commits and tags after tagging")


class ReleaseKitConfig(BaseModel):
    """Top-level release-kit configuration."""

    model_config = ConfigDict(extra="forbid")

    manifest_path: Path = Path("deno.json")
    changelog_path: Path = Path("CHANGELOG.md")
    tag_prefix: str = "v"
    check_command: list[str] = Field(default_factory=lambda: ["deno", "task", "check"])
    commit_message: str = Field(
        default="chore: release {tag}",
        description="Commit subject; {version} and {tag} are substituted",
    )
    default_entry_point: str = "./src/main.ts"
    git: GitConfig = Field(default_factory=GitConfig)

    def tag_for(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"

    def commit_subject(self, version: str) -> str:
        return self.commit_message.format(version=version, tag=self.tag_for(version))
