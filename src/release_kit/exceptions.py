"""Exception hierarchy for release-kit.

Library code raises these; the CLI layer decides how they are reported
and which exit code is used.
"""

from __future__ import annotations


class ReleaseKitError(Exception):
    """Base class for all release-kit errors."""


class ParseError(ReleaseKitError):
    """A string could not be parsed as a semantic version."""

    def __init__(self, text: str, message: str | None = None) -> None:
        self.text = text
        super().__init__(message or f"Invalid version: {text}")


class ConfigError(ReleaseKitError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No project manifest was found."""


class ConfigValidationError(ConfigError):
    """The manifest or its release configuration is invalid."""


class ProjectError(ReleaseKitError):
    """A project file could not be read or updated."""


class ManifestError(ProjectError):
    """The project manifest lacks a required field."""


class VersionNotFoundError(ProjectError):
    """A version string or constant could not be located in a file."""


class GitError(ReleaseKitError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


class InstallError(ReleaseKitError):
    """Template installation into a target project failed."""
