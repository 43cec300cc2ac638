"""Semantic version parsing, formatting and bumping.

Only what a release needs is implemented: parsing of the SemVer 2.0
grammar, rendering back to canonical form, and major/minor/patch
increments. Precedence comparison is not provided.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from release_kit.exceptions import ParseError

_NUM = r"0|[1-9]\d*"
_PRERELEASE_ID = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_ID = r"[0-9a-zA-Z-]+"

SEMVER_RE = re.compile(
    rf"^v?(?P<major>{_NUM})\.(?P<minor>{_NUM})\.(?P<patch>{_NUM})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_ID}(?:\.{_PRERELEASE_ID})*))?"
    rf"(?:\+(?P<build>{_BUILD_ID}(?:\.{_BUILD_ID})*))?$"
)


class BumpType(StrEnum):
    """Relative version increments accepted in place of an explicit version."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


_BUMP_KEYWORDS = frozenset(bump.value for bump in BumpType)


@dataclass(frozen=True, slots=True)
class SemanticVersion:
    """A parsed ``MAJOR.MINOR.PATCH[-prerelease][+build]`` version."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = field(default=())
    build: tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        """Parse a version string.

        Surrounding whitespace and a single leading ``v`` are tolerated.

        Raises:
            ParseError: If the text is not a valid semantic version
        """
        match = SEMVER_RE.match(text.strip())
        if match is None:
            raise ParseError(text)

        prerelease = match.group("prerelease")
        build = match.group("build")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=tuple(prerelease.split(".")) if prerelease else (),
            build=tuple(build.split(".")) if build else (),
        )

    def bump(self, bump_type: BumpType) -> SemanticVersion:
        """Return the next clean release for the given increment.

        Less significant components are reset to zero; prerelease and
        build metadata are dropped.
        """
        match bump_type:
            case BumpType.MAJOR:
                return SemanticVersion(self.major + 1, 0, 0)
            case BumpType.MINOR:
                return SemanticVersion(self.major, self.minor + 1, 0)
            case BumpType.PATCH:
                return SemanticVersion(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump type: {bump_type}")

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


def parse_version(text: str) -> SemanticVersion:
    """Parse ``text`` into a :class:`SemanticVersion`."""
    return SemanticVersion.parse(text)


def format_version(version: SemanticVersion) -> str:
    """Render a version in canonical form."""
    return str(version)


def next_version(current: str, request: str) -> SemanticVersion:
    """Compute the version that follows ``current``.

    Args:
        current: The project's current version
        request: ``major``, ``minor`` or ``patch`` (exact, lower case), or an
            explicit version. An explicit version is taken as-is, even when it
            is lower than or equal to ``current``.

    Returns:
        The next version

    Raises:
        ParseError: If ``current`` or an explicit ``request`` is not a valid version
    """
    parsed = SemanticVersion.parse(current)
    if request in _BUMP_KEYWORDS:
        return parsed.bump(BumpType(request))
    return SemanticVersion.parse(request)
