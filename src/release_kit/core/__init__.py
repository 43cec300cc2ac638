"""Core release logic for release-kit.

This module contains the pure building blocks:
- Semantic version parsing and bumping
- Changelog section extraction and header dating
"""

from __future__ import annotations

from release_kit.core.changelog import (
    ChangelogUpdate,
    HeadingMatch,
    extract_changelog_section,
    heading_level,
    match_heading,
    match_unreleased_heading,
    match_version_heading,
    update_changelog_header,
)
from release_kit.core.version import (
    BumpType,
    SemanticVersion,
    format_version,
    next_version,
    parse_version,
)

__all__ = [
    # Version
    "BumpType",
    # Changelog
    "ChangelogUpdate",
    "HeadingMatch",
    "SemanticVersion",
    "extract_changelog_section",
    "format_version",
    "heading_level",
    "match_heading",
    "match_unreleased_heading",
    "match_version_heading",
    "next_version",
    "parse_version",
    "update_changelog_header",
]
