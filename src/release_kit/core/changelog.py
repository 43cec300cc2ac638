"""Changelog section extraction and header dating.

The changelog is treated as a flat list of lines. Only ATX heading lines
matter: a version section starts at a heading that names the version and
ends at the next heading of the same or a shallower level.

Header matching is deliberately liberal so hand-written changelogs work:

    ## [1.2.3] - 2024-01-15     (Keep a Changelog)
    ## [1.2.3]                  (no date)
    ## 1.2.3 - 2024-01-15       (no brackets)
    ### v1.2.3                  (v prefix, any level)
    ## [Unreleased]             (pending changes)

One tightening on top of that: the version must be followed by something
other than a version character, so ``1.0.1`` never selects the section of
``1.0.10`` or ``1.0.1-rc.1``. Anything after that boundary is ignored.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from functools import lru_cache, partial

UNRELEASED = "Unreleased"

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_HEADING_RE = re.compile(r"^(#{1,6})\s+\S")
_LEADING_V_RE = re.compile(r"^[vV]")
_TITLE_RE = re.compile(r"^#\s+")
# Keep a Changelog link definitions, e.g. "[1.2.3]: https://github.com/..."
_LINK_REFS_RE = re.compile(r"\n\n\[[\w.+-]+\]:\s+https?://.+$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class HeadingMatch:
    """Structured result of matching a heading line against a token."""

    level: int
    token: str
    had_brackets: bool
    had_v_prefix: bool
    date: str | None


@dataclass(frozen=True, slots=True)
class ChangelogUpdate:
    """Result of :func:`update_changelog_header`."""

    text: str
    created: bool


@lru_cache(maxsize=64)
def _heading_pattern(token: str, *, allow_v_prefix: bool) -> re.Pattern[str]:
    prefix = r"(?P<v>v)?" if allow_v_prefix else ""
    return re.compile(
        rf"^(?P<hashes>#{{1,6}})\s*(?P<open>\[)?{prefix}(?P<token>{re.escape(token)})"
        r"(?![0-9A-Za-z.+-])(?P<close>\])?"
        r"(?:\s+-\s+(?P<date>\d{4}-\d{2}-\d{2}))?",
        re.IGNORECASE,
    )


def match_heading(line: str, token: str, *, allow_v_prefix: bool = True) -> HeadingMatch | None:
    """Match ``line`` as a heading naming ``token``.

    Matching is case-insensitive. Brackets, a ``v`` prefix and a trailing
    ``- YYYY-MM-DD`` date are all optional; anything after that is ignored.
    The token must not run on into a longer version (``1.0.1`` does not
    match ``1.0.10`` or ``1.0.1-rc.1``).
    """
    match = _heading_pattern(token, allow_v_prefix=allow_v_prefix).match(line)
    if match is None:
        return None
    return HeadingMatch(
        level=len(match.group("hashes")),
        token=match.group("token"),
        had_brackets=match.group("open") is not None,
        had_v_prefix=allow_v_prefix and match.group("v") is not None,
        date=match.group("date"),
    )


def match_version_heading(line: str, version: str) -> HeadingMatch | None:
    """Match a heading for ``version`` (already stripped of its ``v`` prefix)."""
    return match_heading(line, version)


def match_unreleased_heading(line: str) -> HeadingMatch | None:
    return match_heading(line, UNRELEASED, allow_v_prefix=False)


def normalize_version(version: str) -> str:
    """Strip a single leading ``v``/``V`` from a version argument."""
    return _LEADING_V_RE.sub("", version)


def heading_level(line: str) -> int | None:
    """Return the ATX heading level of ``line``, or None for non-headings."""
    match = _HEADING_RE.match(line)
    if match is None:
        return None
    return len(match.group(1))


def split_lines(text: str) -> list[str]:
    return _LINE_SPLIT_RE.split(text)


def _find_first(
    lines: list[str],
    matcher: Callable[[str], HeadingMatch | None],
) -> tuple[int, HeadingMatch] | None:
    for index, line in enumerate(lines):
        found = matcher(line)
        if found is not None:
            return index, found
    return None


def find_section(lines: list[str], version: str) -> tuple[int, int] | None:
    """Locate the ``[start, end)`` line range of a version's section.

    ``version`` must already be stripped of its ``v`` prefix. Falls back to
    the Unreleased section when the version has no heading.
    """
    found = _find_first(lines, partial(match_version_heading, version=version))
    if found is None:
        found = _find_first(lines, match_unreleased_heading)
    if found is None:
        return None
    start, heading = found
    start_level = heading.level

    end = len(lines)
    for index in range(start + 1, len(lines)):
        level = heading_level(lines[index])
        if level is not None and level <= start_level:
            end = index
            break
    return start, end


def extract_changelog_section(text: str, version: str) -> str:
    """Extract the changelog section for ``version``.

    Args:
        text: Full changelog text
        version: Version to look for, with or without a ``v`` prefix

    Returns:
        The section including its heading line as written, with surrounding
        blank lines and trailing link definitions removed. When neither the
        version nor an Unreleased section exists, a message saying so.
    """
    version = normalize_version(version)
    lines = split_lines(text)

    bounds = find_section(lines, version)
    if bounds is None:
        return (
            f"No changelog entry found for version {version} "
            f"and no '{UNRELEASED}' section present."
        )

    start, end = bounds
    content = "\n".join(lines[start:end]).strip()
    return _LINK_REFS_RE.sub("", content)


def today_iso() -> str:
    return datetime.now(UTC).strftime("%Y-%m-%d")


def format_release_header(level: int, version: str, date: str) -> str:
    return f"{'#' * level} [{version}] - {date}"


def update_changelog_header(
    text: str,
    version: str,
    today: str | None = None,
) -> ChangelogUpdate:
    """Date the changelog header for ``version``.

    An existing header for the version is rewritten to the canonical
    ``## [1.2.3] - YYYY-MM-DD`` form, keeping its heading level. Otherwise
    the Unreleased header is converted. If neither exists, a new section is
    inserted below the document title.

    Args:
        text: Full changelog text
        version: Version being released, with or without a ``v`` prefix
        today: Release date as ``YYYY-MM-DD``; defaults to today's UTC date

    Returns:
        The updated text and whether a new section was created
    """
    version = normalize_version(version)
    date = today or today_iso()
    lines = split_lines(text)

    matchers = (partial(match_version_heading, version=version), match_unreleased_heading)
    for matcher in matchers:
        found = _find_first(lines, matcher)
        if found is not None:
            index, heading = found
            lines[index] = format_release_header(heading.level, version, date)
            return ChangelogUpdate(text="\n".join(lines), created=False)

    insert_at = _title_insertion_point(lines)
    lines[insert_at:insert_at] = [
        "",
        format_release_header(2, version, date),
        "",
        "### Added",
        "",
        "- Initial release",
        "",
    ]
    return ChangelogUpdate(text="\n".join(lines), created=True)


def _title_insertion_point(lines: list[str]) -> int:
    """Index of the first non-blank line after the ``# `` title, else 0."""
    for index, line in enumerate(lines):
        if _TITLE_RE.match(line):
            insert_at = index + 1
            while insert_at < len(lines) and lines[insert_at].strip() == "":
                insert_at += 1
            return insert_at
    return 0
