"""Thin wrapper around the git command line.

Every operation runs ``git`` as a subprocess in the repository
directory and raises :class:`GitError` when it fails.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from release_kit.exceptions import GitError

_SSH_GITHUB_RE = re.compile(r"^git@github\.com:")


def github_web_url(remote_url: str) -> str:
    """Convert a remote URL into the browsable repository URL."""
    url = remote_url.strip()
    url = _SSH_GITHUB_RE.sub("https://github.com/", url)
    return re.sub(r"\.git$", "", url)


class GitRepository:
    """A git working copy."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or Path.cwd()

    def _run(self, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {args[0]} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    def is_repository(self) -> bool:
        try:
            return self._run("rev-parse", "--is-inside-work-tree") == "true"
        except GitError:
            return False

    def commit_all(self, message: str) -> None:
        """Commit all tracked changes (``git commit -am``)."""
        self._run("commit", "-am", message)

    def create_tag(self, name: str, message: str) -> None:
        """Create an annotated tag."""
        self._run("tag", "-a", name, "-m", message)

    def push(self, remote: str | None = None) -> None:
        self._run("push", *([remote] if remote else []))

    def push_tags(self, remote: str | None = None) -> None:
        self._run("push", *([remote] if remote else []), "--tags")

    def get_remote_url(self, remote: str = "origin") -> str | None:
        """Return the URL of ``remote``, or None if it is not configured."""
        try:
            url = self._run("config", "--get", f"remote.{remote}.url")
        except GitError:
            return None
        return url or None
