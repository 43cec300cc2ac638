"""release-kit: version bumps, changelog dating and git tagging for Deno projects."""

from __future__ import annotations

__version__ = "0.1.0"
