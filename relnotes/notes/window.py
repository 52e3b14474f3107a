"""Commit window resolution.

Commits are "new" when they were committed after the most recent published
(non-draft, non-prerelease) release of the manifest repository.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from relnotes.core.config import Config
from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.model import GhRelease, ReleaseHost

GIT_SINCE_FORMAT = "%Y-%m-%d %H:%M:%S +0000"


def resolve_window(releases: Iterable[GhRelease]) -> datetime | None:
    """Start of the commit window, or None to include all history.

    ``releases`` is expected newest first, as the releases API returns them.
    """
    for release in releases:
        if release.draft or release.prerelease:
            continue
        return release.published_at_utc
    return None


def format_since(start: datetime) -> str:
    """Format ``start`` for ``git log --since``."""
    return start.astimezone(UTC).strftime(GIT_SINCE_FORMAT)


def fetch_window(*, config: Config, host: ReleaseHost) -> Result[datetime | None, NotesError]:
    releases = host.list_releases(config.github.manifest_slug)
    if isinstance(releases, Err):
        return releases
    return Ok(resolve_window(releases.value))
