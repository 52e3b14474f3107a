from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from relnotes.core.result import Result
from relnotes.notes.errors import NotesError

GH_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


@dataclass(frozen=True, slots=True)
class GhRelease:
    """A release record as returned by the releases API."""

    tag: str
    draft: bool
    prerelease: bool
    published_at: str | None  # ISO-8601 UTC, None for drafts

    @property
    def published_at_utc(self) -> datetime | None:
        if self.published_at is None:
            return None
        try:
            return datetime.strptime(self.published_at, GH_TIMESTAMP_FORMAT).replace(tzinfo=UTC)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class CommitEntry:
    """One commit of one repository, ready to be rendered."""

    short_sha: str
    sha: str
    summary: str
    url: str


@dataclass(frozen=True, slots=True)
class NotesDocument:
    """The assembled release notes.

    Attributes:
        tag: Release tag the notes were generated for
        generated_at: UTC generation time embedded in the header
        text: Rendered Markdown, header first
        commit_counts: (repository, count) for every repository that got a section
    """

    tag: str
    generated_at: datetime
    text: str
    commit_counts: tuple[tuple[str, int], ...] = field(default_factory=tuple)

    @property
    def repositories(self) -> tuple[str, ...]:
        return tuple(repo for repo, _ in self.commit_counts)

    @property
    def total_commits(self) -> int:
        return sum(count for _, count in self.commit_counts)


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    tag: str
    repo: str
    url: str


class ReleaseHost(Protocol):
    """Hosted git service operations the pipeline depends on."""

    def list_repositories(self, org: str, limit: int) -> Result[list[str], NotesError]: ...

    def list_releases(self, repo: str) -> Result[list[GhRelease], NotesError]: ...

    def release_by_tag(self, repo: str, tag: str) -> Result[GhRelease | None, NotesError]: ...

    def create_release(
        self, *, repo: str, tag: str, title: str, notes_file: Path, latest: bool
    ) -> Result[str, NotesError]: ...

    def upload_asset(self, *, repo: str, tag: str, path: Path) -> Result[None, NotesError]: ...
