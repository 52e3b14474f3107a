"""Per-repository commit collection."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from relnotes.core.config import Config
from relnotes.core.result import Err, Ok, Result
from relnotes.git.repository import BareRepository, GitError, LogEntry
from relnotes.notes.errors import NotesError
from relnotes.notes.model import CommitEntry
from relnotes.notes.window import format_since


def _history_error(repo: str, error: GitError) -> NotesError:
    return NotesError(
        kind="history_fetch_failed",
        message=f"failed to read history of {repo} (git {error.command})",
        hint=error.message,
    )


def to_commit_entries(*, config: Config, repo: str, log: list[LogEntry]) -> list[CommitEntry]:
    return [
        CommitEntry(
            short_sha=entry.short_sha,
            sha=entry.sha,
            summary=entry.subject,
            url=config.github.commit_url(repo, entry.sha),
        )
        for entry in log
    ]


def read_commits(
    *,
    repository: BareRepository,
    repo: str,
    window_start: datetime | None,
    config: Config,
) -> Result[list[CommitEntry], NotesError]:
    """Commits of an already cloned repository inside the window, newest first."""
    since = format_since(window_start) if window_start is not None else None
    log = repository.log(first_parent=config.notes.first_parent, since=since)
    if isinstance(log, Err):
        return Err(_history_error(repo, log.error))
    return Ok(to_commit_entries(config=config, repo=repo, log=log.value))


def collect_commits(
    *,
    repo: str,
    window_start: datetime | None,
    workspace_dir: Path,
    config: Config,
) -> Result[list[CommitEntry], NotesError]:
    """Clone ``repo`` bare into ``workspace_dir`` and read its new commits.

    A clone failure aborts the run; it is never reported as "no commits".
    """
    cloned = BareRepository.clone(config.github.clone_url(repo), workspace_dir / f"{repo}.git")
    if isinstance(cloned, Err):
        return Err(_history_error(repo, cloned.error))

    return read_commits(
        repository=cloned.value,
        repo=repo,
        window_start=window_start,
        config=config,
    )
