from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from relnotes.core.config import Config
from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.markdown import header_section, repository_section
from relnotes.notes.model import CommitEntry, NotesDocument
from relnotes.output.console import ConsoleProtocol

# (repository, window start) -> commits, newest first
CollectFn = Callable[[str, datetime | None], Result[list[CommitEntry], NotesError]]


def assemble_notes(
    *,
    repositories: Sequence[str],
    window_start: datetime | None,
    tag: str,
    collect: CollectFn,
    config: Config,
    console: ConsoleProtocol,
    now: datetime | None = None,
) -> Result[NotesDocument, NotesError]:
    """Build the release notes document.

    The header always comes first. Repositories are processed one at a time
    in the given order and only those with commits get a section. The first
    collection failure aborts the whole assembly.
    """
    generated_at = now if now is not None else datetime.now(UTC)
    parts: list[str] = [header_section(tag, generated_at)]
    counts: list[tuple[str, int]] = []

    for repo in repositories:
        console.info(f"processing {repo}...")
        commits = collect(repo, window_start)
        if isinstance(commits, Err):
            return commits

        if not commits.value:
            continue
        parts.append(repository_section(config, repo, commits.value))
        counts.append((repo, len(commits.value)))

    return Ok(
        NotesDocument(
            tag=tag,
            generated_at=generated_at,
            text="".join(parts),
            commit_counts=tuple(counts),
        )
    )
