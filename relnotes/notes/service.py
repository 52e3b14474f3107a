"""End-to-end release notes run.

Order of operations:
1. validate the tag (format, then "already published")
2. list and select repositories
3. resolve the commit window from the manifest's releases
4. inside a scoped workspace: collect and assemble, write the notes file,
   then publish

Everything before step 4 is read-only, so bad input never creates a
workspace. Publishing only starts once the whole document is assembled.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from relnotes.core.config import Config
from relnotes.core.result import Err, Ok, Result
from relnotes.notes.assembler import assemble_notes
from relnotes.notes.collector import collect_commits
from relnotes.notes.errors import NotesError
from relnotes.notes.model import CommitEntry, NotesDocument, PublishedRelease, ReleaseHost
from relnotes.notes.publisher import publish_release
from relnotes.notes.repos import resolve_repositories
from relnotes.notes.tag import validate_release_tag
from relnotes.notes.window import fetch_window, format_since
from relnotes.notes.workspace import release_workspace
from relnotes.output.console import ConsoleProtocol, Style
from relnotes.platform.tools import REQUIRED_TOOLS, missing_tools

# (repository, window start, workspace dir) -> commits
WorkspaceCollectFn = Callable[[str, datetime | None, Path], Result[list[CommitEntry], NotesError]]


@dataclass(frozen=True, slots=True)
class RunOutcome:
    document: NotesDocument
    release: PublishedRelease | None  # None for dry runs


def check_tools(
    tools: Iterable[str] = REQUIRED_TOOLS,
    *,
    which: Callable[[str], str | None] = shutil.which,
) -> Result[None, NotesError]:
    missing = missing_tools(tools, which=which)
    if missing:
        return Err(
            NotesError(
                kind="tool_missing",
                message=f"required tool(s) not found: {', '.join(missing)}",
                hint="Install git and the GitHub CLI (https://cli.github.com/)",
            )
        )
    return Ok(None)


def _default_collect(config: Config) -> WorkspaceCollectFn:
    def collect(
        repo: str, window_start: datetime | None, workspace_dir: Path
    ) -> Result[list[CommitEntry], NotesError]:
        return collect_commits(
            repo=repo,
            window_start=window_start,
            workspace_dir=workspace_dir,
            config=config,
        )

    return collect


def write_notes(path: Path, document: NotesDocument) -> Result[Path, NotesError]:
    try:
        path.write_text(document.text, encoding="utf-8")
    except OSError as e:
        return Err(
            NotesError(
                kind="io_failed",
                message=f"failed to write release notes: {e}",
                hint=str(path),
            )
        )
    return Ok(path)


def generate_release(
    *,
    tag: str,
    config: Config,
    console: ConsoleProtocol,
    host: ReleaseHost,
    base_dir: Path,
    dry_run: bool = False,
    collect: WorkspaceCollectFn | None = None,
    now: datetime | None = None,
) -> Result[RunOutcome, NotesError]:
    """Generate the notes for ``tag`` and publish them to the manifest repository.

    Args:
        tag: Release tag to create
        config: Organization and notes settings
        console: Progress and diagnostics output
        host: Hosted git service (``GhClient`` in production)
        base_dir: Directory that ``notes.workspace_parent`` is relative to
        dry_run: Assemble the notes but do not publish
        collect: Replaces cloning + ``git log`` (tests)
        now: Generation time embedded in the header (tests)
    """
    valid = validate_release_tag(tag, config=config, host=host)
    if isinstance(valid, Err):
        return valid

    repos = resolve_repositories(config=config, host=host)
    if isinstance(repos, Err):
        return repos

    window = fetch_window(config=config, host=host)
    if isinstance(window, Err):
        return window
    window_start = window.value

    if window_start is None:
        console.print("no previous release: including all history", Style.DIM)
    else:
        console.print(f"commits since {format_since(window_start)}", Style.DIM)

    collect_fn = collect or _default_collect(config)

    with release_workspace(base_dir / config.notes.workspace_parent) as workspace_dir:
        assembled = assemble_notes(
            repositories=repos.value,
            window_start=window_start,
            tag=tag,
            collect=lambda repo, start: collect_fn(repo, start, workspace_dir),
            config=config,
            console=console,
            now=now,
        )
        if isinstance(assembled, Err):
            return assembled
        document = assembled.value

        if dry_run:
            return Ok(RunOutcome(document=document, release=None))

        written = write_notes(workspace_dir / config.notes.file_name, document)
        if isinstance(written, Err):
            return written

        published = publish_release(tag=tag, notes_path=written.value, config=config, host=host)
        if isinstance(published, Err):
            return published

        return Ok(RunOutcome(document=document, release=published.value))
