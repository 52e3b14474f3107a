from __future__ import annotations

from pathlib import Path

from relnotes.core.config import Config
from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.model import PublishedRelease, ReleaseHost


def publish_release(
    *,
    tag: str,
    notes_path: Path,
    config: Config,
    host: ReleaseHost,
) -> Result[PublishedRelease, NotesError]:
    """Create the release in the manifest repository, then attach the notes file.

    The same file is the release body and its asset. Neither step is retried.
    """
    repo = config.github.manifest_slug
    created = host.create_release(
        repo=repo,
        tag=tag,
        title=tag,
        notes_file=notes_path,
        latest=config.notes.mark_latest,
    )
    if isinstance(created, Err):
        return created

    uploaded = host.upload_asset(repo=repo, tag=tag, path=notes_path)
    if isinstance(uploaded, Err):
        return uploaded

    return Ok(PublishedRelease(tag=tag, repo=repo, url=created.value))
