"""Release tag validation.

The tag ends up in ``gh`` arguments and API URLs, so anything that could
escape a path or a shell word is rejected before it is used anywhere.
"""

from __future__ import annotations

import re

from relnotes.core.config import Config
from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.model import ReleaseHost

_UNEXPECTED_CHARS = re.compile(r"[*;$`|&<>(){}\s]")
_PUBLISHED_AT = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}Z$")


def check_tag_format(tag: str) -> Result[str, NotesError]:
    """Reject empty tags, path traversal, leading dots and shell metacharacters."""
    if not tag or ".." in tag or tag.startswith(".") or _UNEXPECTED_CHARS.search(tag):
        return Err(
            NotesError(
                kind="invalid_tag",
                message=f"invalid release tag format: {tag}",
                hint="Use a plain tag such as v1.2.0",
            )
        )
    return Ok(tag)


def is_published_timestamp(value: str | None) -> bool:
    """True when ``value`` is an ISO-8601 UTC timestamp (``YYYY-MM-DDTHH:MM:SSZ``)."""
    return value is not None and _PUBLISHED_AT.match(value) is not None


def validate_tag(tag: str, *, published_at: str | None) -> Result[str, NotesError]:
    """Validate ``tag`` given the ``published_at`` of its existing release, if any.

    Drafts have no publication timestamp and do not block the tag.
    """
    fmt = check_tag_format(tag)
    if isinstance(fmt, Err):
        return fmt

    if is_published_timestamp(published_at):
        return Err(
            NotesError(
                kind="tag_exists",
                message=f"release {tag} already exists",
                hint=f"published at {published_at}",
            )
        )
    return Ok(tag)


def validate_release_tag(tag: str, *, config: Config, host: ReleaseHost) -> Result[str, NotesError]:
    """Validate the format, then query the manifest repository for the tag."""
    fmt = check_tag_format(tag)
    if isinstance(fmt, Err):
        return fmt

    existing = host.release_by_tag(config.github.manifest_slug, tag)
    if isinstance(existing, Err):
        return existing

    release = existing.value
    return validate_tag(tag, published_at=release.published_at if release else None)
