"""Error types for the release notes pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

NotesErrorKind = Literal[
    "tool_missing",
    "invalid_tag",
    "tag_exists",
    "network_failed",
    "history_fetch_failed",
    "publish_failed",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class NotesError:
    """Canonical error payload.

    Every failure of a run ends as one of these. Only the CLI turns the
    ``kind`` into an exit code.
    """

    kind: NotesErrorKind
    message: str
    hint: str | None = None
