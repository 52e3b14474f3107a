"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relnotes.core.errors import ErrorCode
from relnotes.notes.errors import NotesError

if TYPE_CHECKING:
    from relnotes.output.console import ConsoleProtocol

__all__ = ["print_notes_error", "notes_error_exit_code"]


def print_notes_error(error: NotesError, console: ConsoleProtocol) -> None:
    console.error(error.message, hint=error.hint)


def notes_error_exit_code(error: NotesError) -> int:
    match error.kind:
        case "tool_missing":
            return int(ErrorCode.TOOL_MISSING)
        case "invalid_tag" | "tag_exists":
            return int(ErrorCode.TAG_ERROR)
        case "network_failed" | "history_fetch_failed":
            return int(ErrorCode.NETWORK_ERROR)
        case "publish_failed":
            return int(ErrorCode.PUBLISH_ERROR)
        case "io_failed":
            return int(ErrorCode.IO_ERROR)
