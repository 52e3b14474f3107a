from __future__ import annotations

import pytest

from relnotes.core.errors import ErrorCode
from relnotes.notes.errors import NotesError, NotesErrorKind
from relnotes.output.console import MockConsole
from relnotes.output.errors import notes_error_exit_code, print_notes_error


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("tool_missing", ErrorCode.TOOL_MISSING),
        ("invalid_tag", ErrorCode.TAG_ERROR),
        ("tag_exists", ErrorCode.TAG_ERROR),
        ("network_failed", ErrorCode.NETWORK_ERROR),
        ("history_fetch_failed", ErrorCode.NETWORK_ERROR),
        ("publish_failed", ErrorCode.PUBLISH_ERROR),
        ("io_failed", ErrorCode.IO_ERROR),
    ],
)
def test_exit_code_per_kind(kind: NotesErrorKind, code: ErrorCode) -> None:
    assert notes_error_exit_code(NotesError(kind=kind, message="x")) == int(code)


def test_print_notes_error() -> None:
    console = MockConsole()
    print_notes_error(
        NotesError(kind="publish_failed", message="failed to create release", hint="HTTP 422"),
        console,
    )
    assert console.messages == ["error: failed to create release", "hint: HTTP 422"]
