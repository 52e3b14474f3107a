from __future__ import annotations

import signal
from pathlib import Path
from types import FrameType
from typing import NoReturn

import typer

from relnotes import __version__
from relnotes.cli.context import build_context
from relnotes.core.errors import ErrorCode
from relnotes.core.result import Err
from relnotes.notes.errors import NotesError
from relnotes.notes.model import NotesDocument
from relnotes.notes.service import check_tools, generate_release
from relnotes.output.console import ConsoleProtocol, RichConsole, Style
from relnotes.output.errors import notes_error_exit_code, print_notes_error


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def _fail(error: NotesError, console: ConsoleProtocol) -> NoReturn:
    print_notes_error(error, console)
    raise typer.Exit(code=notes_error_exit_code(error))


def _print_summary(document: NotesDocument, console: ConsoleProtocol) -> None:
    if not document.commit_counts:
        console.print("no new commits in any repository", Style.DIM)
        return
    for repo, count in document.commit_counts:
        console.print(f"{repo}: {count} commit(s)", Style.DIM)


@app.command()
def release(
    tag: str = typer.Argument(..., help="Release tag to create in the manifest repository."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: ./relnotes.toml if present).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the notes instead of publishing them.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Publish release notes aggregated across the organization's repositories."""
    del version

    try:
        _run_release(tag, config, dry_run)
    except KeyboardInterrupt:
        _interrupted()


def _interrupted() -> NoReturn:
    RichConsole().error("interrupted")
    raise typer.Exit(code=int(ErrorCode.INTERRUPTED))


def _run_release(tag: str, config: Path | None, dry_run: bool) -> None:
    ctx = build_context(config)

    result = generate_release(
        tag=tag,
        config=ctx.config,
        console=ctx.console,
        host=ctx.host,
        base_dir=ctx.cwd,
        dry_run=dry_run,
    )
    if isinstance(result, Err):
        _fail(result.error, ctx.console)

    outcome = result.value
    if outcome.release is None:
        ctx.console.raw(outcome.document.text)
        return

    _print_summary(outcome.document, ctx.console)
    ctx.console.success(f"published {outcome.release.tag} in {outcome.release.repo}")
    if outcome.release.url:
        ctx.console.print(outcome.release.url, Style.DIM)


def _interrupt_on_sigterm(signum: int, frame: FrameType | None) -> None:
    del signum, frame
    raise KeyboardInterrupt


def main() -> None:
    # SIGTERM takes the same path as Ctrl-C so the scoped workspace is removed.
    signal.signal(signal.SIGTERM, _interrupt_on_sigterm)

    # Tools are checked before argument parsing: a missing tool exits 1
    # even when the command line is also wrong.
    try:
        tools = check_tools()
    except KeyboardInterrupt:
        RichConsole().error("interrupted")
        raise SystemExit(int(ErrorCode.INTERRUPTED)) from None
    if isinstance(tools, Err):
        print_notes_error(tools.error, RichConsole())
        raise SystemExit(notes_error_exit_code(tools.error))

    app()
