from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from relnotes import __version__
from relnotes.cli.context import CLIContext
from relnotes.core.config import Config
from relnotes.core.errors import ErrorCode
from relnotes.core.result import Err, Ok
from relnotes.github.gh import GhClient
from relnotes.notes.errors import NotesError
from relnotes.notes.model import NotesDocument, PublishedRelease
from relnotes.notes.service import RunOutcome
from relnotes.output.console import MockConsole

DOCUMENT = NotesDocument(
    tag="v1.0",
    generated_at=datetime(2024, 5, 1, tzinfo=UTC),
    text="<details>\n<summary>release info</summary>\n\n- tag: `v1.0`\n\n</details>\n\n",
    commit_counts=(("manifest", 2),),
)


def _ctx(tmp_path: Path) -> CLIContext:
    return CLIContext(
        cwd=tmp_path,
        config=Config(),
        console=MockConsole(),
        host=GhClient(cwd=tmp_path),
    )


def _patch(monkeypatch: pytest.MonkeyPatch, ctx: CLIContext, result: object) -> None:
    import relnotes.cli.app as app_cmd

    def fake_generate(**_: object) -> object:
        if isinstance(result, BaseException):
            raise result
        return result

    monkeypatch.setattr(app_cmd, "build_context", lambda _path: ctx)
    monkeypatch.setattr(app_cmd, "generate_release", fake_generate)


def _release(*, tag: str = "v1.0", dry_run: bool = False) -> None:
    import relnotes.cli.app as app_cmd

    app_cmd.release(tag=tag, config=None, dry_run=dry_run, version=False)


def test_publish_reports_release(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    release = PublishedRelease(
        tag="v1.0", repo="un-ch/manifest", url="https://github.com/un-ch/manifest/releases/tag/v1.0"
    )
    _patch(monkeypatch, ctx, Ok(RunOutcome(document=DOCUMENT, release=release)))

    _release()

    console = ctx.console
    assert isinstance(console, MockConsole)
    assert "manifest: 2 commit(s)" in console.messages
    assert "OK published v1.0 in un-ch/manifest" in console.messages
    assert release.url in console.messages
    assert not console.has_error()


def test_dry_run_prints_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = _ctx(tmp_path)
    _patch(monkeypatch, ctx, Ok(RunOutcome(document=DOCUMENT, release=None)))

    _release(dry_run=True)

    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.messages == [DOCUMENT.text]


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("invalid_tag", ErrorCode.TAG_ERROR),
        ("tag_exists", ErrorCode.TAG_ERROR),
        ("network_failed", ErrorCode.NETWORK_ERROR),
        ("history_fetch_failed", ErrorCode.NETWORK_ERROR),
        ("publish_failed", ErrorCode.PUBLISH_ERROR),
        ("io_failed", ErrorCode.IO_ERROR),
    ],
)
def test_failures_map_to_exit_codes(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, kind: str, code: ErrorCode
) -> None:
    ctx = _ctx(tmp_path)
    _patch(monkeypatch, ctx, Err(NotesError(kind=kind, message="boom", hint="try again")))  # type: ignore[arg-type]

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == int(code)
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.stderr_text == "error: boom\nhint: try again"


def test_interrupt_exits_with_tag_error_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _patch(monkeypatch, _ctx(tmp_path), KeyboardInterrupt())

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == int(ErrorCode.INTERRUPTED) == 3
    assert "interrupted" in capsys.readouterr().err


def test_interrupt_while_loading_config(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    import relnotes.cli.app as app_cmd

    def interrupted_context(_path: object) -> CLIContext:
        raise KeyboardInterrupt

    monkeypatch.setattr(app_cmd, "build_context", interrupted_context)

    with pytest.raises(typer.Exit) as exc:
        _release()

    assert exc.value.exit_code == int(ErrorCode.INTERRUPTED)
    assert "interrupted" in capsys.readouterr().err


class TestMain:
    @pytest.fixture(autouse=True)
    def _keep_sigterm(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import relnotes.cli.app as app_cmd

        monkeypatch.setattr(app_cmd.signal, "signal", lambda *_: None)

    def test_missing_tool_wins_over_bad_arguments(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        import relnotes.cli.app as app_cmd

        monkeypatch.setattr(sys, "argv", ["relnotes", "v1.0", "v1.1"])
        monkeypatch.setattr(
            app_cmd,
            "check_tools",
            lambda: Err(NotesError(kind="tool_missing", message="required tool(s) not found: gh")),
        )

        with pytest.raises(SystemExit) as exc:
            app_cmd.main()

        assert exc.value.code == int(ErrorCode.TOOL_MISSING)
        assert "required tool(s) not found: gh" in capsys.readouterr().err

    def test_runs_app_when_tools_present(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import relnotes.cli.app as app_cmd

        ran: list[bool] = []
        monkeypatch.setattr(app_cmd, "check_tools", lambda: Ok(None))
        monkeypatch.setattr(app_cmd, "app", lambda: ran.append(True))

        app_cmd.main()

        assert ran == [True]

    def test_interrupt_during_tool_check(self, monkeypatch: pytest.MonkeyPatch) -> None:
        import relnotes.cli.app as app_cmd

        def interrupted() -> None:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_cmd, "check_tools", interrupted)

        with pytest.raises(SystemExit) as exc:
            app_cmd.main()

        assert exc.value.code == int(ErrorCode.INTERRUPTED)


class TestArguments:
    runner = CliRunner()

    def test_missing_tag_is_usage_error(self) -> None:
        from relnotes.cli.app import app

        result = self.runner.invoke(app, [])
        assert result.exit_code == 2

    def test_extra_argument_is_usage_error(self) -> None:
        from relnotes.cli.app import app

        result = self.runner.invoke(app, ["v1.0", "v1.1"])
        assert result.exit_code == 2

    def test_version(self) -> None:
        from relnotes.cli.app import app

        result = self.runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
