from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relnotes.core.config import DEFAULT_CONFIG_FILE, Config, load_config, load_config_or_default
from relnotes.core.errors import ErrorCode
from relnotes.core.result import Err
from relnotes.github.gh import GhClient
from relnotes.notes.model import ReleaseHost
from relnotes.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    config: Config
    console: ConsoleProtocol
    host: ReleaseHost


def build_context(config_path: Path | None = None) -> CLIContext:
    """Load configuration and wire the production collaborators.

    Without ``config_path``, ``relnotes.toml`` in the current directory is
    used when present and built-in defaults otherwise.
    """
    console = RichConsole()
    cwd = Path.cwd()

    if config_path is None:
        config_result = load_config_or_default(cwd / DEFAULT_CONFIG_FILE)
    else:
        config_result = load_config(config_path.expanduser())

    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USAGE_ERROR))

    return CLIContext(
        cwd=cwd,
        config=config_result.value,
        console=console,
        host=GhClient(cwd=cwd),
    )
