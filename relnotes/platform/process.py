"""Subprocess execution for the ``git`` and ``gh`` adapters.

Commands never prompt: a credential or pager prompt would hang an
unattended run, so both tools are told to fail instead. Failures come back
as ``ProcessError`` values rather than exceptions.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from relnotes.core.result import Err, Ok, Result

__all__ = ["EXIT_NOT_FOUND", "EXIT_TIMEOUT", "ProcessError", "non_interactive_env", "run"]

# Shell conventions, so callers can tell "never ran" from a real exit status.
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127

_NON_INTERACTIVE = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_PAGER": "cat",
    "GH_PROMPT_DISABLED": "1",
    "GH_PAGER": "cat",
    "NO_COLOR": "1",
}


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out or could not be started."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"

    @property
    def detail(self) -> str:
        """Most useful text to show the operator."""
        return self.stderr.strip() or self.stdout.strip() or str(self)

    @property
    def timed_out(self) -> bool:
        return self.returncode == EXIT_TIMEOUT


def non_interactive_env(extra: Mapping[str, str] | None = None) -> dict[str, str]:
    env = dict(os.environ)
    env.update(_NON_INTERACTIVE)
    if extra:
        env.update(extra)
    return env


def run(
    cmd: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return its stdout.

    ``env`` entries are added on top of the non-interactive environment.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            command,
            cwd=str(cwd),
            env=non_interactive_env(env),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return Err(ProcessError(command, EXIT_TIMEOUT, partial, f"command timed out after {timeout}s"))
    except FileNotFoundError as e:
        return Err(ProcessError(command, EXIT_NOT_FOUND, "", f"command not found: {e.filename or command[0]}"))
    except OSError as e:
        return Err(ProcessError(command, -1, "", str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
