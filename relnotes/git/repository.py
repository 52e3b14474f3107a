"""Bare git repository abstraction.

Release notes only need history metadata, so repositories are cloned bare
(no working tree) and read with ``git log``. All operations return Result
types.

Usage:
    match BareRepository.clone(url, dest):
        case Ok(repo):
            entries = repo.log(first_parent=True, since="2024-01-01 00:00:00 +0000")
        case Err(e):
            print(f"clone failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relnotes.core.result import Err, Ok, Result
from relnotes.platform.process import ProcessError
from relnotes.platform.process import run as run_process

GIT_TIMEOUT_SECONDS = 30.0
GIT_CLONE_TIMEOUT_SECONDS = 15 * 60.0

# Unit and record separators keep subjects with arbitrary text parseable.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%h{_FIELD_SEP}%s{_RECORD_SEP}"

__all__ = [
    "BareRepository",
    "GitError",
    "LogEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One commit as printed by ``git log``."""

    sha: str
    short_sha: str
    subject: str


class BareRepository:
    """A bare clone on local disk.

    Attributes:
        path: Path to the ``<name>.git`` directory
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def clone(cls, url: str, dest: Path) -> Result[BareRepository, GitError]:
        """Clone ``url`` into ``dest`` with ``git clone --quiet --bare``.

        Returns:
            Ok(BareRepository) on success
            Err(GitError) on failure (network, auth, unknown repository)
        """
        result = run_process(
            ["git", "clone", "--quiet", "--bare", url, str(dest)],
            cwd=dest.parent,
            timeout=GIT_CLONE_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(_git_error("clone", result.error, fallback=f"clone failed: {url}"))
        return Ok(cls(dest))

    def has_commits(self) -> Result[bool, GitError]:
        """Ok(False) only for an unborn HEAD (repository without commits).

        ``rev-parse --verify --quiet`` exits 1 silently for an unborn HEAD.
        Any other failure is an error, never "no commits".
        """
        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD"])
        if isinstance(result, Ok):
            return Ok(True)
        error = result.error
        if error.returncode == 1 and not error.stderr.strip():
            return Ok(False)
        return Err(_git_error("rev-parse", error, fallback="cannot resolve HEAD"))

    def log(
        self,
        *,
        first_parent: bool = True,
        since: str | None = None,
    ) -> Result[list[LogEntry], GitError]:
        """List commits reachable from HEAD, newest first.

        Args:
            first_parent: Follow only the first parent at merge commits
            since: Passed as ``--since``; git compares it to the committer date

        Returns:
            Ok(list of LogEntry), empty for a repository without commits
            Err(GitError) on failure
        """
        has_commits = self.has_commits()
        if isinstance(has_commits, Err):
            return has_commits
        if not has_commits.value:
            return Ok([])

        args = ["log"]
        if first_parent:
            args.append("--first-parent")
        if since is not None:
            args.append(f"--since={since}")
        args.append(f"--pretty=format:{_LOG_FORMAT}")

        result = self._run(args)
        match result:
            case Err(e):
                return Err(_git_error("log", e, fallback="git log failed"))
            case Ok(stdout):
                return Ok(_parse_log(stdout))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=GIT_TIMEOUT_SECONDS,
        )


def _git_error(command: str, error: ProcessError, *, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )


def _parse_log(output: str) -> list[LogEntry]:
    entries: list[LogEntry] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        parts = record.split(_FIELD_SEP, 2)
        if len(parts) != 3:
            continue
        sha, short_sha, subject = parts
        entries.append(LogEntry(sha=sha, short_sha=short_sha, subject=subject))
    return entries
