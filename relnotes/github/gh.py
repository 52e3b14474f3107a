"""GitHub access through the ``gh`` CLI.

Reads (repository listing, release metadata) are idempotent and retried on
transient failures. Writes (release creation, asset upload) run once.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from time import sleep
from urllib.parse import quote

from relnotes.core.result import Err, Ok, Result
from relnotes.core.structured import as_obj_list, as_str_dict, get_str
from relnotes.notes.errors import NotesError, NotesErrorKind
from relnotes.notes.model import GhRelease
from relnotes.platform.process import ProcessError
from relnotes.platform.process import run as run_process

GH_TIMEOUT_SECONDS = 60.0
GH_UPLOAD_TIMEOUT_SECONDS = 5 * 60.0

GH_READ_RETRY_ATTEMPTS = 3
GH_READ_RETRY_DELAY_SECONDS = 1.0

__all__ = [
    "GhClient",
    "create_release",
    "get_release_by_tag",
    "gh_api_json",
    "list_org_repositories",
    "list_releases",
    "upload_release_asset",
]


def _is_transient_gh_error(error: ProcessError) -> bool:
    if error.timed_out:
        return True
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "tls handshake timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    return any(marker in text for marker in markers)


def _is_not_found(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    return "http 404" in text or "not found" in text


def _run_gh_read_raw(
    *,
    cwd: Path,
    cmd: list[str],
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ProcessError]:
    attempts = max(1, retry_attempts)
    result = run_process(cmd, cwd=cwd, timeout=timeout)
    for attempt in range(1, attempts):
        if isinstance(result, Ok) or not _is_transient_gh_error(result.error):
            break
        sleep(GH_READ_RETRY_DELAY_SECONDS * attempt)
        result = run_process(cmd, cwd=cwd, timeout=timeout)
    return result


def run_gh_read(
    *,
    cwd: Path,
    cmd: list[str],
    message: str,
    kind: NotesErrorKind = "network_failed",
    timeout: float = GH_TIMEOUT_SECONDS,
) -> Result[str, NotesError]:
    result = _run_gh_read_raw(cwd=cwd, cmd=cmd, timeout=timeout)
    if isinstance(result, Err):
        return Err(NotesError(kind=kind, message=message, hint=result.error.detail))
    return result


def _loads(text: str, *, what: str) -> Result[object, NotesError]:
    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            NotesError(
                kind="network_failed",
                message=f"gh returned invalid JSON: {e}",
                hint=what,
            )
        )
    return Ok(obj)


def gh_api_json(*, cwd: Path, endpoint: str) -> Result[object, NotesError]:
    result = run_gh_read(cwd=cwd, cmd=["gh", "api", endpoint], message=f"gh api failed: {endpoint}")
    if isinstance(result, Err):
        return result
    return _loads(result.value, what=endpoint)


def list_org_repositories(*, cwd: Path, org: str, limit: int) -> Result[list[str], NotesError]:
    """Names of the repositories visible in ``org``.

    At most ``limit`` names are returned; ``gh repo list`` does not page
    beyond it.
    """
    result = run_gh_read(
        cwd=cwd,
        cmd=["gh", "repo", "list", org, "--limit", str(limit), "--json", "name"],
        message=f"failed to list repositories of {org}",
    )
    if isinstance(result, Err):
        return result

    obj = _loads(result.value, what=f"gh repo list {org}")
    if isinstance(obj, Err):
        return obj

    raw = as_obj_list(obj.value)
    if raw is None:
        return Err(
            NotesError(kind="network_failed", message=f"unexpected repo list payload: {org}")
        )

    names: list[str] = []
    for item in raw:
        d = as_str_dict(item)
        if d is None:
            continue
        name = get_str(d, "name")
        if name is not None:
            names.append(name)
    return Ok(names)


def _parse_release(obj: object) -> GhRelease | None:
    d = as_str_dict(obj)
    if d is None:
        return None

    tag = get_str(d, "tag_name")
    if tag is None:
        return None

    draft = d.get("draft")
    prerelease = d.get("prerelease")
    published_at = d.get("published_at")
    return GhRelease(
        tag=tag,
        draft=draft if isinstance(draft, bool) else False,
        prerelease=prerelease if isinstance(prerelease, bool) else False,
        published_at=published_at if isinstance(published_at, str) else None,
    )


def list_releases(*, cwd: Path, repo: str) -> Result[list[GhRelease], NotesError]:
    """Releases of ``repo`` (``owner/name``), newest first as returned by the API."""
    obj = gh_api_json(cwd=cwd, endpoint=f"repos/{repo}/releases")
    if isinstance(obj, Err):
        return obj

    raw = as_obj_list(obj.value)
    if raw is None:
        return Err(NotesError(kind="network_failed", message=f"unexpected releases payload: {repo}"))

    out: list[GhRelease] = []
    for item in raw:
        release = _parse_release(item)
        if release is not None:
            out.append(release)
    return Ok(out)


def get_release_by_tag(*, cwd: Path, repo: str, tag: str) -> Result[GhRelease | None, NotesError]:
    """Release of ``repo`` tagged ``tag``, or None when there is none."""
    endpoint = f"repos/{repo}/releases/tags/{quote(tag, safe='')}"
    result = _run_gh_read_raw(cwd=cwd, cmd=["gh", "api", endpoint])
    if isinstance(result, Err):
        if _is_not_found(result.error):
            return Ok(None)
        return Err(
            NotesError(
                kind="network_failed",
                message=f"gh api failed: {endpoint}",
                hint=result.error.detail,
            )
        )

    obj = _loads(result.value, what=endpoint)
    if isinstance(obj, Err):
        return obj
    return Ok(_parse_release(obj.value))


def create_release(
    *,
    cwd: Path,
    repo: str,
    tag: str,
    title: str,
    notes_file: Path,
    latest: bool,
) -> Result[str, NotesError]:
    """Create and publish a release. Returns the release URL printed by gh."""
    cmd = [
        "gh",
        "release",
        "create",
        tag,
        "--notes-file",
        str(notes_file),
        "--title",
        title,
        "--repo",
        repo,
    ]
    if latest:
        cmd.append("--latest")

    result = run_process(cmd, cwd=cwd, timeout=GH_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(
            NotesError(
                kind="publish_failed",
                message=f"failed to create release {tag} in {repo}",
                hint=result.error.detail,
            )
        )
    return Ok(result.value.strip())


def upload_release_asset(
    *,
    cwd: Path,
    repo: str,
    tag: str,
    path: Path,
) -> Result[None, NotesError]:
    result = run_process(
        ["gh", "release", "upload", tag, str(path), "--repo", repo],
        cwd=cwd,
        timeout=GH_UPLOAD_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        return Err(
            NotesError(
                kind="publish_failed",
                message=f"failed to upload {path.name} to release {tag}",
                hint=result.error.detail,
            )
        )
    return Ok(None)


@dataclass(frozen=True, slots=True)
class GhClient:
    """Bundles the gh operations the pipeline needs, bound to a working directory.

    Services take a ``ReleaseHost``; this is the production implementation.
    """

    cwd: Path

    def list_repositories(self, org: str, limit: int) -> Result[list[str], NotesError]:
        return list_org_repositories(cwd=self.cwd, org=org, limit=limit)

    def list_releases(self, repo: str) -> Result[list[GhRelease], NotesError]:
        return list_releases(cwd=self.cwd, repo=repo)

    def release_by_tag(self, repo: str, tag: str) -> Result[GhRelease | None, NotesError]:
        return get_release_by_tag(cwd=self.cwd, repo=repo, tag=tag)

    def create_release(
        self, *, repo: str, tag: str, title: str, notes_file: Path, latest: bool
    ) -> Result[str, NotesError]:
        return create_release(
            cwd=self.cwd,
            repo=repo,
            tag=tag,
            title=title,
            notes_file=notes_file,
            latest=latest,
        )

    def upload_asset(self, *, repo: str, tag: str, path: Path) -> Result[None, NotesError]:
        return upload_release_asset(cwd=self.cwd, repo=repo, tag=tag, path=path)
