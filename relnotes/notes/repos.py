"""Repository selection and ordering."""

from __future__ import annotations

import re
from collections.abc import Iterable

from relnotes.core.config import Config
from relnotes.core.result import Err, Ok, Result
from relnotes.notes.errors import NotesError
from relnotes.notes.model import ReleaseHost


def inclusion_pattern(names: Iterable[str]) -> re.Pattern[str]:
    """Exact-match alternation over ``names``.

    An empty ``names`` matches every repository.
    """
    escaped = [re.escape(name) for name in names]
    if not escaped:
        return re.compile(r".+")
    return re.compile("^(?:" + "|".join(escaped) + ")$")


def select_repositories(
    all_repos: Iterable[str],
    pattern: re.Pattern[str],
    primary: str,
) -> tuple[str, ...]:
    """Order the repositories to aggregate.

    ``primary`` always comes first, even when absent from ``all_repos``.
    The remaining matching names follow, deduplicated and sorted.
    """
    rest = {name for name in all_repos if pattern.fullmatch(name) and name != primary}
    return (primary, *sorted(rest))


def resolve_repositories(*, config: Config, host: ReleaseHost) -> Result[tuple[str, ...], NotesError]:
    """List the organization and select the repositories to aggregate.

    Only the first ``repo_list_limit`` repositories of the organization are
    seen; larger organizations are not fully covered.
    """
    listed = host.list_repositories(config.github.org, config.github.repo_list_limit)
    if isinstance(listed, Err):
        return listed

    return Ok(
        select_repositories(
            listed.value,
            inclusion_pattern(config.notes.include),
            config.github.manifest_repo,
        )
    )
