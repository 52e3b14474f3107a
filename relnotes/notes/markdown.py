"""Markdown rendering of release notes sections.

Every section uses the same literal ``<details>`` wrapper so GitHub renders
it collapsed. Whitespace is part of the format.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from relnotes.core.config import Config
from relnotes.notes.model import CommitEntry

GENERATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
HEADER_SUMMARY = "release info"


def format_section(title: str, summary: str, body: str) -> str:
    """Render one collapsible section, with an optional title line."""
    lines: list[str] = []
    if title:
        lines.append(title)
    lines.append("<details>")
    lines.append(f"<summary>{summary}</summary>")
    lines.append("")
    lines.append(body)
    lines.append("")
    lines.append("</details>")
    lines.append("")
    return "\n".join(lines) + "\n"


def commit_summary(count: int) -> str:
    return f"commits ({count})"


def format_commit_line(entry: CommitEntry) -> str:
    return f"- {entry.summary} [`{entry.short_sha}`]({entry.url})"


def repository_title(config: Config, repo: str) -> str:
    return f"### [{repo}]({config.github.repo_url(repo)})"


def format_generated_at(now: datetime) -> str:
    return now.astimezone(UTC).strftime(GENERATED_AT_FORMAT)


def header_section(tag: str, generated_at: datetime) -> str:
    body = f"- tag: `{tag}`\n- generated: `{format_generated_at(generated_at)}`"
    return format_section("", HEADER_SUMMARY, body)


def repository_section(config: Config, repo: str, commits: Sequence[CommitEntry]) -> str:
    """Section for one repository. Callers skip repositories without commits."""
    body = "\n".join(format_commit_line(entry) for entry in commits)
    return format_section(repository_title(config, repo), commit_summary(len(commits)), body)
