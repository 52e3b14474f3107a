from __future__ import annotations

from datetime import UTC, datetime

from relnotes.core.config import Config, GithubConfig
from relnotes.notes.markdown import (
    commit_summary,
    format_commit_line,
    format_section,
    header_section,
    repository_section,
    repository_title,
)
from relnotes.notes.model import CommitEntry

CONFIG = Config(github=GithubConfig(org="acme"))


def _entry(short: str, summary: str) -> CommitEntry:
    sha = short * 5
    return CommitEntry(
        short_sha=short,
        sha=sha,
        summary=summary,
        url=CONFIG.github.commit_url("api", sha),
    )


def test_section_without_title() -> None:
    assert format_section("", "release info", "body") == (
        "<details>\n<summary>release info</summary>\n\nbody\n\n</details>\n\n"
    )


def test_section_with_title() -> None:
    assert format_section("### api", "commits (1)", "- one") == (
        "### api\n<details>\n<summary>commits (1)</summary>\n\n- one\n\n</details>\n\n"
    )


def test_commit_summary() -> None:
    assert commit_summary(2) == "commits (2)"


def test_commit_line() -> None:
    entry = _entry("abc1234", "Fix login redirect")
    assert format_commit_line(entry) == (
        f"- Fix login redirect [`abc1234`](https://github.com/acme/api/commit/{entry.sha})"
    )


def test_repository_title() -> None:
    assert repository_title(CONFIG, "api") == "### [api](https://github.com/acme/api)"


def test_header_section() -> None:
    generated = datetime(2024, 5, 1, 10, 4, 5, tzinfo=UTC)
    assert header_section("v1.0", generated) == (
        "<details>\n"
        "<summary>release info</summary>\n"
        "\n"
        "- tag: `v1.0`\n"
        "- generated: `2024-05-01 10:04:05 UTC`\n"
        "\n"
        "</details>\n"
        "\n"
    )


def test_repository_section_keeps_commit_order() -> None:
    newest = _entry("bbbbbbb", "Second change")
    oldest = _entry("aaaaaaa", "First change")
    section = repository_section(CONFIG, "api", [newest, oldest])

    assert section.startswith("### [api](https://github.com/acme/api)\n<details>\n")
    assert "<summary>commits (2)</summary>" in section
    body = section.split("\n\n")[1]
    assert body.splitlines() == [format_commit_line(newest), format_commit_line(oldest)]
