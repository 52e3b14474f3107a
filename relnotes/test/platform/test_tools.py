from __future__ import annotations

from relnotes.platform.tools import REQUIRED_TOOLS, missing_tools


def test_required_tools() -> None:
    assert REQUIRED_TOOLS == ("git", "gh")


def test_missing_tools_none_missing() -> None:
    assert missing_tools(("git", "gh"), which=lambda name: f"/usr/bin/{name}") == []


def test_missing_tools_keeps_order() -> None:
    found = {"git"}

    def which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in found else None

    assert missing_tools(("gh", "git", "jq"), which=which) == ["gh", "jq"]
