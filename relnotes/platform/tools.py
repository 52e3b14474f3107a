"""Presence checks for the external tools the pipeline shells out to."""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable

__all__ = ["REQUIRED_TOOLS", "missing_tools"]

REQUIRED_TOOLS: tuple[str, ...] = ("git", "gh")


def missing_tools(
    tools: Iterable[str] = REQUIRED_TOOLS,
    *,
    which: Callable[[str], str | None] = shutil.which,
) -> list[str]:
    """Return the tools not found on PATH, in the order given."""
    return [tool for tool in tools if which(tool) is None]
