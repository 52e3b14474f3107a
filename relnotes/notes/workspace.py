"""Scoped temporary workspace for bare clones and the notes file."""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

WORKSPACE_PREFIX = "tmp_git_repos_"


@contextmanager
def release_workspace(parent: Path) -> Iterator[Path]:
    """Create a private directory under ``parent`` and always remove it.

    Removal happens on normal exit, on error and on interruption
    (KeyboardInterrupt, or SIGTERM once translated by the CLI).
    """
    parent.mkdir(parents=True, exist_ok=True)
    path = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=str(parent)))
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
