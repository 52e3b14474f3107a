"""Git operations: bare clones and history listing.

Usage:
    from relnotes.git import BareRepository

    repo = BareRepository.clone("git@github.com:org/name.git", dest).unwrap()
    for entry in repo.log(first_parent=True).unwrap():
        print(entry.short_sha, entry.subject)
"""

from relnotes.git.repository import (
    BareRepository,
    GitError,
    LogEntry,
)

__all__ = [
    "BareRepository",
    "GitError",
    "LogEntry",
]
