"""Git queries for the packaging tree.

Usage:
    from knr.git import Repository

    repo = Repository(Path.cwd())
    status = repo.status("debian.master")
    if isinstance(status, Ok) and status.value.is_clean:
        print("clean")
"""

from knr.git.repository import (
    GitError,
    PathStatus,
    Repository,
    StatusEntry,
)

__all__ = [
    "GitError",
    "PathStatus",
    "Repository",
    "StatusEntry",
]
