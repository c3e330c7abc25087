"""Read-only git queries.

Mutating git commands (add, mv, commit) are not issued from here: they go
through ``knr.platform.runner.CommandRunner`` so dry-run can render them.

Usage:
    repo = Repository(Path.cwd())
    match repo.toplevel():
        case Ok(root):
            status = Repository(root).status("debian.master")
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from knr.core.result import Err, Ok, Result
from knr.platform.process import ProcessError
from knr.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "PathStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in git status.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path relative to the repository root
    """

    xy: str
    path: str

    @property
    def is_staged(self) -> bool:
        return self.xy != "??" and self.xy[0] != " "

    @property
    def is_unstaged(self) -> bool:
        return self.xy != "??" and self.xy[1] != " "

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"

    def pretty_xy(self) -> str:
        """Format XY with dots for spaces (". M" instead of " M")."""
        return self.xy.replace(" ", ".")


@dataclass(frozen=True, slots=True)
class PathStatus:
    """Status of the working tree restricted to one pathspec."""

    pathspec: str
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if there is nothing staged, unstaged or untracked."""
        return len(self.entries) == 0

    @property
    def staged(self) -> list[StatusEntry]:
        return [e for e in self.entries if e.is_staged]

    @property
    def unstaged(self) -> list[StatusEntry]:
        return [e for e in self.entries if e.is_unstaged]

    @property
    def untracked(self) -> list[StatusEntry]:
        return [e for e in self.entries if e.is_untracked]


class Repository:
    """Git working tree at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def toplevel(self) -> Result[Path, GitError]:
        """Return the root of the working tree containing ``path``."""
        result = self._run(["rev-parse", "--show-toplevel"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="rev-parse",
                        message=e.stderr.strip() or "not a git working tree",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                top = stdout.strip()
                if not top:
                    # Inside .git or a bare repository
                    return Err(GitError(command="rev-parse", message="not a git working tree"))
                return Ok(Path(top))

    def status(self, pathspec: str) -> Result[PathStatus, GitError]:
        """Status of ``pathspec``, listing every untracked file individually."""
        result = self._run(
            ["status", "--porcelain=v1", "--untracked-files=all", "--", pathspec]
        )
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="status",
                        message=e.stderr.strip() or "git status failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                entries = [
                    entry
                    for entry in (self._parse_entry(ln) for ln in stdout.splitlines())
                    if entry is not None
                ]
                return Ok(PathStatus(pathspec=pathspec, entries=tuple(entries)))

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, timeout=_GIT_TIMEOUT_SECONDS
        )

    def _parse_entry(self, line: str) -> StatusEntry | None:
        """Parse one ``XY path`` line of porcelain v1 output."""
        if len(line) < 4:
            return None
        if line.startswith("?? "):
            return StatusEntry(xy="??", path=line[3:])
        return StatusEntry(xy=line[:2], path=line[3:])
