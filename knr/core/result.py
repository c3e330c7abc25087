"""Result type for explicit error handling.

Every step of the release workflow can fail for a reason the operator must
see (dirty tree, open changelog, ambiguous ABI directory...). Steps return a
Result instead of raising, so the orchestrator can stop at the first failure
without try/except blocks around each call.

Usage:
    def read_version(path: Path) -> Result[str, OpenError]:
        if not path.exists():
            return Err(OpenError(kind="environment", message=f"missing {path}"))
        return Ok(path.read_text().strip())

    match read_version(changelog):
        case Ok(version):
            console.print(version)
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result carrying a value."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying an error."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
