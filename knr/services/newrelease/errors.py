from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

OpenErrorKind: TypeAlias = Literal[
    "configuration",
    "environment",
    "state",
    "conflict",
    "build",
    "command",
]


@dataclass(frozen=True, slots=True)
class OpenError:
    """Why opening the new release stopped.

    kind:
        configuration: operator identity missing or not allowed
        environment: not a git tree, missing metadata, tool or helper
        state: packaging directory dirty or changelog still open
        conflict: ambiguous ABI directory for --reuse-abi
        build: config regeneration after a backport sync failed
        command: any other external command exited non-zero
    """

    kind: OpenErrorKind
    message: str
    hint: str | None = None

