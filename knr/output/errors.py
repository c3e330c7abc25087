"""Error presentation for the release opener."""

from __future__ import annotations

from typing import TYPE_CHECKING

from knr.core.errors import ErrorCode
from knr.services.newrelease.errors import OpenError

if TYPE_CHECKING:
    from knr.output.console import ConsoleProtocol

__all__ = ["print_open_error", "open_error_exit_code"]

_PREFIX = {
    "configuration": "configuration error",
    "environment": "environment error",
    "state": "state error",
    "conflict": "conflict",
    "build": "build error",
    "command": "command failed",
}


def print_open_error(error: OpenError, console: ConsoleProtocol) -> None:
    """Print one line naming the failed precondition, plus an optional hint."""
    console.error(f"{_PREFIX[error.kind]}: {error.message}")
    if error.hint:
        console.hint(error.hint)


def open_error_exit_code(error: OpenError) -> int:
    """Every failure exits with the same status; the message tells them apart."""
    del error
    return int(ErrorCode.FAILURE)
