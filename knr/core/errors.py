"""Exit codes for the CLI.

The release opener only distinguishes success from failure: every failed
precondition, build failure or bad argument exits with 1. The specific reason
is carried by the error message, not by the exit status.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are stable."""

    OK = 0
    FAILURE = 1
