"""Execute-or-render command runner.

Every command that changes the working tree, the git index or history goes
through a ``CommandRunner``. In ``RunMode.EXECUTE`` the command line is shown
and then run; in ``RunMode.RENDER`` (dry-run) only the shell-quoted command
line is shown and nothing is touched.

Usage:
    runner = CommandRunner(mode=RunMode.RENDER, cwd=root, console=console)
    runner.run(CommandInvocation.of("git", "add", "debian.master/changelog"))
    # DRY RUN: git add debian.master/changelog
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from types import MappingProxyType

from knr.core.result import Ok, Result
from knr.output.console import ConsoleProtocol, Style
from knr.platform.process import ProcessError, run_silent

__all__ = ["CommandInvocation", "CommandRunner", "RunMode", "BASE_ENV"]

# Helpers parse tool output; keep it stable regardless of the operator locale.
BASE_ENV: Mapping[str, str] = MappingProxyType({"LC_ALL": "C.UTF-8"})


class RunMode(Enum):
    EXECUTE = auto()
    RENDER = auto()


def _empty_env() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    """One external process call.

    Attributes:
        argv: Program and arguments.
        env: Environment overrides applied on top of the inherited environment.
    """

    argv: tuple[str, ...]
    env: Mapping[str, str] = field(default_factory=_empty_env)

    @classmethod
    def of(cls, *argv: str, env: Mapping[str, str] | None = None) -> CommandInvocation:
        return cls(argv=tuple(argv), env=MappingProxyType(dict(env or {})))

    def with_prefix(self, prefix: tuple[str, ...]) -> CommandInvocation:
        """Return the same invocation run through a wrapper (e.g. a chroot)."""
        return CommandInvocation(argv=(*prefix, *self.argv), env=self.env)

    def render(self) -> str:
        """Shell-safe command line, as it could be pasted into a terminal."""
        parts = [shlex.quote(a) for a in self.argv]
        if self.env:
            assigns = [f"{k}={shlex.quote(v)}" for k, v in sorted(self.env.items())]
            parts = ["env", *assigns, *parts]
        return " ".join(parts)


class CommandRunner:
    """Runs or renders invocations according to its mode."""

    def __init__(self, *, mode: RunMode, cwd: Path, console: ConsoleProtocol) -> None:
        self.mode = mode
        self.cwd = cwd
        self._console = console

    def run(self, invocation: CommandInvocation) -> Result[None, ProcessError]:
        line = invocation.render()
        if self.mode is RunMode.RENDER:
            self._console.print(f"DRY RUN: {line}", Style.BOLD)
            return Ok(None)

        self._console.print(line, Style.BOLD)
        env = {**os.environ, **BASE_ENV, **invocation.env}
        result = run_silent(list(invocation.argv), cwd=self.cwd, env=env)
        self._console.newline()
        return result
