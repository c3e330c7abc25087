"""Command lines issued while opening a release.

Builders only describe invocations; ``run_step`` hands them to the
``CommandRunner`` and turns a failed exit status into an ``OpenError``.
"""

from __future__ import annotations

import shlex
from typing import Literal

from knr.core.config import Configuration, ENV_CHROOT
from knr.core.result import Err, Ok, Result
from knr.platform.runner import CommandInvocation, CommandRunner
from knr.services.newrelease.config import RULES
from knr.services.newrelease.errors import OpenError
from knr.services.newrelease.model import PackagingTree


def chroot_prefix(config: Configuration) -> tuple[str, ...]:
    if not config.chroot:
        return ()
    return tuple(shlex.split(config.chroot))


def rules(config: Configuration, *targets: str) -> CommandInvocation:
    """``fakeroot debian/rules <targets>``, inside the chroot when configured."""
    return CommandInvocation.of("fakeroot", RULES, *targets).with_prefix(chroot_prefix(config))


def copy_files(tree: PackagingTree, config: Configuration) -> CommandInvocation:
    return CommandInvocation.of(tree.copy_files, env={ENV_CHROOT: config.chroot or ""})


def abi_fetch(config: Configuration, version: str) -> CommandInvocation:
    return CommandInvocation.of(*shlex.split(config.abi_fetcher), version)


def git_add(*paths: str) -> CommandInvocation:
    return CommandInvocation.of("git", "add", "--", *paths)


def git_mv(src: str, dst: str) -> CommandInvocation:
    return CommandInvocation.of("git", "mv", src, dst)


def git_commit(tree: PackagingTree) -> CommandInvocation:
    return CommandInvocation.of("git", "commit", "-s", "-F", tree.commit_template)


def run_step(
    runner: CommandRunner,
    invocation: CommandInvocation,
    *,
    kind: Literal["build", "command"] = "command",
    message: str | None = None,
    hint: str | None = None,
) -> Result[None, OpenError]:
    result = runner.run(invocation)
    if isinstance(result, Err):
        e = result.error
        if e.not_found:
            return Err(
                OpenError(
                    kind="environment",
                    message=f"cannot run {invocation.argv[0]}",
                    hint=e.stderr.strip() or None,
                )
            )
        return Err(
            OpenError(
                kind=kind,
                message=message or f"{invocation.render()} failed (exit {e.returncode})",
                hint=hint,
            )
        )
    return Ok(None)
