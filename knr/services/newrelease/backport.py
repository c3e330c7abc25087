"""Backport synchronization from the base kernel."""

from __future__ import annotations

from knr.core.config import Configuration
from knr.core.result import Err, Ok, Result
from knr.platform.runner import CommandRunner
from knr.services.newrelease import commands
from knr.services.newrelease.checks import check_executable
from knr.services.newrelease.errors import OpenError
from knr.services.newrelease.model import PackagingTree


def sync_backport(
    *,
    tree: PackagingTree,
    config: Configuration,
    runner: CommandRunner,
) -> Result[None, OpenError]:
    """Copy files from the base kernel and regenerate the configs.

    Changes staged before a failed ``updateconfigs`` stay in the index for the
    operator to inspect; nothing is committed.
    """
    helper = check_executable(tree, tree.copy_files)
    if isinstance(helper, Err):
        return helper

    for invocation in (
        commands.copy_files(tree, config),
        commands.git_add(tree.debian),
    ):
        result = commands.run_step(runner, invocation)
        if isinstance(result, Err):
            return result

    result = commands.run_step(
        runner,
        commands.rules(config, "clean", "updateconfigs"),
        kind="build",
        message="failed to update configs",
        hint=f"Review the rebase and the {tree.copy_files} results manually.",
    )
    if isinstance(result, Err):
        return result

    result = commands.run_step(runner, commands.git_add(tree.config))
    if isinstance(result, Err):
        return result

    return Ok(None)
