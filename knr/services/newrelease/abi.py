"""ABI directory refresh and post-commit verification.

``<DEBIAN>/abi/<version>/`` holds the reference symbol and module lists for
one kernel version. Opening a release either renames the previous directory
(``--reuse-abi``) or asks the fetch helper to download fresh data.
"""

from __future__ import annotations

from knr.core.config import Configuration
from knr.core.result import Err, Ok, Result
from knr.output.console import ConsoleProtocol
from knr.platform.runner import CommandRunner
from knr.services.newrelease import commands
from knr.services.newrelease.changelog import Changelog
from knr.services.newrelease.errors import OpenError
from knr.services.newrelease.model import AbiAction, AbiDirectory, PackagingTree, upstream_version


def list_abi_dirs(tree: PackagingTree) -> list[AbiDirectory]:
    if not tree.abi_dir.is_dir():
        return []
    return sorted(
        (AbiDirectory(path=p, version=p.name) for p in tree.abi_dir.iterdir() if p.is_dir()),
        key=lambda d: d.version,
    )


def find_reuse_candidate(tree: PackagingTree, version: str) -> Result[AbiDirectory, OpenError]:
    """Return the single ABI directory with the same upstream version."""
    upstream = upstream_version(version)
    matches = [d for d in list_abi_dirs(tree) if d.upstream == upstream]
    # `debian/rules clean` removes the closed version's own directory (not yet in
    # dry-run), so it is a candidate only when it is the sole match.
    others = [d for d in matches if d.version != version]
    if others:
        matches = others

    if not matches:
        return Err(
            OpenError(
                kind="conflict",
                message=f"no ABI directory for upstream {upstream} in {tree.abi}",
                hint="Drop --reuse-abi to fetch the ABI instead.",
            )
        )
    if len(matches) > 1:
        names = ", ".join(d.version for d in matches)
        return Err(
            OpenError(
                kind="conflict",
                message=f"multiple ABI directories for upstream {upstream}: {names}",
                hint=f"Remove the stale ones from {tree.abi} or drop --reuse-abi.",
            )
        )
    return Ok(matches[0])


def update_abi(
    *,
    tree: PackagingTree,
    config: Configuration,
    runner: CommandRunner,
    console: ConsoleProtocol,
    version: str,
) -> Result[AbiAction, OpenError]:
    """Make ``<DEBIAN>/abi/<version>`` hold the ABI the new release checks against."""
    if not config.reuse_abi:
        result = commands.run_step(runner, commands.abi_fetch(config, version))
        if isinstance(result, Err):
            return result
        return Ok("fetched")

    candidate = find_reuse_candidate(tree, version)
    if isinstance(candidate, Err):
        return candidate

    abi_dir = candidate.value
    target = f"{tree.abi}/{version}"
    if abi_dir.version == version:
        console.info(f"{target} already present, nothing to rename")
        return Ok("reused")

    result = commands.run_step(runner, commands.git_mv(f"{tree.abi}/{abi_dir.version}", target))
    if isinstance(result, Err):
        return result
    return Ok("reused")


def verify_abi(*, tree: PackagingTree, changelog: Changelog, console: ConsoleProtocol) -> bool:
    """Warn when the just-closed release has no ABI directory.

    After ``startnewrelease`` the top stanza is the new UNRELEASED one; the
    release whose ABI we refreshed is the entry right below it.
    """
    result = changelog.version(offset=1)
    if isinstance(result, Err):
        console.warning(f"could not verify ABI directory: {result.error.message}")
        return False

    expected = tree.abi_dir / result.value
    if not expected.is_dir():
        console.warning(f"ABI directory not found: {tree.abi}/{result.value}")
        return False
    return True
