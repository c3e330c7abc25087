"""Open a new release in an Ubuntu kernel packaging tree.

``ReleaseOpener.run`` validates the tree, optionally syncs a backport from its
base kernel, refreshes the ABI data, opens a new changelog stanza and records
all of it as one signed-off commit.

Ordering constraints:
- every read-only check passes before the first mutation;
- ``debian/rules clean`` runs after the backport sync and before the ABI
  update, because clean drops the ABI directory of the current version;
- the commit is the last mutating step, so a failure never leaves a
  half-made commit behind (only staged changes).
"""

from __future__ import annotations

from pathlib import Path

from knr.core.config import Configuration
from knr.core.result import Err, Ok, Result
from knr.output.console import ConsoleProtocol, Style
from knr.platform.runner import CommandRunner, RunMode
from knr.services.newrelease import checks, commands
from knr.services.newrelease.abi import update_abi, verify_abi
from knr.services.newrelease.backport import sync_backport
from knr.services.newrelease.changelog import Changelog
from knr.services.newrelease.errors import OpenError
from knr.services.newrelease.model import AbiAction, OpenSummary


class ReleaseOpener:
    def __init__(self, *, config: Configuration, console: ConsoleProtocol) -> None:
        self._config = config
        self._console = console

    def run(self, cwd: Path) -> Result[OpenSummary, OpenError]:
        config = self._config
        console = self._console

        identity = checks.check_identity(config)
        if isinstance(identity, Err):
            return identity

        root = checks.find_repository(cwd)
        if isinstance(root, Err):
            return root

        tree_result = checks.load_packaging_tree(root.value)
        if isinstance(tree_result, Err):
            return tree_result
        tree = tree_result.value

        clean = checks.check_clean(tree)
        if isinstance(clean, Err):
            return clean

        changelog = Changelog(tree)
        closed = checks.check_changelog_closed(changelog)
        if isinstance(closed, Err):
            return closed

        # The top stanza is the release just closed: its version names the ABI.
        version = changelog.version()
        if isinstance(version, Err):
            return version

        derivative = checks.load_derivative_config(tree)
        if isinstance(derivative, Err):
            return derivative
        backport = derivative.value.is_backport

        template = checks.check_commit_template(tree)
        if isinstance(template, Err):
            return template

        console.print(f"packaging directory: {tree.debian}", Style.DIM)
        console.print(f"identity: {identity.value}", Style.DIM)
        console.print(f"closed release: {version.value} ({closed.value})", Style.DIM)
        if backport:
            console.print(derivative.value.describe(), Style.DIM)
        if config.dry_run:
            console.print("dry-run: commands are shown, not executed", Style.DIM)

        runner = CommandRunner(
            mode=RunMode.RENDER if config.dry_run else RunMode.EXECUTE,
            cwd=tree.root,
            console=console,
        )

        if backport:
            console.header("Sync backport")
            synced = sync_backport(tree=tree, config=config, runner=runner)
            if isinstance(synced, Err):
                return synced

        console.header("Clean")
        cleaned = commands.run_step(runner, commands.rules(config, "clean"))
        if isinstance(cleaned, Err):
            return cleaned

        abi_action: AbiAction = "none"
        if tree.abi_dir.is_dir():
            console.header("Update ABI")
            abi = update_abi(
                tree=tree,
                config=config,
                runner=runner,
                console=console,
                version=version.value,
            )
            if isinstance(abi, Err):
                return abi
            abi_action = abi.value

        console.header("New changelog entry")
        for invocation in (
            commands.rules(config, "startnewrelease"),
            commands.git_add(tree.changelog),
        ):
            opened = commands.run_step(runner, invocation)
            if isinstance(opened, Err):
                return opened

        console.header("Commit")
        committed = commands.run_step(runner, commands.git_commit(tree))
        if isinstance(committed, Err):
            return committed

        if not config.dry_run:
            if tree.abi_dir.is_dir():
                verify_abi(tree=tree, changelog=changelog, console=console)
            console.newline()
            console.print("Please inspect the commit before pushing.", Style.BOLD)

        return Ok(
            OpenSummary(
                version=version.value,
                abi_action=abi_action,
                backport=backport,
                dry_run=config.dry_run,
            )
        )
