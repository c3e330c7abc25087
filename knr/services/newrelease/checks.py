"""Read-only preconditions.

Each check returns ``Ok`` or the ``OpenError`` the operator has to fix. None
of them writes anything, so they run in dry-run mode too.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from knr.core.config import Configuration, ENV_EMAIL, ENV_MAIL_ENFORCE
from knr.core.envfile import load_env_file
from knr.core.result import Err, Ok, Result
from knr.git.repository import Repository
from knr.services.newrelease.changelog import Changelog
from knr.services.newrelease.config import DEBIAN_ENV, DEBIAN_ENV_KEY, UNRELEASED
from knr.services.newrelease.errors import OpenError
from knr.services.newrelease.model import DerivativeConfig, PackagingTree

_MAX_LISTED_PATHS = 5


def check_identity(config: Configuration) -> Result[str, OpenError]:
    if not config.email:
        return Err(
            OpenError(
                kind="configuration",
                message="identity not set: no operator email configured",
                hint=f"export {ENV_EMAIL}=\"you@example.com\"",
            )
        )

    try:
        allowed = re.search(config.mail_enforce, config.email) is not None
    except re.error as e:
        return Err(
            OpenError(
                kind="configuration",
                message=f"invalid identity pattern {config.mail_enforce!r}: {e}",
                hint=f"Fix {ENV_MAIL_ENFORCE} or mail_enforce in the config file.",
            )
        )

    if not allowed:
        return Err(
            OpenError(
                kind="configuration",
                message=f"identity not allowed: {config.email} does not match {config.mail_enforce}",
                hint=f"Set {ENV_EMAIL} to your work address or override {ENV_MAIL_ENFORCE}.",
            )
        )
    return Ok(config.email)


def find_repository(cwd: Path) -> Result[Path, OpenError]:
    result = Repository(cwd).toplevel()
    if isinstance(result, Err):
        return Err(
            OpenError(
                kind="environment",
                message="not in a git working tree",
                hint=result.error.message or None,
            )
        )
    return Ok(result.value)


def load_packaging_tree(root: Path) -> Result[PackagingTree, OpenError]:
    env_path = root / DEBIAN_ENV
    if not env_path.is_file():
        return Err(
            OpenError(
                kind="environment",
                message=f"cannot find {DEBIAN_ENV}",
                hint="Run from an Ubuntu kernel source tree.",
            )
        )

    result = load_env_file(env_path)
    if isinstance(result, Err):
        e = result.error
        where = f" (line {e.line})" if e.line else ""
        return Err(OpenError(kind="environment", message=f"{DEBIAN_ENV}{where}: {e.message}"))

    debian = result.value.get(DEBIAN_ENV_KEY, "").strip().rstrip("/")
    if not debian:
        return Err(
            OpenError(kind="environment", message=f"{DEBIAN_ENV} does not set {DEBIAN_ENV_KEY}")
        )

    tree = PackagingTree(root=root, debian=debian)
    if not tree.debian_dir.is_dir():
        return Err(
            OpenError(
                kind="environment",
                message=f"invalid packaging directory: {debian} does not exist",
            )
        )
    return Ok(tree)


def check_clean(tree: PackagingTree) -> Result[None, OpenError]:
    result = Repository(tree.root).status(tree.debian)
    if isinstance(result, Err):
        return Err(
            OpenError(
                kind="environment",
                message="cannot read git status",
                hint=result.error.message or None,
            )
        )

    status = result.value
    if status.is_clean:
        return Ok(None)

    listed = [f"{e.pretty_xy()} {e.path}" for e in status.entries[:_MAX_LISTED_PATHS]]
    more = len(status.entries) - len(listed)
    if more > 0:
        listed.append(f"... and {more} more")
    counts = [
        f"{len(entries)} {label}"
        for label, entries in (
            ("staged", status.staged),
            ("unstaged", status.unstaged),
            ("untracked", status.untracked),
        )
        if entries
    ]
    return Err(
        OpenError(
            kind="state",
            message=f"packaging directory not clean: {tree.debian} ({', '.join(counts)})",
            hint="; ".join(listed),
        )
    )


def check_changelog_closed(changelog: Changelog) -> Result[str, OpenError]:
    """Return the distribution of the top stanza when it is closed."""
    result = changelog.distribution()
    if isinstance(result, Err):
        return result

    if result.value == UNRELEASED:
        return Err(
            OpenError(
                kind="state",
                message=f"{changelog.tree.changelog} is not closed",
                hint="Close the current release before starting a new one.",
            )
        )
    return result


def load_derivative_config(tree: PackagingTree) -> Result[DerivativeConfig, OpenError]:
    if not tree.update_conf.is_file():
        return Ok(DerivativeConfig())

    result = load_env_file(tree.update_conf)
    if isinstance(result, Err):
        e = result.error
        where = f" (line {e.line})" if e.line else ""
        rel = tree.update_conf.relative_to(tree.root)
        return Err(OpenError(kind="environment", message=f"{rel}{where}: {e.message}"))
    return Ok(DerivativeConfig.from_env(result.value))


def check_commit_template(tree: PackagingTree) -> Result[None, OpenError]:
    if not tree.path(tree.commit_template).is_file():
        return Err(
            OpenError(
                kind="environment",
                message=f"missing commit template: {tree.commit_template}",
            )
        )
    return Ok(None)


def check_executable(tree: PackagingTree, rel: str) -> Result[None, OpenError]:
    path = tree.path(rel)
    if not path.is_file():
        return Err(OpenError(kind="environment", message=f"missing helper script: {rel}"))
    if not os.access(path, os.X_OK):
        return Err(
            OpenError(
                kind="environment",
                message=f"helper script is not executable: {rel}",
                hint=f"chmod +x {rel}",
            )
        )
    return Ok(None)
