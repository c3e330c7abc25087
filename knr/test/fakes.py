"""Fake kernel packaging tree and fake external tools for tests.

``FakeTools`` stands in for git, dpkg-parsechangelog and every command the
runner executes. Queries are answered from in-memory state; executed commands
are recorded and a few have their real side effects simulated (``git mv``
renames on disk, ``startnewrelease`` opens a new stanza).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from knr.core.result import Err, Ok, Result
from knr.platform.process import ProcessError

DEBIAN = "debian.master"


@dataclass
class Executed:
    argv: list[str]
    env: dict[str, str]


def _default_stanzas() -> list[tuple[str, str]]:
    return [("5.4.0-100.113", "focal")]


@dataclass
class FakeTools:
    root: Path
    status: str = ""
    in_repo: bool = True
    # (version, distribution), newest first
    stanzas: list[tuple[str, str]] = field(default_factory=_default_stanzas)
    fail: set[tuple[str, ...]] = field(default_factory=set)
    queries: list[list[str]] = field(default_factory=list)
    executed: list[Executed] = field(default_factory=list)

    # -- capture-output queries ------------------------------------------------

    def run(
        self,
        cmd: list[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, env, timeout
        self.queries.append(cmd)
        if cmd[0] == "git" and "rev-parse" in cmd:
            if not self.in_repo:
                return Err(ProcessError(tuple(cmd), 128, "", "fatal: not a git repository"))
            return Ok(f"{self.root}\n")
        if cmd[0] == "git" and "status" in cmd:
            return Ok(self.status)
        if cmd[0] == "dpkg-parsechangelog":
            return self._parse_changelog(cmd)
        raise AssertionError(f"unexpected query: {cmd}")

    def _parse_changelog(self, cmd: list[str]) -> Result[str, ProcessError]:
        offset = 0
        name = ""
        for arg in cmd[1:]:
            if arg.startswith("-o"):
                offset = int(arg[2:])
            elif arg.startswith("-S"):
                name = arg[2:]
        if offset >= len(self.stanzas):
            return Ok("")
        version, dist = self.stanzas[offset]
        return Ok({"Version": version, "Distribution": dist}[name] + "\n")

    # -- streamed commands -----------------------------------------------------

    def run_silent(
        self,
        cmd: list[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> Result[None, ProcessError]:
        del cwd
        self.executed.append(Executed(argv=list(cmd), env=dict(env or {})))
        for prefix in self.fail:
            if tuple(cmd[: len(prefix)]) == prefix:
                return Err(ProcessError(tuple(cmd), 2, "", ""))

        if cmd[:2] == ["git", "mv"]:
            (self.root / cmd[2]).rename(self.root / cmd[3])
        if cmd[-1] == "startnewrelease":
            version, _ = self.stanzas[0]
            upstream, abi = version.split("-", 1)
            major, minor = abi.split(".")
            new = f"{upstream}-{int(major) + 1}.{int(minor) + 1}"
            self.stanzas.insert(0, (new, "UNRELEASED"))
        return Ok(None)

    # -- helpers ---------------------------------------------------------------

    @property
    def argvs(self) -> list[list[str]]:
        return [e.argv for e in self.executed]

    def commits(self) -> list[list[str]]:
        return [a for a in self.argvs if a[:2] == ["git", "commit"]]


def make_tree(
    root: Path,
    *,
    abi_dirs: tuple[str, ...] | None = None,
    update_conf: str | None = None,
    copy_files: bool | None = None,
) -> Path:
    """Lay out a minimal Ubuntu kernel packaging tree under root.

    copy_files: None for no helper, True for an executable one, False for a
    helper without the executable bit.
    """
    (root / "debian").mkdir()
    (root / "debian" / "debian.env").write_text(f"DEBIAN={DEBIAN}\n", encoding="utf-8")
    debian = root / DEBIAN
    (debian / "commit-templates").mkdir(parents=True)
    (debian / "commit-templates" / "newrelease").write_text(
        "UBUNTU: Start new release\n", encoding="utf-8"
    )
    (debian / "changelog").write_text(
        "linux (5.4.0-100.113) focal; urgency=medium\n", encoding="utf-8"
    )
    if abi_dirs is not None:
        (debian / "abi").mkdir()
        for name in abi_dirs:
            (debian / "abi" / name).mkdir()
            (debian / "abi" / name / "abiname").write_text("100\n", encoding="utf-8")
    if update_conf is not None:
        (debian / "etc").mkdir()
        (debian / "etc" / "update.conf").write_text(update_conf, encoding="utf-8")
    if copy_files is not None:
        helper = debian / "scripts" / "helpers" / "copy-files"
        helper.parent.mkdir(parents=True)
        helper.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        helper.chmod(0o755 if copy_files else 0o644)
    return root
