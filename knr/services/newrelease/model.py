from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TypeAlias

from knr.core.structured import get_str
from knr.services.newrelease.config import (
    ABI_DIR,
    CHANGELOG,
    COMMIT_TEMPLATE,
    CONFIG_DIR,
    COPY_FILES_HELPER,
    UPDATE_CONF,
)


@dataclass(frozen=True, slots=True)
class PackagingTree:
    """A kernel source tree and its active packaging subdirectory.

    ``debian`` is relative to ``root`` (e.g. "debian.master"); it is what git
    commands receive as a pathspec.
    """

    root: Path
    debian: str

    @property
    def debian_dir(self) -> Path:
        return self.root / self.debian

    @property
    def changelog(self) -> str:
        return f"{self.debian}/{CHANGELOG}"

    @property
    def abi(self) -> str:
        return f"{self.debian}/{ABI_DIR}"

    @property
    def abi_dir(self) -> Path:
        return self.root / self.abi

    @property
    def config(self) -> str:
        return f"{self.debian}/{CONFIG_DIR}"

    @property
    def update_conf(self) -> Path:
        return self.debian_dir / UPDATE_CONF

    @property
    def copy_files(self) -> str:
        return f"{self.debian}/{COPY_FILES_HELPER}"

    @property
    def commit_template(self) -> str:
        return f"{self.debian}/{COMMIT_TEMPLATE}"

    def path(self, rel: str) -> Path:
        return self.root / rel


@dataclass(frozen=True, slots=True)
class DerivativeConfig:
    """Settings from ``<DEBIAN>/etc/update.conf``.

    A non-empty backport suffix marks a derivative tree that tracks a separate
    base kernel.
    """

    backport_suffix: str | None = None
    source_release: str | None = None
    source_release_branch: str | None = None
    debian_master: str | None = None

    @property
    def is_backport(self) -> bool:
        return bool(self.backport_suffix)

    @classmethod
    def from_env(cls, values: Mapping[str, str]) -> DerivativeConfig:
        return cls(
            backport_suffix=get_str(values, "BACKPORT_SUFFIX"),
            source_release=get_str(values, "SOURCE_RELEASE"),
            source_release_branch=get_str(values, "SOURCE_RELEASE_BRANCH"),
            debian_master=get_str(values, "DEBIAN_MASTER"),
        )

    def describe(self) -> str:
        """One-line description of the base kernel, for the run header."""
        parts = [f"backport suffix {self.backport_suffix}"]
        if self.source_release:
            base = self.source_release
            if self.source_release_branch:
                base += f" ({self.source_release_branch})"
            parts.append(f"base {base}")
        if self.debian_master:
            parts.append(f"from {self.debian_master}")
        return ", ".join(parts)


@dataclass(frozen=True, slots=True)
class AbiDirectory:
    """On-disk ABI data for one kernel version."""

    path: Path
    version: str

    @property
    def upstream(self) -> str:
        return upstream_version(self.version)


def upstream_version(version: str) -> str:
    """Upstream component of a package version: "5.4.0-100.113" -> "5.4.0"."""
    return version.split("-", 1)[0]


AbiAction: TypeAlias = Literal["none", "reused", "fetched"]


@dataclass(frozen=True, slots=True)
class OpenSummary:
    """What a successful run did."""

    version: str
    abi_action: AbiAction
    backport: bool
    dry_run: bool
