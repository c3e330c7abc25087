"""Changelog field extraction through ``dpkg-parsechangelog``.

The changelog is re-read at each point where it matters instead of being
cached: ``debian/rules startnewrelease`` rewrites it during the run.
"""

from __future__ import annotations

from knr.core.result import Err, Ok, Result
from knr.platform.process import run as run_process
from knr.services.newrelease.errors import OpenError
from knr.services.newrelease.model import PackagingTree

_PARSE_TIMEOUT_SECONDS = 30.0


class Changelog:
    """Queries the changelog of a packaging tree."""

    def __init__(self, tree: PackagingTree) -> None:
        self.tree = tree

    def field(self, name: str, *, offset: int = 0) -> Result[str, OpenError]:
        """Return field ``name`` of the stanza ``offset`` entries below the top."""
        cmd = ["dpkg-parsechangelog", f"-l{self.tree.changelog}", f"-S{name}"]
        if offset:
            cmd[1:1] = [f"-o{offset}", "-c1"]

        result = run_process(cmd, cwd=self.tree.root, timeout=_PARSE_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            e = result.error
            if e.not_found:
                return Err(
                    OpenError(
                        kind="environment",
                        message="dpkg-parsechangelog is not available",
                        hint="Install dpkg-dev.",
                    )
                )
            return Err(
                OpenError(
                    kind="environment",
                    message=f"cannot read {name} from {self.tree.changelog}",
                    hint=e.stderr.strip() or None,
                )
            )

        value = result.value.strip()
        if not value:
            return Err(
                OpenError(
                    kind="environment",
                    message=f"{self.tree.changelog} has no {name} field"
                    + (f" at offset {offset}" if offset else ""),
                )
            )
        return Ok(value)

    def distribution(self) -> Result[str, OpenError]:
        return self.field("Distribution")

    def version(self, *, offset: int = 0) -> Result[str, OpenError]:
        return self.field("Version", offset=offset)
