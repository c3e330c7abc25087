"""Parser for shell-style ``KEY=value`` files.

Kernel packaging trees keep small settings in files meant to be sourced by a
shell (``debian/debian.env``, ``<DEBIAN>/etc/update.conf``). We read them as
data and never execute them. Supported syntax:

    # comment
    DEBIAN=debian.master
    export BACKPORT_SUFFIX="~20.04.1"
    RELEASE_REPO='git://example.org/linux'

Values are unquoted with POSIX shell rules. Anything that is not an
assignment (commands, functions, substitutions) is rejected.
"""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = ["EnvFileError", "load_env_file", "parse_env_text"]

_ASSIGNMENT = re.compile(r"^(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)=(.*)$")


@dataclass(frozen=True, slots=True)
class EnvFileError:
    """Error when an env file cannot be read or parsed."""

    message: str
    path: Path | None = None
    line: int | None = None


def _strip_comment(raw: str) -> str:
    """Cut a trailing comment. `#` starts one only after unquoted whitespace."""
    quote = ""
    escaped = False
    after_blank = False
    for i, ch in enumerate(raw):
        blank = False
        if escaped:
            escaped = False
        elif ch == "\\" and quote != "'":
            escaped = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "#" and after_blank:
            return raw[:i]
        else:
            blank = ch in " \t"
        after_blank = blank
    return raw


def _unquote(raw: str) -> str | None:
    raw = _strip_comment(raw)
    if not raw.strip():
        return ""
    if "$(" in raw or "`" in raw:
        return None
    try:
        tokens = shlex.split(raw, comments=False, posix=True)
    except ValueError:
        return None
    if len(tokens) > 1:
        return None
    return tokens[0] if tokens else ""


def parse_env_text(text: str, path: Path | None = None) -> Result[dict[str, str], EnvFileError]:
    """Parse env file content into a mapping.

    Later assignments override earlier ones, as they would when sourced.
    """
    values: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        match = _ASSIGNMENT.match(stripped)
        if match is None:
            return Err(
                EnvFileError(f"not a KEY=value assignment: {stripped!r}", path=path, line=lineno)
            )

        key, raw = match.group(1), match.group(2)
        value = _unquote(raw)
        if value is None:
            return Err(EnvFileError(f"unsupported value for {key}: {raw!r}", path=path, line=lineno))
        values[key] = value

    return Ok(values)


def load_env_file(path: Path) -> Result[dict[str, str], EnvFileError]:
    """Read and parse an env file."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(EnvFileError(f"file not found: {path}", path=path))
    except PermissionError:
        return Err(EnvFileError(f"permission denied reading: {path}", path=path))
    except UnicodeDecodeError as e:
        return Err(EnvFileError(f"invalid UTF-8 in {path}: {e}", path=path))
    except OSError as e:
        return Err(EnvFileError(f"error reading {path}: {e}", path=path))

    return parse_env_text(text, path=path)
