"""Run configuration.

A ``Configuration`` is built once at startup from CLI flags, the environment
and an optional user config file, then passed explicitly to every step.
Precedence: flags > environment > user config file > defaults.

User config file (``~/.config/knr/config.toml``):

    mail_enforce = "@example\\.com$"
    chroot = "schroot -c focal-amd64 --"
    abi_fetcher = "/opt/kteam-tools/getabis"
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str

__all__ = [
    "Configuration",
    "ConfigError",
    "FileConfig",
    "DEFAULT_ABI_FETCHER",
    "DEFAULT_MAIL_ENFORCE",
    "ENV_ABI_FETCHER",
    "ENV_CHROOT",
    "ENV_EMAIL",
    "ENV_EMAIL_FALLBACK",
    "ENV_MAIL_ENFORCE",
    "build_configuration",
    "load_file_config",
]

DEFAULT_MAIL_ENFORCE = r"@canonical\.com$"
DEFAULT_ABI_FETCHER = "getabis"

ENV_EMAIL = "DEBEMAIL"
ENV_EMAIL_FALLBACK = "EMAIL"
ENV_MAIL_ENFORCE = "KNR_MAILENFORCE"
ENV_CHROOT = "CHROOT"
ENV_ABI_FETCHER = "KNR_ABI_FETCHER"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Settings read from the user config file. All optional."""

    mail_enforce: str | None = None
    chroot: str | None = None
    abi_fetcher: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> FileConfig:
        return cls(
            mail_enforce=get_str(data, "mail_enforce"),
            chroot=get_str(data, "chroot"),
            abi_fetcher=get_str(data, "abi_fetcher"),
        )


@dataclass(frozen=True, slots=True)
class Configuration:
    """Immutable settings for one run.

    Attributes:
        dry_run: Render mutating commands instead of running them.
        reuse_abi: Rename the existing ABI directory instead of fetching.
        chroot: Command prefix for build-system calls (e.g. "schroot -c x --").
        mail_enforce: Regex the operator email must match.
        email: Operator email, None when not configured.
        abi_fetcher: Command that downloads and stages reference ABI data.
    """

    dry_run: bool = False
    reuse_abi: bool = False
    chroot: str | None = None
    mail_enforce: str = DEFAULT_MAIL_ENFORCE
    email: str | None = None
    abi_fetcher: str = DEFAULT_ABI_FETCHER


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config {path}: {e}", path=path))


def load_file_config(path: Path) -> Result[FileConfig, ConfigError]:
    """Load the user config file. A missing file yields defaults."""
    if not path.exists():
        return Ok(FileConfig())

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(FileConfig.from_dict(result.value))


def _env(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key, "").strip()
    return value or None


def build_configuration(
    *,
    dry_run: bool,
    reuse_abi: bool,
    environ: Mapping[str, str],
    file_config: FileConfig | None = None,
) -> Configuration:
    """Assemble the run configuration from flags, environment and file."""
    fc = file_config or FileConfig()
    return Configuration(
        dry_run=dry_run,
        reuse_abi=reuse_abi,
        chroot=_env(environ, ENV_CHROOT) or fc.chroot,
        mail_enforce=_env(environ, ENV_MAIL_ENFORCE) or fc.mail_enforce or DEFAULT_MAIL_ENFORCE,
        email=_env(environ, ENV_EMAIL) or _env(environ, ENV_EMAIL_FALLBACK),
        abi_fetcher=_env(environ, ENV_ABI_FETCHER) or fc.abi_fetcher or DEFAULT_ABI_FETCHER,
    )
