"""User-level path utilities."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

__all__ = [
    "clear_caches",
    "home",
    "user_config_dir",
    "user_config_path",
]

APP_NAME = "knr"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get user's home directory (HOME first, for CI/container scenarios)."""
    home_env = os.environ.get("HOME")
    if home_env:
        return Path(home_env)
    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """Get the user-level configuration directory.

    Location: $XDG_CONFIG_HOME/knr/ or ~/.config/knr/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


def user_config_path() -> Path:
    return user_config_dir() / "config.toml"


def clear_caches() -> None:
    """Clear all cached paths.

    Useful for testing when environment variables change.
    """
    home.cache_clear()
    user_config_dir.cache_clear()
