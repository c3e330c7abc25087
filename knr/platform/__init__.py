"""Platform layer: processes, command runner and user paths."""

from .paths import user_config_dir, user_config_path
from .process import ProcessError, run, run_silent
from .runner import CommandInvocation, CommandRunner, RunMode

__all__ = [
    "CommandInvocation",
    "CommandRunner",
    "ProcessError",
    "RunMode",
    "run",
    "run_silent",
    "user_config_dir",
    "user_config_path",
]
