"""Core domain types and logic."""

from .config import Configuration, ConfigError, build_configuration, load_file_config
from .envfile import EnvFileError, load_env_file, parse_env_text
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Configuration",
    "ConfigError",
    "build_configuration",
    "load_file_config",
    # envfile
    "EnvFileError",
    "load_env_file",
    "parse_env_text",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
