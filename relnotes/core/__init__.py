"""Core domain types: results, exit codes, configuration."""

from .config import Config, ConfigError, GithubConfig, NotesConfig, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "GithubConfig",
    "NotesConfig",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
