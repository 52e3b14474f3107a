"""Process execution and host tool checks."""

from .process import ProcessError, run
from .tools import REQUIRED_TOOLS, missing_tools

__all__ = [
    "ProcessError",
    "REQUIRED_TOOLS",
    "missing_tools",
    "run",
]
