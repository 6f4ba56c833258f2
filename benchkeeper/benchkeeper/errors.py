"""
Exceptions raised by benchkeeper.

Listing errors are fatal to the whole call. Deletion errors during cleanup are
recorded per item and never raised.
"""

from pathlib import Path
from typing import Optional, Union


class BenchKeeperError(Exception):
    """Base class for all benchkeeper errors"""


class ResultIOError(BenchKeeperError, OSError):
    """A result file could not be read"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ResultDirError(ResultIOError):
    """The result directory could not be read"""


class ResultParseError(BenchKeeperError, ValueError):
    """A result file is not valid JSON"""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ConfigError(BenchKeeperError):
    """Configuration is missing or malformed"""
