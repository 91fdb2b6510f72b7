"""Exceptions raised by zhchain.

Load-time errors are fatal to the converter being built. Conversion
errors never reach the caller of Converter.convert; the original text is
returned instead.
"""

from pathlib import Path
from typing import Optional


class LoadError(Exception):
    """Base class for failures while building a converter."""

    def __init__(self, message: str, path: Optional[Path | str] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


class DictFileNotFound(LoadError):
    """A profile or dictionary file does not exist."""


class DictIOError(LoadError):
    """Reading a profile or dictionary file failed part way."""


class MalformedConfig(LoadError, ValueError):
    """A profile could not be parsed into a dictionary tree."""


class ConvertError(Exception):
    """Substitution failed for a segment."""

    def __init__(self, message: str, segment: str = ""):
        super().__init__(message)
        self.segment = segment
