"""Exception types raised by the ``reorganizer`` package."""
from pathlib import Path


class ReorganizerError(Exception):
    """Base error for the project."""


class UsageError(ReorganizerError):
    pass


class FatalIOError(ReorganizerError):
    """An I/O failure that ends the whole run.

    Raised for directory listing failures, files that cannot be opened for
    metadata reading and directories that cannot be created for any reason
    other than already existing.
    """

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class DecodeError(ReorganizerError):
    """The metadata container of an image could not be decoded."""


class MoveError(ReorganizerError):
    def __init__(self, source: Path, target: Path, reason: str):
        super().__init__(f"could not move {source} -> {target}: {reason}")
        self.source = source
        self.target = target
        self.reason = reason
