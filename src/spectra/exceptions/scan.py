"""Scan-related exceptions: unreadable roots and entries."""

from pathlib import Path
from typing import Union

from .base import SpectraError


class ScanError(SpectraError):
    """Base class for scan-related errors."""

    pass


class RootUnreadableError(ScanError):
    """Raised when the scan root cannot be statted or listed.

    Fatal for the scan invocation; no partial result is produced.
    """

    def __init__(self, root: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot read scan root: {root}",
            details={"root": str(root), "reason": reason},
        )
        self.root = root
        self.reason = reason


class EntryUnreadableError(ScanError):
    """Raised by a walker when one entry under the root cannot be read.

    The aggregator absorbs it and skips the entry.
    """

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot read entry: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
