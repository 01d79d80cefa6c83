"""Exception hierarchy for Spectra."""

from .base import SpectraError
from .config import ConfigurationError, InvalidConfigError, ServerUnreachableError
from .scan import EntryUnreadableError, RootUnreadableError, ScanError
from .store import SnapshotValidationError, StoreError, StoreUnavailableError

__all__ = [
    "SpectraError",
    "ScanError",
    "RootUnreadableError",
    "EntryUnreadableError",
    "StoreError",
    "StoreUnavailableError",
    "SnapshotValidationError",
    "ConfigurationError",
    "InvalidConfigError",
    "ServerUnreachableError",
]
