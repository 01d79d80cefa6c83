"""Filesystem scanning: extension ledger, top-K tracker and the scan engine."""

from .ledger import ExtensionLedger, normalize_extension
from .scanner import DEFAULT_TOP_LIMIT, DirectoryListing, Scanner, list_directory, scan
from .topk import TopKTracker

__all__ = [
    "DEFAULT_TOP_LIMIT",
    "DirectoryListing",
    "ExtensionLedger",
    "Scanner",
    "TopKTracker",
    "list_directory",
    "normalize_extension",
    "scan",
]
