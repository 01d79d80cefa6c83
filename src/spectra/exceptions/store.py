"""Snapshot store and ingestion exceptions."""

from typing import Any

from .base import SpectraError


class StoreError(SpectraError):
    """Base class for snapshot-store errors."""

    pass


class StoreUnavailableError(StoreError):
    """Raised when the snapshot store cannot be reached or fails a read/write."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Snapshot store unavailable during {operation}",
            details={"operation": operation, "reason": reason},
        )
        self.operation = operation
        self.reason = reason


class SnapshotValidationError(StoreError):
    """Raised when an ingested snapshot payload is malformed."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid snapshot field '{field}'",
            details={"field": field, "value": repr(value), "reason": reason},
        )
        self.field = field
        self.value = value
        self.reason = reason
