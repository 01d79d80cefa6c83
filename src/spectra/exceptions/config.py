"""Configuration and transport exceptions."""

from typing import Any

from .base import SpectraError


class ConfigurationError(SpectraError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class ServerUnreachableError(SpectraError):
    """Raised when the Spectra server cannot be reached or answers with an error."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Spectra server request failed: {url}",
            details={"url": url, "reason": reason},
        )
        self.url = url
        self.reason = reason
