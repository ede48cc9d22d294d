"""Custom exception hierarchy for the TechDocs publisher."""

from __future__ import annotations


class TechDocsError(Exception):
    """Base exception for all publisher-specific errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(TechDocsError):
    """Raised when configuration is invalid or missing."""
    pass


class StorageError(TechDocsError):
    """Raised when an object storage operation fails."""
    pass


class ConnectivityError(StorageError):
    """Raised when the configured bucket cannot be reached."""
    pass


class NotFoundError(StorageError):
    """Raised when a requested object does not exist."""
    pass


class PublishError(StorageError):
    """Base class for errors raised while publishing a docs site."""
    pass


class ReadError(PublishError):
    """Raised when a local file of the generated site cannot be read."""
    pass


class UploadError(PublishError):
    """Raised when writing a file to the object store fails."""
    pass


__all__ = [
    "TechDocsError",
    "ConfigError",
    "StorageError",
    "ConnectivityError",
    "NotFoundError",
    "PublishError",
    "ReadError",
    "UploadError",
]
