"""
Shared exceptions for gistaviewer.

Exception Hierarchy:
    GistaViewerError (base)
    ├── TransportFailure (request never produced a usable response)
    └── CredentialStoreError (saved credentials could not be written)
"""

from __future__ import annotations


class GistaViewerError(Exception):
    """Base exception for all gistaviewer errors."""


class TransportFailure(GistaViewerError):
    """
    Raised when a request fails below the HTTP status level.

    Covers connectivity problems, timeouts, and response bodies that could
    not be decoded into the expected model. The message is shown to the
    user as-is.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class CredentialStoreError(GistaViewerError):
    """Raised when credentials cannot be persisted or removed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f'Could not update credentials file {path}: {reason}')
