"""
SDS Watch exceptions module.

Contains exception classes used across multiple modules to avoid circular dependencies.
"""

from __future__ import annotations


class SdsWatchError(Exception):
    """Base class for SDS Watch errors."""

    pass


class TransportError(SdsWatchError):
    """Exception raised when a call to the data store fails.

    The message is meant to be shown to the user as-is (for example
    "Error getting streams"); details of the failure are logged where
    the error is raised.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ResolutionError(SdsWatchError):
    """Exception raised when the current selection does not resolve to a known
    namespace, stream and chartable type."""

    pass
