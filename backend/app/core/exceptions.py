"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class RelayError(Exception):
    """Base exception for the chat relay."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidRequestError(RelayError):
    """Missing or malformed client input."""

    pass


class UpstreamError(RelayError):
    """Completion API or network failure."""

    pass


class CompletionDecodeError(UpstreamError):
    """Completion API returned a payload without usable text."""

    def __init__(self, message: str, raw_payload: Any = None):
        super().__init__(message, details={"raw_payload": raw_payload})
        self.raw_payload = raw_payload


class PersistenceError(RelayError):
    """History store write failed."""

    pass


class HistoryReadError(RelayError):
    """History store read failed."""

    pass
