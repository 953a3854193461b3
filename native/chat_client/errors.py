"""Client-side errors. ``str(error)`` is the text shown to the user."""

from __future__ import annotations


class APIError(Exception):
    """Base class for failures talking to the relay."""


class InvalidURLError(APIError):
    def __init__(self, url: str):
        self.url = url
        super().__init__("Invalid URL")


class NetworkError(APIError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class ServerError(APIError):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Server error {status_code}: {message}")


class DecodingError(APIError):
    def __init__(self, cause: Exception | str):
        self.cause = cause
        super().__init__(f"Failed to decode response: {cause}")


class UnknownAPIError(APIError):
    def __init__(self) -> None:
        super().__init__("Unknown error occurred")


class AuthRequiredError(Exception):
    """Raised locally when a send is attempted without an identity."""

    def __init__(self) -> None:
        super().__init__("You need to be signed in to send messages")
