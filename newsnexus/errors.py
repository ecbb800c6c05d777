"""Exception types shared by the news, article and summary clients.

Every error raised across a service boundary derives from
:class:`NewsNexusError`, so callers can catch one type and fall back to
whatever text they already have.
"""

from __future__ import annotations


class NewsNexusError(Exception):
    """Base class for all recoverable client errors."""


class InvalidURLError(NewsNexusError):
    def __init__(self, url: str = "") -> None:
        super().__init__(f"Invalid URL: {url}" if url else "Invalid URL")
        self.url = url


class NetworkError(NewsNexusError):
    """Transport-level failure (connection, timeout, protocol)."""


class DecodingError(NewsNexusError):
    """A response body could not be decoded into the expected shape."""


class ApiError(NewsNexusError):
    """An upstream service answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SummaryError(NewsNexusError):
    pass


class InsufficientContentError(SummaryError):
    def __init__(self) -> None:
        super().__init__("Not enough content to generate a summary")


class InvalidResponseError(SummaryError):
    def __init__(self, detail: str = "") -> None:
        msg = "Invalid response from summarization server"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class InvalidResponseFormatError(SummaryError):
    def __init__(self) -> None:
        super().__init__("Unable to parse summarization server response")


def user_message(exc: Exception) -> str:
    """Return the message shown to the user for a failed headline request."""
    if isinstance(exc, InvalidURLError):
        return "Invalid URL. Please try again later."
    if isinstance(exc, NetworkError):
        return f"Network error: {exc}"
    if isinstance(exc, DecodingError):
        return f"Could not process the data: {exc}"
    if isinstance(exc, ApiError):
        return exc.message
    return f"An unknown error occurred: {exc}"
