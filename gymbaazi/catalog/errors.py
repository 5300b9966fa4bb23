"""Catalog failures with user-facing titles and messages.

``is_retryable`` marks transient failures (connectivity, timeouts, server
errors, throttling) that a client may reasonably retry.
"""

from __future__ import annotations

import httpx


class CatalogError(Exception):
    """Base class for exercise catalog failures."""

    title = "Something Went Wrong"
    default_message = "An unexpected error occurred."
    is_retryable = False

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "title": self.title,
            "message": self.message,
            "retryable": self.is_retryable,
        }

    @classmethod
    def from_exception(cls, exc: Exception) -> CatalogError:
        """Map a transport or decoding exception to the matching catalog error."""
        if isinstance(exc, CatalogError):
            return exc
        if isinstance(exc, httpx.TimeoutException):
            return CatalogTimeoutError()
        if isinstance(exc, (httpx.ConnectError, httpx.NetworkError)):
            return NetworkUnavailableError()
        if isinstance(exc, (ValueError, KeyError, TypeError)):
            return DecodingError(detail=str(exc))
        return CatalogError(str(exc) or None)


class NotFoundError(CatalogError):
    title = "Not Found"
    default_message = "Exercise not found."


class RateLimitedError(CatalogError):
    title = "Too Many Requests"
    default_message = "You've made too many requests. Please wait a moment."
    is_retryable = True


class ServerError(CatalogError):
    title = "Server Error"
    is_retryable = True

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(
            f"The server returned an error ({status_code}). Please try again later."
        )


class DecodingError(CatalogError):
    title = "Data Error"
    default_message = "We couldn't process the data. Please try again."

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(message)


class NetworkUnavailableError(CatalogError):
    title = "No Connection"
    default_message = "Please check your internet connection and try again."
    is_retryable = True


class CatalogTimeoutError(CatalogError):
    title = "Request Timed Out"
    default_message = "The request took too long. Please try again."
    is_retryable = True
