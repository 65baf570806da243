"""Exception hierarchy for the WITSML API client.

Only transport and programming failures propagate as exceptions. Authorization
outcomes (unresolvable slot, cancelled reauthorization, repeated 401) are
returned to the caller as ordinary responses.
"""

from __future__ import annotations


class ApiClientError(Exception):
    """Base exception for all API client errors."""

    pass


class ConfigurationError(ApiClientError):
    """Raised when a configured origin cannot be parsed."""

    pass


class AuthorizationUnavailableError(ApiClientError):
    """Raised when authorization is required but no token could be obtained.

    The request is never sent.
    """

    pass


class TransportError(ApiClientError, ConnectionError):
    """Raised when the HTTP request fails below the HTTP layer.

    Wraps network, DNS and TLS failures reported by httpx.
    """

    pass


class RequestAbortedError(ApiClientError):
    """Raised when a request is cancelled through its abort signal."""

    def __init__(self, reason: str | None = None):
        super().__init__(reason or "Request aborted")
        self.reason = reason


def ignore_abort(error: BaseException) -> None:
    """Swallow abort errors and re-raise everything else.

    Useful as a catch-all in callers that already know they cancelled.
    """
    if isinstance(error, RequestAbortedError):
        return
    raise error
