"""Exception hierarchy for gw2api.

All exceptions inherit from :class:`Gw2ApiError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`gw2api.exit_codes`.
Library callers catch the specific subclasses; the command line catches
``Gw2ApiError`` and exits with the matching code.

Subclass hierarchy::

    Gw2ApiError (exit 1)
    +-- UsageError          (exit 2)
    +-- HttpStatusError     (exit 5)
    |   +-- AuthError       (exit 3)
    |   +-- NotFoundError   (exit 4)
    |   +-- ServerError     (exit 5)
    +-- TransportError      (exit 6)
    +-- DecodeError         (exit 7)
    +-- BatchError          (exit 8)
    +-- ConfigError         (exit 1)
"""

from __future__ import annotations

from typing import Any, Optional

from gw2api.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_BATCH_FAILURE,
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_TRANSPORT_ERROR,
)


class Gw2ApiError(Exception):
    """Base exception for all gw2api errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(Gw2ApiError):
    """Raised when a call violates its contract (e.g. mutually exclusive arguments).

    Always raised before any network I/O is attempted.
    """

    exit_code = EXIT_INVALID_USAGE


class HttpStatusError(Gw2ApiError):
    """Raised when the API answers with a status outside the accepted set.

    The response body is never parsed on this path.

    Attributes:
        status_code: The HTTP status returned by the API, or ``None`` when
            the error was raised locally (see :class:`AuthError`).
        endpoint: The endpoint path that was requested.
    """

    exit_code = EXIT_HTTP_ERROR

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class AuthError(HttpStatusError):
    """Raised on HTTP 401/403, or when an authenticated call has no API key."""

    exit_code = EXIT_AUTH_FAILURE


class NotFoundError(HttpStatusError):
    """Raised when the API returns HTTP 404."""

    exit_code = EXIT_NOT_FOUND


class ServerError(HttpStatusError):
    """Raised when the API returns an HTTP 5xx status."""

    exit_code = EXIT_HTTP_ERROR


class TransportError(Gw2ApiError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Never retried.
    """

    exit_code = EXIT_TRANSPORT_ERROR


class DecodeError(Gw2ApiError):
    """Raised when a response body (live or cached) is not the JSON we expected."""

    exit_code = EXIT_DECODE_ERROR


class BatchError(Gw2ApiError):
    """Raised when one batch of a deep resolution fails.

    The original exception is available as ``__cause__``.  No partial
    results are returned.

    Attributes:
        batch: The identifiers that were being looked up.
    """

    exit_code = EXIT_BATCH_FAILURE

    def __init__(self, message: str, batch: list[Any]):
        super().__init__(message)
        self.batch = batch


class ConfigError(Gw2ApiError):
    """Raised for configuration problems (invalid settings file, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
