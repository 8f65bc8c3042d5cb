"""Numeric process exit codes used by the ``gw2api`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~gw2api.exceptions.Gw2ApiError` subclass.  Shell
scripts wrapping the CLI can inspect the exit code to tell a rejected API
key from a network outage without parsing stderr.

Example::

    $ gw2api account bank
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- the API key was missing or rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The call was made with invalid or conflicting arguments."""

EXIT_AUTH_FAILURE = 3
"""No API key was available, or the API rejected it (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested resource does not exist (HTTP 404)."""

EXIT_HTTP_ERROR = 5
"""The API answered with a status outside the accepted success set."""

EXIT_TRANSPORT_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DECODE_ERROR = 7
"""The API answered with a body that is not valid JSON."""

EXIT_BATCH_FAILURE = 8
"""One of the batched detail lookups of a deep resolution failed."""
