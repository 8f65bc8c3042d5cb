"""Cache-first GET execution against the remote API.

:class:`RequestExecutor` turns one ``(endpoint, params, auth_required)``
triple into decoded JSON:

1. **Auth injection** -- the API key is loaded from the store and added as
   a bearer header or an ``access_token`` parameter.
2. **Cache key** -- derived from the endpoint and the caller's parameters.
   Credential parameters never take part, so the key does not depend on
   which API key was used.
3. **Cache read** -- when ``cache_enabled``, a stored body is decoded and
   returned with no network I/O.
4. **Network** -- one GET through :class:`httpx.AsyncClient`; no retries.
5. **Status check** -- only 200 and 206 are accepted.
6. **Decode** -- the buffered body is parsed as JSON.
7. **Cache write** -- when ``store_writes_enabled``, the raw body text is
   stored, independently of ``cache_enabled``.

Errors are raised, never logged or stored.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from gw2api.auth import AuthResult, authenticate, strip_credentials
from gw2api.cache import derive_key
from gw2api.exceptions import (
    AuthError,
    DecodeError,
    HttpStatusError,
    NotFoundError,
    ServerError,
    TransportError,
)
from gw2api.models import ClientConfig, ParamValue, RequestDescriptor
from gw2api.output import get_output
from gw2api.storage.base import KeyValueStore, resolve_maybe_awaitable

ACCEPTED_STATUSES = frozenset({200, 206})


class RequestExecutor:
    """Issues cache-aware GET requests.

    Must be used as an async context manager so that the underlying
    :class:`httpx.AsyncClient` is opened and closed.  The ``config`` and
    ``store`` attributes are read on every call, so the owning client can
    swap them between calls.

    Args:
        config: Base URL, timeout, cache and auth settings.
        store: Key-value store for cached bodies and the API key.
        transport: Optional :mod:`httpx` transport (tests pass an
            :class:`httpx.MockTransport`).

    Example::

        async with RequestExecutor(ClientConfig(), MemoryStore()) as executor:
            item = await executor.execute("/items/15", auth_required=False)
    """

    def __init__(
        self,
        config: ClientConfig,
        store: KeyValueStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.store = store
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> RequestExecutor:
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            follow_redirects=True,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def execute(
        self,
        endpoint: str,
        params: Optional[dict[str, ParamValue]] = None,
        auth_required: bool = True,
    ) -> Any:
        """Fetch *endpoint* and return the decoded JSON value.

        Args:
            endpoint: Endpoint path relative to the base URL, e.g. ``"/items"``.
            params: Query parameters.  Never mutated.
            auth_required: Whether to inject the stored API key.

        Returns:
            The decoded JSON value, from the store or from the network.

        Raises:
            AuthError: If no API key is stored, or on HTTP 401/403.
            NotFoundError: On HTTP 404.
            ServerError: On HTTP 5xx.
            HttpStatusError: On any other status outside 200/206.
            TransportError: On connection, DNS or timeout failures.
            DecodeError: If the body is not valid JSON.
        """
        descriptor = RequestDescriptor(
            endpoint=endpoint,
            params=dict(params or {}),
            auth_required=auth_required,
        )
        return await self.run(descriptor)

    async def run(self, descriptor: RequestDescriptor) -> Any:
        """Execute a prepared :class:`~gw2api.models.RequestDescriptor`."""
        config = self.config
        output = get_output()

        auth = AuthResult()
        if descriptor.auth_required:
            auth = await authenticate(self.store, config.use_auth_header, descriptor.endpoint)

        cache_key = derive_key(descriptor.endpoint, strip_credentials(descriptor.params))

        if config.cache_enabled:
            cached = await resolve_maybe_awaitable(self.store.get(cache_key))
            if cached is not None:
                output.debug(f"Cache hit: {descriptor.endpoint} ({cache_key})")
                return _decode(cached, descriptor.endpoint)

        body = await self._fetch(descriptor, auth)
        data = _decode(body, descriptor.endpoint)

        if config.store_writes_enabled:
            await resolve_maybe_awaitable(self.store.set(cache_key, body))

        return data

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _fetch(self, descriptor: RequestDescriptor, auth: AuthResult) -> str:
        """Perform the GET and return the buffered body text."""
        assert self._client is not None, "Executor not opened -- use 'async with'"

        params = {**descriptor.params, **auth.params}
        get_output().debug(f"GET {descriptor.endpoint} {sorted(descriptor.params)}")
        try:
            response = await self._client.get(
                descriptor.endpoint, params=params, headers=auth.headers
            )
        except httpx.TransportError as exc:
            raise TransportError(f"Request to {descriptor.endpoint} failed: {exc}") from exc

        _raise_for_status(response, descriptor.endpoint)
        return response.text


def _raise_for_status(response: httpx.Response, endpoint: str) -> None:
    """Raise a typed :class:`HttpStatusError` for statuses outside 200/206."""
    status = response.status_code
    if status in ACCEPTED_STATUSES:
        return

    message = f"HTTP {status} from {endpoint}"
    if status in (401, 403):
        raise AuthError(message, status_code=status, endpoint=endpoint)
    if status == 404:
        raise NotFoundError(message, status_code=status, endpoint=endpoint)
    if status >= 500:
        raise ServerError(message, status_code=status, endpoint=endpoint)
    raise HttpStatusError(message, status_code=status, endpoint=endpoint)


def _decode(body: str, endpoint: str) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError) as exc:
        raise DecodeError(f"Invalid JSON from {endpoint}: {exc}") from exc
