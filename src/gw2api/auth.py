"""API key handling for authenticated endpoints.

The Guild Wars 2 API accepts the key in one of two mutually exclusive
ways:

- an ``Authorization: Bearer <key>`` header, or
- an ``access_token=<key>`` query parameter (the only option in browsers,
  where the API does not answer ``OPTIONS`` pre-flight requests).

The key itself is never held by the client; it is read from the
key-value store under :data:`~gw2api.storage.API_KEY_STORE_KEY` on every
authenticated call.
"""

from __future__ import annotations

from typing import Any, Optional

from gw2api.exceptions import AuthError
from gw2api.storage.base import API_KEY_STORE_KEY, KeyValueStore, resolve_maybe_awaitable

ACCESS_TOKEN_PARAM = "access_token"
CREDENTIAL_PARAMS = frozenset({ACCESS_TOKEN_PARAM})
"""Query parameters that carry credentials and never enter a cache key."""


class AuthResult:
    """Headers and query parameters to inject into one request.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).
        params: Query-string parameters to add (e.g. ``{"access_token": "..."}``).
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ):
        self.headers = headers or {}
        self.params = params or {}

    def __repr__(self) -> str:
        return f"AuthResult(headers={sorted(self.headers)}, params={sorted(self.params)})"


def build_auth_result(api_key: str, use_header: bool) -> AuthResult:
    """Wrap *api_key* as either a bearer header or an ``access_token`` param."""
    if use_header:
        return AuthResult(headers={"Authorization": f"Bearer {api_key}"})
    return AuthResult(params={ACCESS_TOKEN_PARAM: api_key})


async def load_api_key(store: KeyValueStore) -> Optional[str]:
    """Read the persisted API key, or ``None`` when none has been set."""
    return await resolve_maybe_awaitable(store.get(API_KEY_STORE_KEY))


async def save_api_key(store: KeyValueStore, api_key: str) -> None:
    """Persist *api_key* in *store*."""
    await resolve_maybe_awaitable(store.set(API_KEY_STORE_KEY, api_key))


async def authenticate(store: KeyValueStore, use_header: bool, endpoint: str) -> AuthResult:
    """Load the API key and build the auth artifacts for *endpoint*.

    Raises:
        AuthError: If no API key has been stored.
    """
    api_key = await load_api_key(store)
    if not api_key:
        raise AuthError(
            f"{endpoint} requires an API key; set one with set_api_key()",
            endpoint=endpoint,
        )
    return build_auth_result(api_key, use_header)


def strip_credentials(params: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *params* without credential-carrying entries."""
    return {k: v for k, v in params.items() if k not in CREDENTIAL_PARAMS}


def mask_api_key(api_key: str) -> str:
    """Return *api_key* with all but its last four characters hidden."""
    if len(api_key) <= 4:
        return "*" * len(api_key)
    return "*" * (len(api_key) - 4) + api_key[-4:]
