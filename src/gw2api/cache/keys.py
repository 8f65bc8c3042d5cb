"""Deterministic cache keys for GET requests.

A key is the MD5 hex digest of the canonical request string::

    endpoint                          # no parameters
    endpoint?k1=v1&k2=v2              # parameters sorted by name

Values are rendered with :func:`str`, so ``None`` becomes ``"None"`` and
``True`` becomes ``"True"``.  That rendering is stable across runs, which is
all the key needs; it is not the query string actually sent on the wire.

Parameter insertion order never matters, and any change in a value yields a
different key.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Any, Optional


def canonical_request(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Return the canonical ``endpoint?k=v&...`` string for *params*."""
    if not params:
        return endpoint
    pairs = [f"{key}={params[key]}" for key in sorted(params)]
    return f"{endpoint}?{'&'.join(pairs)}"


def derive_key(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Derive the cache key for a GET of *endpoint* with *params*.

    Args:
        endpoint: Endpoint path, e.g. ``"/items"``.
        params: Query parameters, excluding any credential.

    Returns:
        A 32-character hexadecimal digest.
    """
    raw = canonical_request(endpoint, params)
    return hashlib.md5(raw.encode("utf-8")).hexdigest()
