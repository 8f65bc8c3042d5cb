"""Cache-key derivation for gw2api.

The request engine stores every successful response body under a key
derived from the endpoint and its query parameters.  See
:func:`derive_key` for the exact recipe.
"""

from gw2api.cache.keys import canonical_request, derive_key

__all__ = ["canonical_request", "derive_key"]
