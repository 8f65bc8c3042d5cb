"""Key-value storage backends for gw2api.

The request engine stores raw response bodies and the API key in a
:class:`KeyValueStore`.  Any object with ``get(key)`` and ``set(key,
value)`` works; either method may be synchronous or return an awaitable.

Backends shipped here:

* :class:`MemoryStore` -- a plain in-process dict, the default.
* :class:`DiskStore` -- persistent storage via :mod:`diskcache`, used by
  the command line so responses and the API key survive between runs.
"""

from gw2api.storage.base import API_KEY_STORE_KEY, KeyValueStore, resolve_maybe_awaitable
from gw2api.storage.disk import DiskStore
from gw2api.storage.memory import MemoryStore

__all__ = [
    "API_KEY_STORE_KEY",
    "DiskStore",
    "KeyValueStore",
    "MemoryStore",
    "resolve_maybe_awaitable",
]
