"""The storage protocol the request engine is written against."""

from __future__ import annotations

import inspect
from typing import Awaitable, Optional, Protocol, TypeVar, Union, runtime_checkable

T = TypeVar("T")

API_KEY_STORE_KEY = "apiKey"
"""Reserved key under which the API key is persisted."""


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal get/set storage.

    Implementations may be synchronous or asynchronous; callers always pass
    the result through :func:`resolve_maybe_awaitable`.  There is no
    eviction and no expiry: an entry stays valid until overwritten.
    """

    def get(self, key: str) -> Union[Optional[str], Awaitable[Optional[str]]]:
        """Return the stored value, or ``None`` when the key is absent."""
        ...

    def set(self, key: str, value: str) -> Union[None, Awaitable[None]]:
        """Store *value* under *key*, replacing any previous value."""
        ...


async def resolve_maybe_awaitable(value: Union[T, Awaitable[T]]) -> T:
    """Await *value* if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value  # type: ignore[return-value]

