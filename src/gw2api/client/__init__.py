"""Request engine for gw2api.

Three layers, each usable on its own:

:class:`RequestExecutor`
    cache-first GET with auth injection, backed by :class:`httpx.AsyncClient`.
:func:`fetch_one_or_many`
    the ``/endpoint/{id}`` vs ``?ids=`` addressing convention.
:func:`resolve_deep`
    batched, concurrent resolution of shallow id lists into full objects.

Example::

    from gw2api.client import RequestExecutor, fetch_one_or_many
    from gw2api.models import ClientConfig, ManyIds
    from gw2api.storage import MemoryStore

    async with RequestExecutor(ClientConfig(), MemoryStore()) as executor:
        items = await fetch_one_or_many(executor, "/items", ManyIds([15, 411]), False)
"""

from gw2api.client.addresser import build_request, fetch_one_or_many
from gw2api.client.executor import ACCEPTED_STATUSES, RequestExecutor
from gw2api.client.resolver import chunked, collect_ids, lookup_batches, merge_details, resolve_deep

__all__ = [
    "ACCEPTED_STATUSES",
    "RequestExecutor",
    "build_request",
    "chunked",
    "collect_ids",
    "fetch_one_or_many",
    "lookup_batches",
    "merge_details",
    "resolve_deep",
]
