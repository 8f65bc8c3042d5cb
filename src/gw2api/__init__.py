"""gw2api -- caching async client for the Guild Wars 2 v2 API.

Turns "give me these objects" calls into as few HTTP requests as possible:
responses are cached in a pluggable key-value store, id lists are sent as
one sorted ``?ids=`` query, and account endpoints that only return ids can
be resolved into full objects through batched, concurrent lookups.

Typical use::

    import asyncio
    from gw2api import Gw2Client

    async def main():
        async with Gw2Client() as api:
            print(await api.get_items([15, 411]))

    asyncio.run(main())

Modules:
    api: :class:`Gw2Client`, the endpoint-level facade.
    client: the request engine (executor, addresser, deep resolver).
    cache: cache-key derivation.
    storage: key-value store protocol and backends.
    models: configuration and request value types.
    exceptions: error hierarchy with CLI exit codes.
    app: the ``gw2api`` command line.
"""

__version__ = "0.3.0"

from gw2api.api import Gw2Client  # noqa: E402
from gw2api.models import ClientConfig, ManyIds, NoIds, SingleId, select_ids  # noqa: E402
from gw2api.storage import DiskStore, KeyValueStore, MemoryStore  # noqa: E402

__all__ = [
    "ClientConfig",
    "DiskStore",
    "Gw2Client",
    "KeyValueStore",
    "ManyIds",
    "MemoryStore",
    "NoIds",
    "SingleId",
    "__version__",
    "select_ids",
]
