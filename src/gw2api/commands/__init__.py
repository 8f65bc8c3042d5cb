"""Built-in CLI sub-commands for gw2api.

* :mod:`~gw2api.commands.key` -- store and inspect the API key.
* :mod:`~gw2api.commands.config` -- view and modify saved settings.
* :mod:`~gw2api.commands.fetch` -- ``get``, ``account`` and ``call``.

Commands that talk to the API go through :func:`run_with_client`, which
opens the persistent store and a :class:`~gw2api.api.Gw2Client`, runs one
coroutine, and turns :class:`~gw2api.exceptions.Gw2ApiError` into an
error message plus the matching exit code.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer

from gw2api.exceptions import Gw2ApiError
from gw2api.output import error

T = TypeVar("T")


def open_store() -> Any:
    """Open the CLI's persistent :class:`~gw2api.storage.DiskStore`."""
    from gw2api.config import get_cache_dir
    from gw2api.storage import DiskStore

    return DiskStore(get_cache_dir() / "store")


def run_with_client(ctx: typer.Context, operation: Callable[[Any], Awaitable[T]]) -> T:
    """Run ``operation(client)`` against a client built from the resolved config.

    Raises:
        typer.Exit: With the error's exit code when a
            :class:`~gw2api.exceptions.Gw2ApiError` is raised.
    """
    from gw2api.api import Gw2Client
    from gw2api.config import resolve_config

    obj = ctx.obj or {}
    try:
        config = obj.get("config") or resolve_config()
        with open_store() as store:

            async def _run() -> T:
                async with Gw2Client(config, store, transport=obj.get("transport")) as api:
                    return await operation(api)

            return asyncio.run(_run())
    except Gw2ApiError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
