"""Deep resolution of shallow reference lists.

Account endpoints answer with thin references -- bare ids, or objects
carrying an ``id`` plus a few account-specific fields (``count``,
``binding``...), with ``None`` for empty slots.  :func:`resolve_deep` looks
the referenced objects up in batches and merges the full objects back into
the original list.

The input list keeps its length, order and holes.  Bare ids become
``{"id": ...}`` dicts; existing dicts are updated in place, so fields the
lookup does not return (such as ``count``) survive.

All batches are dispatched before any is awaited.  The join is
all-or-nothing: the first failing batch cancels the others and raises
:class:`~gw2api.exceptions.BatchError`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, MutableSequence, Sequence
from typing import Any, Optional, TypeVar

from gw2api.exceptions import BatchError, DecodeError
from gw2api.models import DEFAULT_BATCH_SIZE, Identifier
from gw2api.output import get_output

T = TypeVar("T")

Lookup = Callable[[list[Identifier]], Awaitable[Any]]
"""Coroutine function taking a list of ids and returning a list of full objects."""


def chunked(values: Sequence[T], size: int) -> list[list[T]]:
    """Split *values* into consecutive lists of at most *size* elements."""
    if size < 1:
        raise ValueError(f"batch size must be at least 1, got {size}")
    return [list(values[i:i + size]) for i in range(0, len(values), size)]


def collect_ids(items: Sequence[Any]) -> list[Identifier]:
    """Return the distinct identifiers referenced by *items*, in first-seen order.

    Holes (any falsy element) are skipped.  Dicts contribute their ``id``.
    """
    seen: dict[Identifier, None] = {}
    for item in items:
        if not item:
            continue
        identifier = item.get("id") if isinstance(item, dict) else item
        if identifier is not None:
            seen.setdefault(identifier, None)
    return list(seen)


async def lookup_batches(
    lookup: Lookup,
    ids: Sequence[Identifier],
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_concurrency: Optional[int] = None,
) -> list[dict[str, Any]]:
    """Look *ids* up in concurrent batches and return the flattened results.

    Results are concatenated in batch order, regardless of which batch
    finishes first.

    Raises:
        BatchError: If any batch fails.  The original exception is chained.
        DecodeError: If a lookup answers with something other than a list.
    """
    batches = chunked(ids, batch_size)
    if not batches:
        return []

    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _one(batch: list[Identifier]) -> Any:
        try:
            if semaphore is None:
                return await lookup(batch)
            async with semaphore:
                return await lookup(batch)
        except Exception as exc:
            raise BatchError(
                f"Lookup of {len(batch)} ids failed: {exc}", batch=batch
            ) from exc

    get_output().debug(f"Deep lookup: {len(ids)} ids in {len(batches)} batches")
    tasks = [asyncio.ensure_future(_one(batch)) for batch in batches]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise

    flat: list[dict[str, Any]] = []
    for result in results:
        if not isinstance(result, list):
            raise DecodeError(
                f"Deep lookup expected a list, got {type(result).__name__}"
            )
        flat.extend(result)
    return flat


def merge_details(items: MutableSequence[Any], details: Sequence[dict[str, Any]]) -> MutableSequence[Any]:
    """Merge *details* into *items* in place, matching on ``id``."""
    by_id = {detail.get("id"): detail for detail in details if isinstance(detail, dict)}

    for index, item in enumerate(items):
        if not item:
            continue
        if not isinstance(item, dict):
            item = {"id": item}
            items[index] = item
        match = by_id.get(item.get("id"))
        if match is not None:
            item.update(match)
    return items


async def resolve_deep(
    lookup: Lookup,
    items: Optional[MutableSequence[Any]],
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_concurrency: Optional[int] = None,
) -> Optional[MutableSequence[Any]]:
    """Replace shallow references in *items* with full objects from *lookup*.

    Args:
        lookup: Coroutine function mapping a list of ids to full objects,
            e.g. :meth:`gw2api.api.Gw2Client.get_items`.
        items: Shallow item list; mutated in place and returned.  ``None``
            is returned unchanged.
        batch_size: Maximum ids per lookup call.
        max_concurrency: Optional cap on in-flight lookups.

    Returns:
        *items*, deep-populated, with its length, order and holes intact.

    Example::

        bank = [5, None, {"id": 7, "count": 250}]
        await resolve_deep(client.get_items, bank)
        # [{"id": 5, "name": ...}, None, {"id": 7, "count": 250, "name": ...}]
    """
    if not items:
        return items
    details = await lookup_batches(lookup, collect_ids(items), batch_size, max_concurrency)
    return merge_details(items, details)
