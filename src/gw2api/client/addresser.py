"""The ``/endpoint/{id}`` or ``/endpoint?ids=...`` addressing convention.

Most collection endpoints of the API can be queried three ways:

* ``GET /items`` -- every known id,
* ``GET /items/15`` -- one object,
* ``GET /items?ids=15,411`` -- several objects, as a JSON array.

:func:`build_request` picks the form from an
:data:`~gw2api.models.IdSelector`.  Id lists are already sorted by
:class:`~gw2api.models.ManyIds`, so ``[411, 15]`` and ``[15, 411]`` share
one cache entry.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import quote

from gw2api.models import IdSelector, ManyIds, NoIds, ParamValue, RequestDescriptor, SingleId

if TYPE_CHECKING:
    from gw2api.client.executor import RequestExecutor


def build_request(
    endpoint: str,
    selector: IdSelector,
    auth_required: bool = True,
    extra_params: Optional[Mapping[str, ParamValue]] = None,
) -> RequestDescriptor:
    """Build the request descriptor for *selector* against *endpoint*.

    Args:
        endpoint: Collection endpoint, e.g. ``"/items"``.
        selector: Which ids to address.
        auth_required: Whether the call needs the API key.
        extra_params: Fixed parameters (e.g. ``lang``) merged into the query.
            They take part in cache-key derivation.
    """
    params: dict[str, ParamValue] = {}

    if isinstance(selector, SingleId):
        endpoint = f"{endpoint}/{quote(str(selector.id), safe='')}"
    elif isinstance(selector, ManyIds):
        params["ids"] = selector.joined()
    elif not isinstance(selector, NoIds):
        raise TypeError(f"Not an id selector: {selector!r}")

    if extra_params:
        params.update(extra_params)

    return RequestDescriptor(endpoint=endpoint, params=params, auth_required=auth_required)


async def fetch_one_or_many(
    executor: RequestExecutor,
    endpoint: str,
    selector: IdSelector,
    auth_required: bool = True,
    extra_params: Optional[Mapping[str, ParamValue]] = None,
) -> Any:
    """Address *endpoint* according to *selector* and execute the request."""
    descriptor = build_request(endpoint, selector, auth_required, extra_params)
    return await executor.run(descriptor)
