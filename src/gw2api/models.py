"""Canonical models shared across gw2api modules.

The models fall into two groups:

**Configuration** -- :class:`ClientConfig`, an immutable pydantic model held
by :class:`~gw2api.api.Gw2Client` and read by the request engine on every
call.  It is also the shape of the settings file managed by
:mod:`gw2api.config`.

**Request values** -- transient, never persisted:
    :class:`RequestDescriptor` and the id-selector union
    (:class:`NoIds`, :class:`SingleId`, :class:`ManyIds`) that decides how
    an endpoint is addressed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from gw2api.exceptions import UsageError

DEFAULT_BASE_URL = "https://api.guildwars2.com/v2"
DEFAULT_BATCH_SIZE = 100

Identifier = Union[int, str]
ParamValue = Union[str, int, float, bool, None]


# --- Client configuration ---


class ClientConfig(BaseModel):
    """Settings for one :class:`~gw2api.api.Gw2Client`.

    Instances are frozen; use :meth:`pydantic.BaseModel.model_copy` with
    ``update=`` (or the facade's setters) to derive a changed copy.  Two
    clients never share mutable state through their configuration.

    ``cache_enabled`` controls whether stored responses are *served*;
    ``store_writes_enabled`` controls whether fresh responses are *written*.
    The two are independent so a client can refresh the store without
    reading from it.

    Example::

        config = ClientConfig(lang="de")
        no_cache = config.model_copy(update={"cache_enabled": False})
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Versioned API root")
    lang: str = Field(default="en", description="Language code sent as 'lang'")
    cache_enabled: bool = Field(default=True, description="Serve responses from the store")
    store_writes_enabled: bool = Field(
        default=True, description="Write fresh responses to the store"
    )
    use_auth_header: bool = Field(
        default=False,
        description="Send the API key as a bearer header instead of ?access_token=",
    )
    timeout: float = Field(default=30, gt=0, description="Request timeout in seconds")
    batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE, ge=1, description="Ids per deep-info lookup"
    )
    max_concurrency: Optional[int] = Field(
        default=None,
        ge=1,
        description="Cap on in-flight deep-info lookups (None = unbounded)",
    )


# --- Requests ---


@dataclass(frozen=True)
class RequestDescriptor:
    """A single GET against the API, before auth is injected."""

    endpoint: str
    params: dict[str, ParamValue] = field(default_factory=dict)
    auth_required: bool = True


# --- Id selectors ---


@dataclass(frozen=True)
class NoIds:
    """Address the bare endpoint; the API answers with every known id."""


@dataclass(frozen=True)
class SingleId:
    """Address one resource as ``/endpoint/{id}``."""

    id: Identifier


@dataclass(frozen=True, init=False)
class ManyIds:
    """Address several resources as ``/endpoint?ids=a,b,c``.

    The ids are kept in canonical (sorted) order so that any permutation of
    the same ids produces the same query string, and therefore the same
    cache key.
    """

    ids: tuple[Identifier, ...]

    def __init__(self, ids: Sequence[Identifier]):
        object.__setattr__(self, "ids", tuple(sorted(ids, key=_id_sort_key)))

    def joined(self) -> str:
        """Return the comma-joined ``ids`` parameter value."""
        return ",".join(str(i) for i in self.ids)


IdSelector = Union[NoIds, SingleId, ManyIds]


def _id_sort_key(value: Identifier) -> tuple[int, Any]:
    # Numbers sort numerically and ahead of strings; strings sort lexically.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    return (1, str(value))


def select_ids(value: Any) -> IdSelector:
    """Turn a caller-supplied id argument into an :data:`IdSelector`.

    Args:
        value: ``None``, a single ``int``/``str`` id, a sequence of ids, or
            an existing selector (returned unchanged).

    Returns:
        The matching selector variant.

    Raises:
        UsageError: For booleans, mappings, or any other unsupported type.
    """
    if isinstance(value, (NoIds, SingleId, ManyIds)):
        return value
    if value is None:
        return NoIds()
    if isinstance(value, bool):
        raise UsageError(f"Invalid id: {value!r}")
    if isinstance(value, (int, str)):
        return SingleId(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            if isinstance(item, bool) or not isinstance(item, (int, str)):
                raise UsageError(f"Invalid id in list: {item!r}")
        return ManyIds(list(value))
    raise UsageError(f"Unsupported id argument of type {type(value).__name__}")
